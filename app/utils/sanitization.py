import re

_TAGS = re.compile(r'<[^>]*>')


def sanitize_string(v: str) -> str:
    if not isinstance(v, str):
        return v
    # Strip HTML tags, then surrounding whitespace
    return _TAGS.sub('', v).strip()
