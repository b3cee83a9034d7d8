"""
Key renaming between the storage shape (snake_case) and the API shape (camelCase).

The two directions are inverses only for keys built from lowercase words
joined by single underscores, such as ``completed_at`` or ``token_expire_at``.
Leading, trailing or doubled underscores and segments starting with a digit
(``item_2``) do not survive a round trip. Every column name we expose has the
simple shape.
"""
import re

_CAPITAL = re.compile(r"([A-Z])")


def snake_to_camel(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def camel_to_snake(key: str) -> str:
    return _CAPITAL.sub(lambda m: "_" + m.group(1).lower(), key)


def _rename_keys(value, rename):
    if isinstance(value, dict):
        return {rename(k) if isinstance(k, str) else k: _rename_keys(v, rename) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_rename_keys(v, rename) for v in value]
    return value


def to_camel_case(value):
    """Recursively rename every dict key from this_case to thisCase."""
    return _rename_keys(value, snake_to_camel)


def to_snake_case(value):
    """Recursively rename every dict key from thisCase to this_case.

    Only undoes ``to_camel_case`` for simple lowercase keys; see the module
    docstring.
    """
    return _rename_keys(value, camel_to_snake)
