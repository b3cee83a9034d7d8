import logging
import sys


def setup_logging(level: str | int = logging.INFO) -> None:
    """
    Send application logs to stderr with timestamps.

    Safe to call more than once (e.g. per gunicorn worker); existing root
    handlers are replaced rather than stacked.
    """
    root = logging.getLogger()
    root.setLevel(level)

    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s [%(process)d] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    root.addHandler(handler)

    # SQL echo is noisy; only surface problems
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
