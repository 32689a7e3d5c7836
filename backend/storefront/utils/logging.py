import logging
import sys

_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Install a single stdout handler on the ``storefront`` logger tree."""
    root = logging.getLogger("storefront")
    root.setLevel(level.upper())
    if not root.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(h)
    root.propagate = False


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
