# storefront/utils/logging.py
import logging
import sys

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_configured = False


def configure_logging(level: str = "INFO") -> None:
    """Jeden handler na stdout dla calego pakietu storefront."""
    global _configured

    root = logging.getLogger("storefront")
    root.setLevel(level)

    if not _configured:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)
        _configured = True


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
