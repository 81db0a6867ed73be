import logging
import sys

from .constants import LOGGER_NAME

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(debug: bool = False) -> logging.Logger:
    """Attach a stderr handler to the package logger.

    Calling it again only adjusts the level, so it is safe to call from every
    entry point.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    if not any(getattr(h, "_httpatch", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._httpatch = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    return logger
