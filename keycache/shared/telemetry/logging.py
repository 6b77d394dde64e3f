"""Logging for the keycache logger hierarchy.

Every module logs under "keycache.*". The package installs a NullHandler
on import, so nothing is printed unless the host application configures
logging or calls setup_logging(). The root logger is never touched.
"""

import logging
import sys

from keycache.core.config import Settings, get_settings

LIBRARY_LOGGER = "keycache"
_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def install_null_handler() -> None:
    """Attach a NullHandler to the library logger once."""
    logger = logging.getLogger(LIBRARY_LOGGER)
    if not any(isinstance(h, logging.NullHandler) for h in logger.handlers):
        logger.addHandler(logging.NullHandler())


def setup_logging(
    settings: Settings | None = None,
    handler: logging.Handler | None = None,
) -> logging.Logger:
    """Send keycache logs to a handler (stdout by default).

    Level is DEBUG when settings.debug is True (cache hit/miss lines are
    logged at DEBUG), otherwise INFO. Calling again replaces the handler
    installed by the previous call instead of adding a second one.

    Args:
        settings: Settings to read debug from; loaded if omitted.
        handler: Destination handler; a stdout StreamHandler if omitted.

    Returns:
        The configured "keycache" logger.
    """
    settings = settings or get_settings()
    logger = logging.getLogger(LIBRARY_LOGGER)
    for existing in list(logger.handlers):
        if getattr(existing, "_keycache_handler", False):
            logger.removeHandler(existing)
    handler = handler or logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_FORMAT))
    handler._keycache_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if settings.debug else logging.INFO)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger inside the keycache hierarchy.

    Args:
        name: Module name; names outside "keycache" are nested under it.

    Returns:
        Logger instance.
    """
    if name == LIBRARY_LOGGER or name.startswith(LIBRARY_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LIBRARY_LOGGER}.{name}")
