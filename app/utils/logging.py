# app/utils/logging.py
import logging
import sys

from app.utils.settings import LOG_LEVEL

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_initialized = False


def init_logging(level: str | int | None = None, force: bool = False) -> None:
    """
    Konfiguracja logowania na stderr, wywolywana raz przy starcie procesu.
    """
    global _initialized
    if _initialized and not force:
        return

    if level is None:
        level = LOG_LEVEL
    if isinstance(level, str):
        level = getattr(logging, level.strip().upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=force,
    )
    _initialized = True


def get_logger(name: str) -> logging.Logger:
    init_logging()
    return logging.getLogger(name)
