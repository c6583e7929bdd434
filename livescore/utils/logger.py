import logging
import os
from typing import Optional

_LOGGERS = {}

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def get_logger(name: str, *, level: Optional[str] = None) -> logging.Logger:
    """
    Create or retrieve a named logger under the "livescore" namespace.

    Parameters:
    - name: logger namespace (e.g. ingest.queue, extraction.llm_client)
    - level: level name; defaults to LIVESCORE_LOG_LEVEL or INFO
    """
    if name in _LOGGERS:
        return _LOGGERS[name]

    logger = logging.getLogger(f"livescore.{name}")
    logger.setLevel((level or os.getenv("LIVESCORE_LOG_LEVEL", "INFO")).upper())

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(console)

    logger.propagate = False
    _LOGGERS[name] = logger

    return logger
