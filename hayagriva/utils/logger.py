import logging
from typing import Dict, Optional

_LOGGERS: Dict[str, logging.Logger] = {}
_LEVEL: int = logging.INFO


def set_log_level(level: str) -> None:
    """Apply a level name (e.g. "DEBUG") to every logger handed out so far."""
    global _LEVEL
    _LEVEL = logging.getLevelName(level.upper()) if isinstance(level, str) else level
    logging.getLogger("hayagriva").setLevel(_LEVEL)
    for logger in _LOGGERS.values():
        logger.setLevel(_LEVEL)


def get_logger(name: str = "Hayagriva", level: Optional[int] = None) -> logging.Logger:
    if name in _LOGGERS:
        return _LOGGERS[name]

    logger = logging.getLogger(name)
    logger.setLevel(level if level is not None else _LEVEL)

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt="[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.propagate = False

    _LOGGERS[name] = logger
    return logger
