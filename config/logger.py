import logging
import sys
import types

from loguru import logger

from config.app_settings import settings

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

# transport and client libraries only speak up on problems
QUIET_LOGGERS: dict[str, str] = {
    "httpx": "WARNING",
    "httpcore": "WARNING",
    "redis": "WARNING",
    "asyncio": "WARNING",
}


def configure_loguru(level: str | None = None) -> None:
    sink_level = (level or settings.LOG_LEVEL).upper()
    logger.remove()
    logger.add(sys.stdout, level=sink_level, format=LOG_FORMAT, colorize=True)

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    logging.getLogger().setLevel("WARNING")
    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)
    logger.debug(f"logging_configured level={sink_level} environment={settings.ENVIRONMENT}")


class InterceptHandler(logging.Handler):
    """Route stdlib ``logging`` records into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        if record.levelno < _resolve_level(settings.LOG_LEVEL):
            return
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # point loguru at the caller, not at the logging module
        frame: types.FrameType | None = logging.currentframe()
        depth = 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1
        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelNamesMapping().get(level.upper())
    if resolved is None:
        raise ValueError(f"Unknown log level: {level}")
    return resolved


__all__ = ["InterceptHandler", "configure_loguru"]
