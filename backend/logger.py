from datetime import datetime
from loguru import logger
import sys
import logging

from config import Config

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {module}.{function}:{line} - {message}"

# Reset default handlers and add sinks
logger.remove()
if Config.LOG_TO_FILE:
    Config.LOG_DIR.mkdir(parents=True, exist_ok=True)
    # Daily log file name like logs/log_2025-08-29.log
    log_file = Config.LOG_DIR / f"log_{datetime.now().strftime('%Y-%m-%d')}.log"
    logger.add(
        log_file,
        format=LOG_FORMAT,
        level=Config.LOG_LEVEL,
        encoding="utf-8",
        backtrace=True,
        diagnose=True,
        rotation="00:00",        # rotate at midnight
        retention="14 days",     # keep 14 days of logs
    )
if Config.LOG_TO_STDERR:
    logger.add(sys.stderr, format=LOG_FORMAT, level=Config.LOG_LEVEL, backtrace=True, diagnose=False)


# Intercept standard logging and route to Loguru so libraries using logging work
class InterceptHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        frame, depth = logging.currentframe(), 2
        # Walk back to the original caller outside the logging module
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1
        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


# Configure root logging to use the intercept handler (uvicorn, httpx, trafilatura)
logging.basicConfig(handlers=[InterceptHandler()], level=logging.INFO, force=True)

# Export the configured Loguru logger
__all__ = ["logger"]
