import os
import time
from functools import wraps

from dotenv import find_dotenv, load_dotenv
from loguru import logger
from rich.logging import RichHandler

from pbxsync.utils.rich_console import get_console

VALID_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def get_log_level(verbose: bool = False) -> str:
    """Log level from ``PBXSYNC_LOG_LEVEL``; ``--verbose`` forces DEBUG."""
    if verbose:
        return "DEBUG"
    level = os.getenv("PBXSYNC_LOG_LEVEL", "INFO").upper()
    if level not in VALID_LEVELS:
        get_console().print(f"Invalid log level: {level}. Using INFO.", style="bold yellow")
        level = "INFO"
    return level


def is_debug_mode() -> bool:
    return os.getenv("PBXSYNC_DEBUG", "").lower() in ["true", "1", "yes"]


def configure_logging(verbose: bool = False) -> None:
    """
    Route loguru through a rich handler, plus a file sink in debug mode.

    Environment variables (also read from ``.env``):
        PBXSYNC_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL
        PBXSYNC_DEBUG: also log to a file (true, 1, yes)
        PBXSYNC_LOG_FILE: log file path (default: pbxsync.log)
    """
    load_dotenv(find_dotenv(usecwd=True))
    level = get_log_level(verbose)

    logger.remove()
    logger.add(
        RichHandler(console=get_console(), rich_tracebacks=True, show_path=False),
        level=level,
        format="{message}",
    )
    if is_debug_mode():
        log_file = os.getenv("PBXSYNC_LOG_FILE", "pbxsync.log")
        logger.add(log_file, level=level)


def timeit(func):
    """
    Decorator that logs the execution time of the decorated function.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        start = time.perf_counter()
        result = func(*args, **kwargs)
        elapsed = time.perf_counter() - start
        logger.debug(f"{func.__qualname__} executed in {elapsed:.6f}s")
        return result
    return wrapper
