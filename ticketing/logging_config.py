import logging
import sys

from ticketing.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

def setup_logging(level: str = settings.LOG_LEVEL) -> logging.Logger:
    """Configure the application logger once and return it"""
    app_logger = logging.getLogger("ticketing")
    if not app_logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        app_logger.addHandler(handler)
    app_logger.setLevel(level.upper())
    return app_logger

logger = setup_logging()
