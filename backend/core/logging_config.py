"""
Root logging setup, called once from the app lifespan and from init_db.
"""
import logging
import sys
from typing import Optional

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Driver and imaging chatter stays at WARNING regardless of LOG_LEVEL
QUIET_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "asyncpg", "passlib", "PIL")


def setup_logging(level: str = "INFO", log_format: Optional[str] = None) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=log_format or DEFAULT_FORMAT,
        stream=sys.stdout,
        force=True,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
