"""
Payroll Core - Logging Setup

The library only creates module-level loggers; the embedding application
decides whether to call ``configure_logging``.
"""

import logging
from typing import Optional

from payroll_core.config import settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging with the standard format."""
    if level is None:
        level = "DEBUG" if settings.debug else settings.log_level
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
    # Quiet SQLAlchemy engine chatter unless echo is requested
    if not settings.database_echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
