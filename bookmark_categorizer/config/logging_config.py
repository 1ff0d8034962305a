import logging
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging for entry points (library modules only get loggers)"""
    if level is None:
        from .config import Config
        level = Config.LOG_LEVEL

    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler()]
    )
