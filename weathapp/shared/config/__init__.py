"""Shared configuration"""
from .settings import SEARCH_DEBOUNCE_SECONDS, CITIES_TABLE_NAME, AWS_REGION
from .logger_config import get_logger, logger, bind_session

__all__ = ['SEARCH_DEBOUNCE_SECONDS', 'CITIES_TABLE_NAME', 'AWS_REGION', 'get_logger', 'logger', 'bind_session']
