# deskkit/__init__.py
"""Shared configuration, logging and error types."""

from .api_error import *
from .config import *
from .logger import logger, get_app_logger, AppLogger
