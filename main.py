# main.py
import sys

from dotenv import load_dotenv

from deskkit import ConfigurationError, initialize_config, get_app_logger
from recruitdesk.api import create_app

load_dotenv()
try:
    config = initialize_config()
except ConfigurationError as e:
    # Can't use logger yet, but that's OK - this is a fatal startup error
    print(f"FATAL: Configuration error:\n{e}")
    sys.exit(1)

logger = get_app_logger(__name__)
logger.info(
    "Configuration loaded",
    environment=config.environment,
    version=config.app_version,
)

app = create_app(config)

__all__ = ["app", "config"]
