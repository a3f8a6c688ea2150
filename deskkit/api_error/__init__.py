from .app_error import *
from .config_error import *
