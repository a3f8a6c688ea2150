# deskkit/logger/__init__.py
from .logger import *
