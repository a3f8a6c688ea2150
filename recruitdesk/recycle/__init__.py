from .entity_registry import *
from .cascade import *
