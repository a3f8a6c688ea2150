from .feature_store import *
from .resolver import *
