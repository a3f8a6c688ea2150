from .db_manager import *
from .storage import *
from .deps import *
