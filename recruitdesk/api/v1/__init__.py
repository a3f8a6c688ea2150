from .permission_router import *
from .recycle_bin_router import *
from .user_router import *
