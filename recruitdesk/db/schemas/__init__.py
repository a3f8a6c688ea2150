from .feature_types import *
from .result_schema import *
from .user_schemas import *
from .permission_schemas import *
