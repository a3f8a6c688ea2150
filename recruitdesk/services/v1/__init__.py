from .audit_service import *
from .permission_service import *
from .user_service import *
from .recycle_bin_service import *
from .service_container import *
