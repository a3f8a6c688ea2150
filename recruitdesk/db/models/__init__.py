from .db_base_model import *
from .user_table import *
from .candidate_table import *
from .tracking_tables import *
from .employer_table import *
from .audit_log_table import *
