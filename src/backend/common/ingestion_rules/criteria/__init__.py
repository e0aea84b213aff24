from .record_type import RECORD_TYPE
from .title_keywords import TITLE_KEYWORDS
from .deal_stages import DEAL_STAGES
from .selected_users import SELECTED_USERS

__all__ = [
    "RECORD_TYPE",
    "TITLE_KEYWORDS",
    "DEAL_STAGES",
    "SELECTED_USERS",
]
