# ChronoSync Models
from chronosync.models.base import BaseModel
from chronosync.models.firm import Firm
from chronosync.models.session_token import SessionToken
from chronosync.models.user import User

__all__ = [
    "BaseModel",
    "Firm",
    "SessionToken",
    "User",
]
