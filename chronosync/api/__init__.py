# ChronoSync API
from chronosync.api.router import api_router

__all__ = ["api_router"]
