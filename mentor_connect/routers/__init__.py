from . import auth_router
from . import user_router
from . import connection_router

__all__ = [
    "auth_router",
    "user_router",
    "connection_router",
]
