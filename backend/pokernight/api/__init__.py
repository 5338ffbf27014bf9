from .auth import router as auth_router
from .tables import router as tables_router
from .groups import router as groups_router
from .users import router as users_router
from .public import router as public_router

__all__ = ["auth_router", "tables_router", "groups_router", "users_router", "public_router"]
