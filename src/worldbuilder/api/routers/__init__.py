"""API routers for different endpoint groups.

Routers:
- auth: Signup, login, logout and account removal
- health: Health check and monitoring endpoints
- series: Series owned by the caller
- books: Books owned by the caller
- resources: One generated router per world-building resource kind
"""

from .auth import router as auth_router
from .books import router as books_router
from .health import router as health_router
from .resources import build_resource_router, resource_routers
from .series import router as series_router

__all__ = [
    "auth_router",
    "books_router",
    "health_router",
    "series_router",
    "resource_routers",
    "build_resource_router",
]
