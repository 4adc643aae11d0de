"""Routers package - API endpoint routers."""

from .health import router as health_router
from .commands import router as commands_router
from .keys import router as keys_router
from .arithmetic import router as arithmetic_router

__all__ = [
    "health_router",
    "commands_router",
    "keys_router",
    "arithmetic_router",
]
