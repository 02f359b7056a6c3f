"""API routers."""

from babylog.api.analysis import router as analysis_router
from babylog.api.custom_event_types import router as custom_event_types_router
from babylog.api.events import router as events_router
from babylog.api.health import router as health_router
from babylog.api.profiles import router as profiles_router

__all__ = [
    "analysis_router",
    "custom_event_types_router",
    "events_router",
    "health_router",
    "profiles_router",
]
