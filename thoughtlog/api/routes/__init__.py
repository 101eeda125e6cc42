"""
API Routes module - Endpoint definitions.

Each file in this module defines routes for a specific domain:
- tasks.py      : categorize-entry and generate-insights
- entries.py    : Journal entry endpoints
- categories.py : Category management
- insights.py   : Stored insight endpoints
- health.py     : Health check endpoints
"""
from thoughtlog.api.routes.categories import router as categories_router
from thoughtlog.api.routes.entries import router as entries_router
from thoughtlog.api.routes.health import router as health_router
from thoughtlog.api.routes.insights import router as insights_router
from thoughtlog.api.routes.tasks import router as tasks_router

__all__ = [
    "categories_router",
    "entries_router",
    "health_router",
    "insights_router",
    "tasks_router",
]
