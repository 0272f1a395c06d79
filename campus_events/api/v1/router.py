"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from campus_events.api.v1.dependencies.
"""

from fastapi import APIRouter

from campus_events.api.v1.endpoints import events, health, moderation, reports

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(events.router, prefix="/events", tags=["events"])
api_router.include_router(reports.router, tags=["reports"])
api_router.include_router(moderation.router, prefix="/moderation", tags=["moderation"])
