"""FastAPI dependencies (composition root).

Repositories and services are built per request. Read routes use get_db;
write routes use get_db_transactional so a report insert and its count
increment commit together. Within one request every dependency shares the
same session and the same ReportStatusCache.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.application.dtos.user import CurrentUser
from campus_events.application.interfaces.services import IImageStore
from campus_events.application.services import (
    DateRangeResolver,
    EventQueryBuilder,
    ReportStatusCache,
)
from campus_events.application.use_cases import EventService, ModerationService, ReportLedger
from campus_events.core.config import Settings, get_settings
from campus_events.domain.entities.event import EventSchedulePolicy
from campus_events.domain.exceptions import AuthenticationError, PermissionDeniedError
from campus_events.domain.moderation import ModerationStateMachine
from campus_events.infrastructure.external.storage import ImageStoreFactory
from campus_events.infrastructure.persistence.database import get_db, get_db_transactional
from campus_events.infrastructure.persistence.repositories import (
    EventRepository,
    ReportRepository,
)
from campus_events.infrastructure.security.jwt import user_from_claims, verify_token
from campus_events.shared.utils.datetime import get_zone

_http_bearer = HTTPBearer(auto_error=False)

SettingsDep = Annotated[Settings, Depends(get_settings)]


# ---- Identity ----


async def get_current_user_optional(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
) -> CurrentUser | None:
    """Return current user from JWT if present and valid; else None."""
    if not credentials:
        return None
    try:
        return user_from_claims(verify_token(credentials.credentials))
    except ValueError:
        return None


async def get_current_user(
    current_user: Annotated[CurrentUser | None, Depends(get_current_user_optional)],
) -> CurrentUser:
    """Return current user from JWT; raise AuthenticationError (401) if missing or invalid."""
    if current_user is None:
        raise AuthenticationError("Please sign in to continue")
    return current_user


async def require_admin(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Return current user if admin; else PermissionDeniedError (403)."""
    if not current_user.is_admin:
        raise PermissionDeniedError(
            resource="moderation",
            action="review",
            message="Admin access required",
        )
    return current_user


# ---- Domain collaborators derived from settings ----


def get_query_builder(settings: SettingsDep) -> EventQueryBuilder:
    return EventQueryBuilder(
        DateRangeResolver(get_zone(settings.campus_timezone)),
        max_page_size=settings.max_page_size,
    )


def get_state_machine(settings: SettingsDep) -> ModerationStateMachine:
    return ModerationStateMachine(report_threshold=settings.report_threshold)


def get_schedule_policy(settings: SettingsDep) -> EventSchedulePolicy:
    return EventSchedulePolicy(
        zone=get_zone(settings.campus_timezone),
        start_hour=settings.office_hours_start,
        end_hour=settings.office_hours_end,
        max_lead_days=settings.max_event_lead_days,
    )


def get_report_status_cache() -> ReportStatusCache:
    """One cache per request (FastAPI caches a dependency's value within a request)."""
    return ReportStatusCache()


def get_image_store(request: Request, settings: SettingsDep) -> IImageStore:
    """Image store created at startup (lifespan), or lazily on first request."""
    store = getattr(request.app.state, "image_store", None)
    if store is None:
        store = ImageStoreFactory.create_image_store(settings)
        request.app.state.image_store = store
    return store


# ---- Repositories ----


async def get_event_repo(db: Annotated[AsyncSession, Depends(get_db)]) -> EventRepository:
    return EventRepository(db)


async def get_event_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> EventRepository:
    return EventRepository(db)


async def get_report_repo(db: Annotated[AsyncSession, Depends(get_db)]) -> ReportRepository:
    return ReportRepository(db)


async def get_report_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> ReportRepository:
    return ReportRepository(db)


# ---- Services ----


def _build_event_service(
    event_repo: EventRepository,
    image_store: IImageStore,
    query_builder: EventQueryBuilder,
    schedule_policy: EventSchedulePolicy,
    state_machine: ModerationStateMachine,
    settings: Settings,
) -> EventService:
    return EventService(
        event_store=event_repo,
        image_store=image_store,
        query_builder=query_builder,
        schedule_policy=schedule_policy,
        state_machine=state_machine,
        include_under_review=settings.public_include_under_review,
        max_image_bytes=settings.max_image_bytes,
    )


async def get_event_service(
    event_repo: Annotated[EventRepository, Depends(get_event_repo)],
    image_store: Annotated[IImageStore, Depends(get_image_store)],
    query_builder: Annotated[EventQueryBuilder, Depends(get_query_builder)],
    schedule_policy: Annotated[EventSchedulePolicy, Depends(get_schedule_policy)],
    state_machine: Annotated[ModerationStateMachine, Depends(get_state_machine)],
    settings: SettingsDep,
) -> EventService:
    """EventService over a read session (listings)."""
    return _build_event_service(
        event_repo, image_store, query_builder, schedule_policy, state_machine, settings
    )


async def get_event_service_for_write(
    event_repo: Annotated[EventRepository, Depends(get_event_repo_for_write)],
    image_store: Annotated[IImageStore, Depends(get_image_store)],
    query_builder: Annotated[EventQueryBuilder, Depends(get_query_builder)],
    schedule_policy: Annotated[EventSchedulePolicy, Depends(get_schedule_policy)],
    state_machine: Annotated[ModerationStateMachine, Depends(get_state_machine)],
    settings: SettingsDep,
) -> EventService:
    """EventService over a transactional session (create, update, delete)."""
    return _build_event_service(
        event_repo, image_store, query_builder, schedule_policy, state_machine, settings
    )


async def get_report_ledger(
    event_repo: Annotated[EventRepository, Depends(get_event_repo)],
    report_repo: Annotated[ReportRepository, Depends(get_report_repo)],
    state_machine: Annotated[ModerationStateMachine, Depends(get_state_machine)],
    cache: Annotated[ReportStatusCache, Depends(get_report_status_cache)],
) -> ReportLedger:
    """ReportLedger over a read session (has-reported lookups)."""
    return ReportLedger(event_repo, report_repo, state_machine, cache)


async def get_report_ledger_for_write(
    event_repo: Annotated[EventRepository, Depends(get_event_repo_for_write)],
    report_repo: Annotated[ReportRepository, Depends(get_report_repo_for_write)],
    state_machine: Annotated[ModerationStateMachine, Depends(get_state_machine)],
    cache: Annotated[ReportStatusCache, Depends(get_report_status_cache)],
) -> ReportLedger:
    """ReportLedger over a transactional session (report submission, moderation queue)."""
    return ReportLedger(event_repo, report_repo, state_machine, cache)


async def get_moderation_service(
    event_repo: Annotated[EventRepository, Depends(get_event_repo_for_write)],
    report_repo: Annotated[ReportRepository, Depends(get_report_repo_for_write)],
    image_store: Annotated[IImageStore, Depends(get_image_store)],
    query_builder: Annotated[EventQueryBuilder, Depends(get_query_builder)],
    state_machine: Annotated[ModerationStateMachine, Depends(get_state_machine)],
) -> ModerationService:
    return ModerationService(
        event_store=event_repo,
        report_store=report_repo,
        image_store=image_store,
        query_builder=query_builder,
        state_machine=state_machine,
    )
