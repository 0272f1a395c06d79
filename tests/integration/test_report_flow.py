"""Integration tests: reports, escalation, and moderation against real SQLite repositories."""

from datetime import timedelta

import pytest
from sqlalchemy import delete, func, select

from campus_events.application.dtos.report import ReportCreate
from campus_events.application.services import (
    DateRangeResolver,
    EventQueryBuilder,
    ReportStatusCache,
)
from campus_events.application.use_cases import ModerationService, ReportLedger
from campus_events.domain.enums import EventStatus, ReportReason
from campus_events.domain.exceptions import (
    DuplicateReportError,
    InvalidTransitionError,
    NotFoundError,
    OwnerCannotReportError,
    StoreUnavailableError,
)
from campus_events.domain.moderation import ModerationStateMachine
from campus_events.infrastructure.persistence.models import Event, EventReport
from campus_events.infrastructure.persistence.repositories import (
    EventRepository,
    ReportRepository,
)
from campus_events.shared.utils.datetime import utc_now

pytestmark = pytest.mark.requires_db

THRESHOLD = 3


@pytest.fixture
def event_repo(db_session) -> EventRepository:
    return EventRepository(db_session)


@pytest.fixture
def report_repo(db_session) -> ReportRepository:
    return ReportRepository(db_session)


@pytest.fixture
def state_machine() -> ModerationStateMachine:
    return ModerationStateMachine(report_threshold=THRESHOLD)


@pytest.fixture
def ledger(event_repo, report_repo, state_machine) -> ReportLedger:
    return ReportLedger(event_repo, report_repo, state_machine, ReportStatusCache())


@pytest.fixture
def moderation(event_repo, report_repo, image_store, state_machine) -> ModerationService:
    return ModerationService(
        event_store=event_repo,
        report_store=report_repo,
        image_store=image_store,
        query_builder=EventQueryBuilder(DateRangeResolver()),
        state_machine=state_machine,
    )


async def test_threshold_reports_flip_status_exactly_once(
    make_event, ledger: ReportLedger, event_repo: EventRepository
):
    """Three distinct reporters move an active event to under_review on the third report."""
    event = await make_event()

    statuses = []
    for user in ("u1", "u2", "u3", "u4"):
        await ledger.submit_report(user, event.id, "spam")
        stored = await event_repo.get_by_id(event.id)
        statuses.append((stored.report_count, stored.status))

    assert statuses == [
        (1, EventStatus.ACTIVE),
        (2, EventStatus.ACTIVE),
        (3, EventStatus.UNDER_REVIEW),
        (4, EventStatus.UNDER_REVIEW),
    ]


async def test_increment_reports_status_change_once(make_event, event_repo: EventRepository):
    event = await make_event(report_count=1)
    rule = ModerationStateMachine(report_threshold=3).escalation_rule()

    second = await event_repo.atomic_increment_report_count(event.id, rule)
    third = await event_repo.atomic_increment_report_count(event.id, rule)
    fourth = await event_repo.atomic_increment_report_count(event.id, rule)

    assert (second.new_count, second.status_changed) == (2, False)
    assert (third.new_count, third.status, third.status_changed) == (
        3,
        EventStatus.UNDER_REVIEW,
        True,
    )
    assert (fourth.new_count, fourth.status_changed) == (4, False)


async def test_same_user_cannot_report_twice(
    make_event, ledger: ReportLedger, report_repo: ReportRepository, event_repo: EventRepository
):
    """The second report fails; exactly one row exists and keeps the first reason."""
    event = await make_event()

    await ledger.submit_report("u1", event.id, "spam")
    with pytest.raises(DuplicateReportError):
        await ledger.submit_report("u1", event.id, "scam")

    reports = await report_repo.list_active_for_events([event.id])
    assert [(r.user_id, r.reason) for r in reports] == [("u1", ReportReason.SPAM)]
    assert (await event_repo.get_by_id(event.id)).report_count == 1


async def test_duplicate_detected_by_the_store_without_cache(
    make_event, event_repo, report_repo, state_machine
):
    """Separate ledgers (fresh caches) still hit the unique constraint."""
    event = await make_event()
    await ReportLedger(event_repo, report_repo, state_machine).submit_report("u1", event.id, "spam")

    with pytest.raises(DuplicateReportError):
        await ReportLedger(event_repo, report_repo, state_machine).submit_report(
            "u1", event.id, "spam"
        )


async def test_author_cannot_report_even_when_flagged(make_event, ledger: ReportLedger):
    event = await make_event(author_id="owner", status="under_review", report_count=9)
    with pytest.raises(OwnerCannotReportError):
        await ledger.submit_report("owner", event.id, "spam")


async def test_has_reported_and_fetch_reported_ids(make_event, ledger: ReportLedger):
    first = await make_event(title="A")
    second = await make_event(title="B")
    await ledger.submit_report("u1", first.id, "spam")

    assert await ReportLedger(
        ledger.event_store, ledger.report_store, ledger.state_machine
    ).has_reported("u1", first.id)
    assert not await ledger.has_reported("u1", second.id)
    assert await ledger.fetch_reported_ids("u1") == {first.id}
    assert await ledger.fetch_reported_ids("u1", [second.id]) == set()
    assert await ledger.fetch_reported_ids("u2") == set()


async def test_approve_resets_count_and_keeps_reports_for_audit(
    make_event,
    ledger: ReportLedger,
    moderation: ModerationService,
    report_repo: ReportRepository,
):
    """Approval: active again, count 0, reports dismissed but still blocking re-reports."""
    event = await make_event()
    for user in ("u1", "u2", "u3", "u4", "u5"):
        await ledger.submit_report(user, event.id, "misinformation")

    approved = await moderation.approve_event(event.id)

    assert (approved.status, approved.report_count) == (EventStatus.ACTIVE, 0)
    assert await report_repo.list_active_for_events([event.id]) == []
    assert await report_repo.exists("u1", event.id)
    with pytest.raises(DuplicateReportError):
        await ledger.submit_report("u1", event.id, "spam")


async def test_approved_event_can_escalate_again(
    make_event, ledger: ReportLedger, moderation: ModerationService, event_repo
):
    event = await make_event(status="under_review", report_count=5)
    await moderation.approve_event(event.id)

    for user in ("n1", "n2", "n3"):
        await ledger.submit_report(user, event.id, "spam")

    assert (await event_repo.get_by_id(event.id)).status is EventStatus.UNDER_REVIEW


async def test_approve_active_event_is_rejected(make_event, moderation: ModerationService):
    event = await make_event()
    with pytest.raises(InvalidTransitionError):
        await moderation.approve_event(event.id)


async def test_reject_removes_event_reports_and_image(
    make_event,
    ledger: ReportLedger,
    moderation: ModerationService,
    event_repo: EventRepository,
    report_repo: ReportRepository,
    image_store,
):
    event = await make_event(image_url="memory://author-1/1.png")
    for user in ("u1", "u2", "u3"):
        await ledger.submit_report(user, event.id, "scam")

    await moderation.reject_event(event.id)

    assert await event_repo.get_by_id(event.id) is None
    assert not await report_repo.exists("u1", event.id)
    assert image_store.deleted == ["memory://author-1/1.png"]


async def test_review_queue_orders_by_report_count(
    make_event, moderation: ModerationService
):
    """Most reported first; past events under review are still listed."""
    await make_event(title="Few", status="under_review", report_count=3)
    await make_event(
        title="Many (past)",
        status="under_review",
        report_count=8,
        event_date=utc_now() - timedelta(days=3),
    )
    await make_event(title="Normal", status="active", report_count=1)

    queue = await moderation.list_under_review()
    assert [e.title for e in queue] == ["Many (past)", "Few"]


async def test_summarize_reasons(make_event, ledger: ReportLedger):
    event = await make_event()
    await ledger.submit_report("u1", event.id, "spam")
    await ledger.submit_report("u2", event.id, "spam", "Same flyer posted five times")
    await ledger.submit_report("u3", event.id, "hate_speech")

    summary = (await ledger.summarize_reasons([event.id]))[event.id]
    assert summary.counts == {"spam": 2, "hate_speech": 1}
    assert summary.messages == ["Same flyer posted five times"]


async def test_reports_cascade_with_their_event(
    make_event, ledger: ReportLedger, db_session, report_repo: ReportRepository
):
    """Foreign keys are enforced on SQLite: deleting the event row removes its reports."""
    event = await make_event()
    await ledger.submit_report("u1", event.id, "spam")

    await db_session.execute(delete(Event).where(Event.id == event.id))

    assert not await report_repo.exists("u1", event.id)


async def test_failed_increment_rolls_back_the_report(
    make_event, session_factory, state_machine: ModerationStateMachine, monkeypatch
):
    """Report insert and count increment commit together or not at all."""
    event = await make_event()

    async def _increment_fails(*_args, **_kwargs):
        raise StoreUnavailableError("atomic_increment_report_count")

    async with session_factory() as session:
        event_repo = EventRepository(session)
        monkeypatch.setattr(event_repo, "atomic_increment_report_count", _increment_fails)
        ledger = ReportLedger(event_repo, ReportRepository(session), state_machine)
        with pytest.raises(StoreUnavailableError):
            async with session.begin():
                await ledger.submit_report("u1", event.id, "spam")

    async with session_factory() as fresh:
        stored_reports = (
            await fresh.execute(select(func.count()).select_from(EventReport))
        ).scalar_one()
        stored = await EventRepository(fresh).get_by_id(event.id)
    assert stored_reports == 0
    assert stored.report_count == 0

    # The user is not locked out by a half-written report.
    async with session_factory() as retry, retry.begin():
        await ReportLedger(
            EventRepository(retry), ReportRepository(retry), state_machine
        ).submit_report("u1", event.id, "spam")
    async with session_factory() as fresh:
        assert (await EventRepository(fresh).get_by_id(event.id)).report_count == 1


@pytest.mark.parametrize(
    ("status", "count"),
    [
        ("active", 0),
        ("active", 1),
        ("active", 2),
        ("active", 5),
        ("under_review", 2),
        ("under_review", 3),
    ],
)
async def test_store_flip_agrees_with_should_escalate(
    make_event,
    event_repo: EventRepository,
    state_machine: ModerationStateMachine,
    status: str,
    count: int,
):
    event = await make_event(status=status, report_count=count)

    result = await event_repo.atomic_increment_report_count(
        event.id, state_machine.escalation_rule()
    )

    assert result.new_count == count + 1
    assert result.status_changed is state_machine.should_escalate(status, result.new_count)


async def test_review_queue_is_not_truncated(make_event, moderation: ModerationService):
    for i in range(105):
        await make_event(title=f"Flagged {i}", status="under_review", report_count=3)

    queue = await moderation.list_under_review()

    assert len(queue) == 105
    assert len({e.id for e in queue}) == 105


async def test_report_for_vanished_event_is_not_found(report_repo: ReportRepository):
    """A foreign key failure is not mistaken for a duplicate report."""
    with pytest.raises(NotFoundError):
        await report_repo.insert_report(
            ReportCreate(event_id="deleted-event", user_id="u1", reason=ReportReason.SPAM)
        )
    assert not await report_repo.exists("u1", "deleted-event")
