"""Moderation state machine: event status transitions driven by reports and admin decisions.

Pure transition table. It does not perform writes; the store applies the
escalation rule atomically with the report-count increment, and the
moderation use case applies admin decisions.

    active        --report threshold reached--> under_review
    under_review  --admin approved-----------> active        (report count reset)
    under_review  --admin rejected-----------> rejected      (event + image deleted)
    active/under_review --owner deleted------> (removed)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from campus_events.domain.enums import EventStatus, ModerationTrigger
from campus_events.domain.exceptions import InvalidTransitionError


@dataclass(frozen=True)
class EscalationRule:
    """Threshold rule handed to the store so the flip happens in the same write as the increment."""

    from_status: EventStatus
    to_status: EventStatus
    threshold: int

    def applies(self, status: EventStatus | str, report_count: int) -> bool:
        """Return True if an event in status with report_count (after the increment) flips."""
        return EventStatus(status) is self.from_status and report_count >= self.threshold


class ModerationStateMachine:
    """Transition table for event moderation.

    The report threshold is configuration, injected once at construction.
    OWNER_DELETED has no target status: the event is removed.
    """

    TRANSITIONS: ClassVar[dict[tuple[EventStatus, ModerationTrigger], EventStatus | None]] = {
        (EventStatus.ACTIVE, ModerationTrigger.REPORT_THRESHOLD_REACHED): EventStatus.UNDER_REVIEW,
        (EventStatus.UNDER_REVIEW, ModerationTrigger.ADMIN_APPROVED): EventStatus.ACTIVE,
        (EventStatus.UNDER_REVIEW, ModerationTrigger.ADMIN_REJECTED): EventStatus.REJECTED,
        (EventStatus.ACTIVE, ModerationTrigger.OWNER_DELETED): None,
        (EventStatus.UNDER_REVIEW, ModerationTrigger.OWNER_DELETED): None,
    }

    def __init__(self, report_threshold: int) -> None:
        if report_threshold < 1:
            raise ValueError("report_threshold must be at least 1")
        self.report_threshold = report_threshold

    def next_status(
        self, current: EventStatus | str, trigger: ModerationTrigger
    ) -> EventStatus | None:
        """Return the status after applying trigger (None means the event is removed).

        Raises:
            InvalidTransitionError: If trigger is not allowed from current.
        """
        key = (EventStatus(current), trigger)
        if key not in self.TRANSITIONS:
            raise InvalidTransitionError(EventStatus(current).value, trigger.value)
        return self.TRANSITIONS[key]

    def should_escalate(self, current: EventStatus | str, report_count: int) -> bool:
        """Return True if an event with this status and active report count moves to under_review.

        Only an active event escalates, so the flip happens once per review cycle.
        """
        return self.escalation_rule().applies(current, report_count)

    def escalation_rule(self) -> EscalationRule:
        """Rule the store evaluates inside the atomic increment."""
        return EscalationRule(
            from_status=EventStatus.ACTIVE,
            to_status=self.TRANSITIONS[
                (EventStatus.ACTIVE, ModerationTrigger.REPORT_THRESHOLD_REACHED)
            ],
            threshold=self.report_threshold,
        )
