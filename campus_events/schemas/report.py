"""Report API schemas."""

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

from campus_events.domain.enums import ReportReason


class ReportCreateRequest(BaseModel):
    """Payload for reporting an event."""

    reason: ReportReason
    message: str | None = Field(default=None, max_length=500)


class ReportResponse(BaseModel):
    """Stored report (returned to the reporter)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    event_id: str
    reason: ReportReason
    message: str | None = None
    created_at: AwareDatetime


class ReportStatusResponse(BaseModel):
    event_id: str
    has_reported: bool


class ReportedEventsResponse(BaseModel):
    """Events the current user has reported."""

    event_ids: list[str]
