"""Identity DTO supplied by the auth collaborator."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CurrentUser:
    """Signed-in user. is_admin grants access to the moderation queue."""

    id: str
    email: str
    is_admin: bool = False
