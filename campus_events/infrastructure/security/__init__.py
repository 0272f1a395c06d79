"""Security: JWT verification for the identity collaborator."""

from campus_events.infrastructure.security.jwt import (
    create_access_token,
    user_from_claims,
    verify_token,
)

__all__ = ["create_access_token", "user_from_claims", "verify_token"]
