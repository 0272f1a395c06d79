"""Bearer-token identity.

The auth collaborator issues HS256 tokens whose claims are sub (user id),
email, and role or roles. This module verifies them and turns the claims
into a CurrentUser; create_access_token exists for local tooling and tests.
"""

from datetime import timedelta
from typing import Any, cast

from jose import JWTError, jwt

from campus_events.application.dtos.user import CurrentUser
from campus_events.core.config import get_settings
from campus_events.shared.utils.datetime import utc_now


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
) -> str:
    """Sign claims (sub, email, role) with an exp claim.

    expires_delta defaults to settings.access_token_expire_minutes.
    """
    settings = get_settings()
    ttl = (
        expires_delta
        if expires_delta is not None
        else timedelta(minutes=settings.access_token_expire_minutes)
    )
    claims = {**data, "exp": utc_now() + ttl}
    token = jwt.encode(
        claims,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, token)


def verify_token(token: str) -> dict[str, Any]:
    """Return the verified claims of token.

    Raises:
        ValueError: Bad signature, expired, or no sub/exp claim.
    """
    settings = get_settings()
    try:
        return jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e


def user_from_claims(payload: dict[str, Any]) -> CurrentUser:
    """Build the signed-in user from verified claims.

    Raises:
        ValueError: If sub or email is missing.
    """
    user_id = payload.get("sub")
    email = payload.get("email")
    if not user_id or not email:
        raise ValueError("Token missing required claims: sub, email")
    role = payload.get("role")
    roles = payload.get("roles") or []
    admin_role = get_settings().admin_role
    return CurrentUser(
        id=str(user_id),
        email=str(email),
        is_admin=role == admin_role or admin_role in roles,
    )
