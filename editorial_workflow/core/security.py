"""JWT helpers for actor identity.

Identity and role storage live outside this service. Callers present a bearer
token whose ``sub`` claim is the actor ID and whose roles claim lists the
external role names assigned to that actor.
"""

from datetime import UTC, datetime, timedelta

import jwt
from jwt import exceptions as jwt_exceptions

from editorial_workflow.core.config import get_settings

settings = get_settings()


def create_access_token(
    actor_id: str,
    roles: list[str] | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a JWT access token for an actor.

    Args:
        actor_id: External identifier of the actor (``sub`` claim)
        roles: External role names assigned to the actor
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    expire = datetime.now(UTC) + (
        expires_delta or timedelta(minutes=settings.jwt_access_token_expire_minutes)
    )
    to_encode = {
        "sub": actor_id,
        settings.jwt_roles_claim: list(roles or []),
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> dict | None:
    """Decode and validate a JWT token.

    Returns:
        Decoded token payload if valid, None otherwise
    """
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt_exceptions.PyJWTError:
        return None


def roles_from_claims(payload: dict) -> set[str]:
    """Extract role names from a decoded token payload.

    Accepts either a list claim or a comma-separated string.
    """
    raw = payload.get(settings.jwt_roles_claim)
    if raw is None:
        return set()
    if isinstance(raw, str):
        return {item.strip() for item in raw.split(",") if item.strip()}
    return {str(item) for item in raw if str(item).strip()}
