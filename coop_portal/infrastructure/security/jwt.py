"""Bearer token handling for portal callers.

Tokens are HS256 JWTs issued by the portal's identity service; the subject
claim is the portal user id. Secret and algorithm come from core.config.
"""

from datetime import UTC, datetime, timedelta
from typing import Any, cast

from jose import JWTError, jwt

from coop_portal.core.config import get_settings


def create_access_token(
    user_id: str,
    expires_delta: timedelta | None = None,
    **extra_claims: Any,
) -> str:
    """Encode a token for user_id (claim sub). Used by tests and local tooling."""
    settings = get_settings()
    ttl = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    claims = {**extra_claims, "sub": user_id, "exp": datetime.now(UTC) + ttl}
    encoded = jwt.encode(
        claims,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def verify_token(token: str) -> dict[str, Any]:
    """Verify and decode a JWT, requiring exp and a non-empty sub.

    Raises:
        ValueError: If the token is invalid, expired, or has no subject.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    if not payload.get("sub"):
        raise ValueError("Token missing required claim: sub")
    return payload


def user_id_from_token(token: str | None) -> str:
    """Return the portal user id carried by a bearer token.

    Raises:
        ValueError: If the token is missing or fails verification.
    """
    if not token:
        raise ValueError("Missing bearer token")
    return str(verify_token(token)["sub"])
