"""
Authentication helpers: turn the identity provider's JWT into an ``Actor``.

Accounts sign in with the managed identity provider; this service only
verifies the access token it issues. The token is read from the
``Authorization: Bearer`` header, falling back to the ``access_token`` cookie.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import HTTPException, Request, status
from jose import JWTError, jwt

from campushub.config import settings

COOKIE_KEY = "access_token"


@dataclass(frozen=True)
class Actor:
    """The authenticated caller of a request."""
    id: str
    email: str
    metadata: Dict[str, Any] = field(default_factory=dict)


# ═══════════════════════════════════════════════════════════════
#  Helpers
# ═══════════════════════════════════════════════════════════════

def create_access_token(
    actor_id: str,
    email: str = "",
    metadata: Optional[Dict[str, Any]] = None,
    expires_minutes: Optional[int] = None,
) -> str:
    """Create a signed JWT shaped like the identity provider's access tokens."""
    expire = datetime.now(timezone.utc) + timedelta(
        minutes=expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES
    )
    claims: Dict[str, Any] = {
        "sub": actor_id,
        "email": email,
        "user_metadata": metadata or {},
        "exp": expire,
    }
    if settings.JWT_AUDIENCE:
        claims["aud"] = settings.JWT_AUDIENCE
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.ALGORITHM)


def _read_token(request: Request) -> Optional[str]:
    header = request.headers.get("Authorization", "")
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return request.cookies.get(COOKIE_KEY)


def decode_actor(token: str) -> Actor:
    """Decode and verify a token; raises ``JWTError`` when it is not acceptable."""
    options = {} if settings.JWT_AUDIENCE else {"verify_aud": False}
    payload = jwt.decode(
        token,
        settings.JWT_SECRET,
        algorithms=[settings.ALGORITHM],
        audience=settings.JWT_AUDIENCE,
        options=options,
    )
    actor_id = str(payload.get("sub") or "").strip()
    if not actor_id:
        raise JWTError("Token has no subject")

    metadata = payload.get("user_metadata")
    return Actor(
        id=actor_id,
        email=payload.get("email") or "",
        metadata=metadata if isinstance(metadata, dict) else {},
    )


async def get_current_actor(request: Request) -> Actor:
    """FastAPI dependency: the authenticated actor, or 401."""
    token = _read_token(request)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated"
        )
    try:
        return decode_actor(token)
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token"
        )
