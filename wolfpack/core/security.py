"""Auth-provider JWT handling."""
from datetime import datetime, timedelta, timezone
from uuid import UUID

from jose import JWTError, jwt

from wolfpack.core.config import settings


def create_access_token(subject: str | UUID, expires_minutes: int | None = None) -> str:
    """Mint a token shaped like the auth provider's. Used by tooling and tests."""
    expire = datetime.now(timezone.utc) + timedelta(
        minutes=expires_minutes if expires_minutes is not None else settings.ACCESS_TOKEN_EXPIRE_MINUTES
    )
    to_encode = {"sub": str(subject), "exp": expire, "role": "authenticated"}
    if settings.AUTH_JWT_AUDIENCE:
        to_encode["aud"] = settings.AUTH_JWT_AUDIENCE
    return jwt.encode(to_encode, settings.AUTH_JWT_SECRET, algorithm=settings.AUTH_JWT_ALGORITHM)


def decode_token(token: str) -> dict | None:
    try:
        payload = jwt.decode(
            token,
            settings.AUTH_JWT_SECRET,
            algorithms=[settings.AUTH_JWT_ALGORITHM],
            audience=settings.AUTH_JWT_AUDIENCE,
            options={"verify_aud": bool(settings.AUTH_JWT_AUDIENCE)},
        )
        return payload
    except JWTError:
        return None
