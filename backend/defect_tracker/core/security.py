from datetime import datetime, timedelta, timezone

from fastapi import Response
from jose import jwt
from passlib.context import CryptContext

from defect_tracker.core.config import settings

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)


def create_access_token(email: str, role: str) -> str:
    issued = datetime.now(timezone.utc)
    expires = issued + timedelta(minutes=settings.JWT_EXPIRES_MIN)
    claims = {
        "sub": email,
        "role": role,
        "iat": int(issued.timestamp()),
        "exp": int(expires.timestamp()),
    }
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALG)


def token_subject(token: str) -> str | None:
    """Return the email stored in a session token; raises JWTError when the token is bad or expired."""
    claims = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALG])
    return claims.get("sub")


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        token,
        max_age=settings.JWT_EXPIRES_MIN * 60,
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
