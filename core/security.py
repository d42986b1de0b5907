"""
Password hashing and bearer token handling.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from passlib.context import CryptContext

from core.config import settings
from core.exceptions import AuthError

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

bearer_scheme = HTTPBearer(auto_error=False)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(
    volunteer_id: int,
    email: str,
    name: str,
    role: str = "volunteer",
    remember_me: bool = False,
) -> str:
    """Sign a token carrying the volunteer's identity claims."""
    days = settings.REMEMBER_ME_EXPIRE_DAYS if remember_me else settings.ACCESS_TOKEN_EXPIRE_DAYS
    now = datetime.now(timezone.utc)
    payload = {
        "id": volunteer_id,
        "email": email,
        "role": role,
        "name": name,
        "iat": now,
        "exp": now + timedelta(days=days),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """Verify signature and expiry. Raises AuthError (403) on any failure."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except jwt.PyJWTError as e:
        raise AuthError("Invalid or expired token", status_code=403) from e

    if not isinstance(payload.get("id"), int):
        raise AuthError("Invalid or expired token", status_code=403)
    return payload


async def get_token_payload(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Dict[str, Any]:
    if credentials is None or not credentials.credentials:
        raise AuthError("Access token required")
    return decode_access_token(credentials.credentials)


async def get_current_volunteer_id(
    payload: Dict[str, Any] = Depends(get_token_payload),
) -> int:
    return payload["id"]
