import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from app.config import settings
from app.core.errors import UnauthorizedError
from app.db.session import get_db, is_storable_id
from app.db.models.user import User

logger = logging.getLogger(__name__)

# Reads "Authorization: Bearer <token>"; a missing header yields None instead of a 401
# so that the error goes through the common envelope.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def create_access_token(user_id: int, email: str, expires_delta: Optional[timedelta] = None) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode = {"id": user_id, "email": email, "exp": expire}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> dict:
    try:
        payload = jwt.decode(
            token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM], options={"require_exp": True}
        )
    except JWTError as e:
        logger.warning("JWT decode failed: %s", e)
        raise UnauthorizedError("Invalid or expired token")

    user_id = payload.get("id")
    if not isinstance(user_id, int) or not is_storable_id(user_id):
        logger.warning("JWT token has no usable 'id' claim")
        raise UnauthorizedError("Invalid or expired token")
    return payload


def get_current_user(token: Optional[str] = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> User:
    if not token:
        raise UnauthorizedError("Authentication token is required")

    payload = decode_access_token(token)

    user = db.get(User, payload["id"])
    if user is None:
        logger.warning("User not found for token", extra={"user_id": payload["id"]})
        raise UnauthorizedError("Invalid or expired token")

    return user
