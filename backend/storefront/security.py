"""
Bearer-token auth gate.

Tokens are HS256 JWTs signed with ``settings.SECRET_KEY`` carrying the user id
in ``sub``. Issuing tokens to end users happens outside this service;
``create_access_token`` exists for seeding and tests.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from storefront.config import settings
from storefront.db import get_db
from storefront.errors import Forbidden, Unauthorized
from storefront.models.user import User
from storefront.repositories.user_repo import UserRepository

ALGORITHM = "HS256"

_bearer = HTTPBearer(auto_error=False)


def create_access_token(user_id: int, ttl_seconds: Optional[int] = None) -> str:
    now = datetime.now(timezone.utc)
    ttl = ttl_seconds if ttl_seconds is not None else settings.ACCESS_TOKEN_TTL_SECONDS
    payload = {"sub": str(user_id), "iat": now, "exp": now + timedelta(seconds=ttl)}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> int:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise Unauthorized("Your token has expired! Please log in again.")
    except jwt.InvalidTokenError:
        raise Unauthorized("Invalid token. Please log in again!")
    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise Unauthorized("Invalid token. Please log in again!")


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    db: Session = Depends(get_db),
) -> User:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise Unauthorized("You are not logged in! Please log in to get access.")
    user_id = decode_access_token(credentials.credentials)
    user = UserRepository(db).get(user_id)
    if not user:
        raise Unauthorized("The user belonging to this token no longer exists.")
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise Forbidden("You do not have permission to perform this action")
    return user
