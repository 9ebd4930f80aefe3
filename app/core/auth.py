# app/core/auth.py
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from sqlmodel import Session

from app.core.config import get_settings
from app.database import get_session
from app.models.admin import Admin
from app.repositories.admin_repo import AdminRepository

settings = get_settings()

# HTTP Bearer scheme:
# - auto_error=False => missing Authorization header will NOT raise immediately
#   so we can answer with our own 401 detail.
bearer_scheme = HTTPBearer(auto_error=False)

admin_repo = AdminRepository()


def create_access_token(admin_id: uuid.UUID) -> str:
    """
    Issue a signed admin session token.

    Claims:
      - sub : admin id
      - role: always "admin"
      - exp : now + ACCESS_TOKEN_EXPIRE_MINUTES
    """
    now = datetime.now(timezone.utc)
    claims = {
        "sub": str(admin_id),
        "role": "admin",
        "iat": now,
        "exp": now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    }
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALG)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and verify an admin session token.

    Verification:
      - signature (JWT_ALG using JWT_SECRET)
      - expiration time (exp)

    Raises:
        HTTPException(401): if token is invalid/expired.
    """
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALG],
        )
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )


def require_admin(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: Session = Depends(get_session),
) -> Admin:
    """
    Resolve the signed-in admin from the bearer token.

    Flow:
      1. No Authorization header => 401.
      2. Decode token => extract 'sub' and 'role'.
      3. Look the admin row up; it must still exist.

    Raises:
        HTTPException(401): missing/invalid token or unknown admin.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )

    payload = decode_access_token(credentials.credentials)
    if payload.get("role") != "admin":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Admin access required",
        )

    try:
        admin_id = uuid.UUID(payload.get("sub") or "")
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid sub in token",
        )

    admin = admin_repo.get_by_id(session, admin_id)
    if admin is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Admin not found",
        )
    return admin
