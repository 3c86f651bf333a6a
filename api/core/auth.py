"""Bearer-token authentication.

Provides:
- HS256 JWT issuance for customers and vendors
- Token verification (signature, expiry, role)
- FastAPI dependencies for authenticated routes

A token carries ``sub`` (stringified id), ``role`` (``customer`` or
``vendor``), ``iat`` and ``exp``. Each gate accepts its own role only.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Annotated, Literal

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from core.config import get_settings
from core.errors import Unauthorized
from core.logger import bind_contextvars, get_logger

logger = get_logger(__name__)

Role = Literal["customer", "vendor"]

CUSTOMER_ROLE: Role = "customer"
VENDOR_ROLE: Role = "vendor"

_bearer = HTTPBearer(auto_error=False)


def create_access_token(subject_id: int, role: Role) -> str:
    settings = get_settings()
    now = datetime.now(UTC)
    payload = {
        "sub": str(subject_id),
        "role": role,
        "iat": now,
        "exp": now + timedelta(minutes=settings.jwt_expire_minutes),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, role: Role) -> int | None:
    """Return the subject id if the token is valid for ``role``, else None."""
    settings = get_settings()
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
    except JWTError:
        # Expired or tampered tokens are routine; not worth a warning
        return None

    if payload.get("role") != role:
        return None

    try:
        subject_id = int(payload.get("sub", ""))
    except (TypeError, ValueError):
        return None
    return subject_id if subject_id > 0 else None


def _authenticate(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None,
    role: Role,
) -> int:
    if credentials is None or not credentials.credentials:
        raise Unauthorized()

    subject_id = decode_access_token(credentials.credentials, role)
    if subject_id is None:
        raise Unauthorized()

    setattr(request.state, f"{role}_id", subject_id)
    bind_contextvars(**{f"{role}_id": subject_id})
    return subject_id


def require_vendor(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer)],
) -> int:
    """Raises 401 unless a valid vendor token is presented. Sets request.state.vendor_id."""
    return _authenticate(request, credentials, VENDOR_ROLE)


def require_customer(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer)],
) -> int:
    """Raises 401 unless a valid customer token is presented. Sets request.state.customer_id."""
    return _authenticate(request, credentials, CUSTOMER_ROLE)


VendorId = Annotated[int, Depends(require_vendor)]
CustomerId = Annotated[int, Depends(require_customer)]
