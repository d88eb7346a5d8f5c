from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from spa_booking.core.config import settings

bearer_scheme = HTTPBearer(auto_error=False)

ROLE_CUSTOMER = "customer"
ROLE_OWNER = "owner"
ROLE_ADMIN = "admin"
_KNOWN_ROLES = {ROLE_CUSTOMER, ROLE_OWNER, ROLE_ADMIN}


@dataclass(frozen=True)
class CurrentUser:
    id: int
    role: str

    @property
    def is_customer(self) -> bool:
        return self.role == ROLE_CUSTOMER


def get_token_payload(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> dict:
    """Validate the bearer token issued by the Auth service.

    Returns the decoded JWT payload to downstream dependencies. Raises an HTTP 401
    error when the token is missing or invalid.
    """

    if credentials is None or not credentials.scheme or credentials.scheme.lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = credentials.credentials

    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
        )
    except JWTError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc

    return payload


def _resolve_user_id(payload: Dict[str, Any]) -> int:
    user_identifier = payload.get("sub") or payload.get("id")
    if user_identifier is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    try:
        return int(user_identifier)
    except (TypeError, ValueError) as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token") from exc


def _normalize_role(payload: Dict[str, Any]) -> str:
    role_value = payload.get("role") or payload.get("user_role")
    if isinstance(role_value, str) and role_value.strip().lower() in _KNOWN_ROLES:
        return role_value.strip().lower()
    return ROLE_CUSTOMER


def get_current_user(payload: dict = Depends(get_token_payload)) -> CurrentUser:
    return CurrentUser(id=_resolve_user_id(payload), role=_normalize_role(payload))


def require_roles(*roles: str) -> Callable[[CurrentUser], CurrentUser]:
    """Build a dependency that only lets the given roles through."""

    allowed = set(roles)

    def _dependency(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if current_user.role not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You do not have permission to perform this action",
            )
        return current_user

    return _dependency


__all__ = [
    "CurrentUser",
    "ROLE_ADMIN",
    "ROLE_CUSTOMER",
    "ROLE_OWNER",
    "get_current_user",
    "get_token_payload",
    "require_roles",
]
