# oncoliving/core/security.py
"""
Caller identity. Authentication itself happens upstream (auth gateway); it
forwards the authenticated user as x-user-id / x-user-role headers and proves
itself with the shared x-api-key.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from fastapi import Header, HTTPException, Request

from oncoliving.core.errors import AuthorizationError
from oncoliving.core.settings import settings


class Role(str, Enum):
    PATIENT = "PATIENT"
    ONCOLOGIST = "ONCOLOGIST"


@dataclass(frozen=True)
class CallerIdentity:
    user_id: Optional[int] = None
    role: Optional[Role] = None

    @property
    def authenticated(self) -> bool:
        return self.user_id is not None and self.role is not None


ANONYMOUS = CallerIdentity()


def require_authenticated(caller: CallerIdentity) -> int:
    if not caller.authenticated:
        raise AuthorizationError("Not authenticated", authenticated=False)
    return caller.user_id


def require_patient(caller: CallerIdentity, action: str = "submit quiz responses") -> int:
    if not caller.authenticated:
        raise AuthorizationError(f"Only patients can {action}", authenticated=False)
    if caller.role != Role.PATIENT:
        raise AuthorizationError(f"Only patients can {action}")
    return caller.user_id


def require_clinician(caller: CallerIdentity, action: str = "view patient history") -> int:
    if not caller.authenticated:
        raise AuthorizationError(f"Only oncologists can {action}", authenticated=False)
    if caller.role != Role.ONCOLOGIST:
        raise AuthorizationError(f"Only oncologists can {action}")
    return caller.user_id


# ---------------------------------------------------------------------------
# FastAPI dependencies
# ---------------------------------------------------------------------------
async def verify_api_key(request: Request):
    """
    Checks the x-api-key header against settings.API_KEY.
    """
    api_key = request.headers.get("x-api-key")
    if not api_key or api_key != settings.API_KEY:
        raise HTTPException(status_code=401, detail="Invalid or missing API key")


def get_caller(
    x_user_id: Optional[str] = Header(default=None),
    x_user_role: Optional[str] = Header(default=None),
) -> CallerIdentity:
    if not x_user_id or not x_user_role:
        return ANONYMOUS
    try:
        return CallerIdentity(user_id=int(x_user_id), role=Role(x_user_role.strip().upper()))
    except ValueError:
        # malformed identity headers are treated as no identity at all
        return ANONYMOUS
