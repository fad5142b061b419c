"""Login and token verification endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from family_memories.api.dependencies import get_container, require_principal
from family_memories.api.models import LoginRequest  # noqa: TC001
from family_memories.domain.auth import SessionPrincipal  # noqa: TC001

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login")
async def login(body: LoginRequest, request: Request) -> dict[str, object]:
    """Exchange username and password for a signed token."""
    issued = get_container(request).auth_service.login(body.username, body.password)
    return {
        "success": True,
        "token": issued.token,
        "user": {
            "username": issued.principal.username,
            "role": issued.principal.role,
        },
    }


@router.get("/verify")
async def verify(
    principal: SessionPrincipal = Depends(require_principal),
) -> dict[str, object]:
    """Return the principal behind a valid token."""
    return {
        "success": True,
        "valid": True,
        "user": {"username": principal.username, "role": principal.role},
    }


@router.post("/logout")
async def logout() -> dict[str, object]:
    """Tokens are stateless; the client simply drops its copy."""
    return {"success": True, "message": "Logged out successfully"}
