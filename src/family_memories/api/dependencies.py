"""Shared FastAPI dependencies."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Header, Request

from family_memories.domain.auth import SessionPrincipal  # noqa: TC001

if TYPE_CHECKING:
    from family_memories.containers import AppContainer


def get_container(request: Request) -> AppContainer:
    """Return the container attached to the running app."""
    return request.app.state.container


async def require_principal(
    request: Request,
    authorization: str | None = Header(default=None),
) -> SessionPrincipal:
    """Ensure requests carry a valid bearer token."""
    container = get_container(request)
    return container.auth_service.verify(_bearer_token(authorization))


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None
