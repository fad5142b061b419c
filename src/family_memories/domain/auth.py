"""Domain models for authentication."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SessionPrincipal:
    """The authenticated actor."""

    username: str
    role: str


@dataclass(frozen=True)
class IssuedToken:
    """A signed token and the principal it was issued for."""

    token: str
    principal: SessionPrincipal
