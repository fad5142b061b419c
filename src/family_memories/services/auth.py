"""Single-account authentication with signed tokens."""

import secrets
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import jwt

from family_memories.domain.auth import IssuedToken, SessionPrincipal
from family_memories.services.errors import AuthenticationFailed, ValidationFailed

ADMIN_ROLE = "admin"


@dataclass
class AuthService:
    """Issues and verifies tokens for the configured account."""

    username: str
    password: str
    secret: str
    algorithm: str = "HS256"
    expires_in: timedelta = timedelta(days=7)

    def login(self, username: str | None, password: str | None) -> IssuedToken:
        """Exchange credentials for a signed token."""
        if not username or not password:
            raise ValidationFailed("Username and password are required")
        valid_user = secrets.compare_digest(
            username.encode(), self.username.encode()
        )
        valid_password = secrets.compare_digest(
            password.encode(), self.password.encode()
        )
        if not (valid_user and valid_password):
            raise AuthenticationFailed("Invalid credentials")
        principal = SessionPrincipal(username=username, role=ADMIN_ROLE)
        now = datetime.now(tz=UTC)
        token = jwt.encode(
            {
                "username": principal.username,
                "role": principal.role,
                "iat": now,
                "exp": now + self.expires_in,
            },
            self.secret,
            algorithm=self.algorithm,
        )
        return IssuedToken(token=token, principal=principal)

    def verify(self, token: str | None) -> SessionPrincipal:
        """Validate signature and expiry and return the principal."""
        if not token:
            raise AuthenticationFailed("No token provided")
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.PyJWTError as exc:
            raise AuthenticationFailed("Invalid token") from exc
        username = payload.get("username")
        if not username:
            raise AuthenticationFailed("Invalid token")
        return SessionPrincipal(
            username=str(username), role=str(payload.get("role", ADMIN_ROLE))
        )
