"""Explicit API session passed to every client call."""

from dataclasses import dataclass, field, replace

import httpx

DEFAULT_BASE_URL = "http://localhost:8000"
DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class ApiSession:
    """Connection and credentials for one signed-in (or anonymous) user.

    Sessions are immutable; signing in returns a new session carrying the
    tokens, so two users can be driven side by side.
    """

    base_url: str = DEFAULT_BASE_URL
    access_token: str | None = None
    refresh_token: str | None = None
    user: dict | None = None
    http: httpx.Client = field(
        default_factory=lambda: httpx.Client(timeout=DEFAULT_TIMEOUT), compare=False, repr=False
    )

    @property
    def is_authenticated(self) -> bool:
        return self.access_token is not None

    @property
    def is_admin(self) -> bool:
        return bool(self.user and self.user.get("role") == "ADMIN")

    def headers(self) -> dict[str, str]:
        if not self.access_token:
            return {}
        return {"Authorization": f"Bearer {self.access_token}"}

    def with_tokens(self, access_token: str, refresh_token: str, user: dict | None = None) -> "ApiSession":
        return replace(
            self,
            access_token=access_token,
            refresh_token=refresh_token,
            user=user if user is not None else self.user,
        )

    def signed_out(self) -> "ApiSession":
        return replace(self, access_token=None, refresh_token=None, user=None)
