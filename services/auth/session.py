from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Mapping


class AuthEvent(str, Enum):
    INITIAL_SESSION = "INITIAL_SESSION"
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"


@dataclass(frozen=True)
class AuthSession:
    access_token: str
    refresh_token: str | None = None
    expires_at: datetime | None = None
    user_email: str | None = None

    @classmethod
    def from_token_response(
        cls, data: Mapping[str, Any], *, now: datetime | None = None
    ) -> "AuthSession":
        access_token = data.get("access_token")
        if not access_token:
            raise ValueError("В ответе провайдера нет access_token")
        now = now or datetime.now()
        expires_in = data.get("expires_in")
        expires_at = (
            now + timedelta(seconds=int(expires_in)) if expires_in is not None else None
        )
        user = data.get("user") or {}
        return cls(
            access_token=access_token,
            refresh_token=data.get("refresh_token"),
            expires_at=expires_at,
            user_email=user.get("email") if isinstance(user, Mapping) else None,
        )

    @property
    def is_expired(self) -> bool:
        return self.expires_at is not None and datetime.now() >= self.expires_at
