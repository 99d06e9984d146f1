"""Identity models derived from the bearer credential."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

# Keys under which an object-shaped role descriptor may carry its name.
ROLE_NAME_KEYS = ("roleName", "authority")


class RoleRef(BaseModel):
    """Canonical role reference. Every descriptor shape resolves to this."""

    model_config = ConfigDict(frozen=True)

    role_name: str


def resolve_role(descriptor: Any) -> RoleRef | None:
    """Resolve a bare string or ``{roleName|authority: ...}`` object to a RoleRef."""
    if isinstance(descriptor, RoleRef):
        return descriptor
    if isinstance(descriptor, str):
        return RoleRef(role_name=descriptor)
    if isinstance(descriptor, dict):
        for key in ROLE_NAME_KEYS:
            value = descriptor.get(key)
            if isinstance(value, str) and value:
                return RoleRef(role_name=value)
    logger.warning("Unknown role descriptor format: %r", descriptor)
    return None


class TokenPayload(BaseModel):
    """The decoded (not verified) middle segment of a credential."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    sub: str
    user_id: int = Field(alias="userId")
    roles: list[RoleRef] = Field(default_factory=list)
    exp: float | None = None

    @field_validator("roles", mode="before")
    @classmethod
    def _resolve_roles(cls, value: Any) -> list[RoleRef]:
        if value is None:
            return []
        if not isinstance(value, list):
            msg = "roles must be a sequence"
            raise ValueError(msg)  # noqa: TRY004
        return [ref for ref in (resolve_role(item) for item in value) if ref is not None]

    @field_validator("exp")
    @classmethod
    def _check_exp(cls, value: float | None) -> float | None:
        """Reject expiries that cannot be represented as a datetime, such as NaN or 1e20."""
        if value is None:
            return None
        try:
            datetime.fromtimestamp(value, tz=UTC)
        except (OverflowError, ValueError, OSError) as exc:
            msg = f"exp is not a representable timestamp: {value!r}"
            raise ValueError(msg) from exc
        return value

    @property
    def expires_at(self) -> datetime | None:
        if self.exp is None:
            return None
        return datetime.fromtimestamp(self.exp, tz=UTC)


class Identity(BaseModel):
    """Who the current session belongs to. Recomputed from the credential."""

    model_config = ConfigDict(frozen=True)

    subject: str
    user_id: int
    roles: tuple[RoleRef, ...] = ()
    expires_at: datetime | None = None

    @classmethod
    def from_payload(cls, payload: TokenPayload) -> Identity:
        return cls(
            subject=payload.sub,
            user_id=payload.user_id,
            roles=tuple(payload.roles),
            expires_at=payload.expires_at,
        )

    @property
    def role_names(self) -> frozenset[str]:
        return frozenset(role.role_name for role in self.roles)

    @property
    def primary_role(self) -> str | None:
        """First role, used for dashboard personalization only."""
        return self.roles[0].role_name if self.roles else None

    def has_role(self, name: str) -> bool:
        return name in self.role_names

    def has_any_role(self, names: Iterable[str]) -> bool:
        """True when any of ``names`` is held. A bare string counts as one role name."""
        if isinstance(names, str):
            names = {names}
        return not self.role_names.isdisjoint(names)

    def is_expired(self, now: datetime | None = None) -> bool:
        if self.expires_at is None:
            return False
        return self.expires_at <= (now or datetime.now(UTC))


class LoginResult(BaseModel):
    """Body returned by the login endpoint."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    token: str
    user_id: int | None = Field(default=None, alias="userId")
    username: str | None = None
    roles: list[Any] = Field(default_factory=list)
