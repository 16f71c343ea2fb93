from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class RegistrationRequest:
    """Input for creating an account. Never persisted as-is."""
    email: str
    password: str = field(repr=False)
    first_name: str = ''
    last_name: str = ''


@dataclass
class LoginRequest:
    """Credentials for login and activation resend."""
    email: str
    password: str = field(repr=False)


@dataclass
class UserRecord:
    """Domain model representing a stored user."""
    id: str
    first_name: str
    last_name: str
    email: str
    password_hash: str = field(repr=False)
    activated: bool
    created_at: datetime
    updated_at: datetime


@dataclass
class UserInfo:
    """Outward-facing view of a user. Carries no password material."""
    id: str
    first_name: str
    last_name: str
    email: str
    activated: bool
    created_at: datetime
    updated_at: datetime
    token: str | None = None

    @classmethod
    def from_record(cls, record: UserRecord, token: str | None = None) -> "UserInfo":
        return cls(
            id=record.id,
            first_name=record.first_name,
            last_name=record.last_name,
            email=record.email,
            activated=record.activated,
            created_at=record.created_at,
            updated_at=record.updated_at,
            token=token,
        )


@dataclass(frozen=True)
class SessionClaims:
    """Claims carried by a signed session token."""
    user_id: str
    expires_at: datetime
