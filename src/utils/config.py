"""Environment-driven service configuration."""

import os
from dataclasses import dataclass
from typing import Mapping

from adapter.mongodb.connection import DEFAULT_DATABASE_NAME
from services.password import BCRYPT_ROUNDS

TRANSPORTS = ("http", "memory")


class ConfigError(Exception):
    """Environment is missing variables or holds invalid values."""

    def __init__(self, missing: list[str] | None = None, invalid: list[str] | None = None):
        self.missing = missing or []
        self.invalid = invalid or []
        parts = []
        if self.missing:
            parts.append(f"missing environment variables: {', '.join(self.missing)}")
        if self.invalid:
            parts.append(f"invalid environment variables: {', '.join(self.invalid)}")
        super().__init__("; ".join(parts))


@dataclass(frozen=True)
class Settings:
    jwt_secret_key: str
    mongo_url: str | None = None
    mongo_database: str = DEFAULT_DATABASE_NAME
    token_client: str = "http"
    token_service_url: str | None = None
    mailer_client: str = "http"
    mailer_service_url: str | None = None
    activation_page_url: str = "http://localhost:5173/activate"
    mailer_from_address: str = "the.team@flat-list.com"
    bcrypt_rounds: int = BCRYPT_ROUNDS
    http_timeout_seconds: float = 5.0

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from the environment.

        Every problem is collected before raising, so one ConfigError names
        all missing and invalid variables.
        """
        env = os.environ if environ is None else environ
        missing: list[str] = []
        invalid: list[str] = []

        jwt_secret_key = env.get("JWT_SECRET_KEY", "")
        if not jwt_secret_key:
            missing.append("JWT_SECRET_KEY")

        token_client = env.get("TOKEN_CLIENT", "http").lower()
        if token_client not in TRANSPORTS:
            invalid.append("TOKEN_CLIENT")
        token_service_url = env.get("TOKEN_SERVICE_URL") or None
        if token_client == "http" and not token_service_url:
            missing.append("TOKEN_SERVICE_URL")

        mailer_client = env.get("MAILER_CLIENT", "http").lower()
        if mailer_client not in TRANSPORTS:
            invalid.append("MAILER_CLIENT")
        mailer_service_url = env.get("MAILER_SERVICE_URL") or None
        if mailer_client == "http" and not mailer_service_url:
            missing.append("MAILER_SERVICE_URL")

        bcrypt_rounds = _parse(env, "BCRYPT_ROUNDS", int, BCRYPT_ROUNDS, invalid)
        http_timeout = _parse(env, "HTTP_TIMEOUT_SECONDS", float, 5.0, invalid)

        if missing or invalid:
            raise ConfigError(missing=missing, invalid=invalid)

        return cls(
            jwt_secret_key=jwt_secret_key,
            mongo_url=env.get("MONGO_URL") or None,
            mongo_database=env.get("MONGODB_DATABASE") or DEFAULT_DATABASE_NAME,
            token_client=token_client,
            token_service_url=token_service_url,
            mailer_client=mailer_client,
            mailer_service_url=mailer_service_url,
            activation_page_url=env.get("ACTIVATION_PAGE_URL") or cls.activation_page_url,
            mailer_from_address=env.get("MAILER_FROM_ADDRESS") or cls.mailer_from_address,
            bcrypt_rounds=bcrypt_rounds,
            http_timeout_seconds=http_timeout,
        )


def _parse(env: Mapping[str, str], name: str, kind: type, default, invalid: list[str]):
    raw = env.get(name)
    if not raw:
        return default
    try:
        return kind(raw)
    except ValueError:
        invalid.append(name)
        return default
