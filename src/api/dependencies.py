import logging
from functools import lru_cache

from fastapi import HTTPException

from adapter.external.mailer_service import HttpMailerClient
from adapter.external.token_service import HttpTokenClient
from adapter.fake.mailer_client import InMemoryMailerClient
from adapter.fake.token_client import InMemoryTokenClient
from adapter.mongodb.connection import get_mongodb_client
from adapter.mongodb.user_repository import MongoUserRepository
from port.mailer_client import MailerClient
from port.token_client import TokenClient
from port.user_repository import UserRepository
from services.password import BcryptPasswordManager
from services.session_token import SessionTokenCodec
from services.user_service import UserService, UserServiceDeps
from services.validation import RequiredFieldValidator
from utils.config import Settings

logger = logging.getLogger(__name__)


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()


def _get_db(settings: Settings):
    """Get MongoDB database, raising 503 if unavailable."""
    client = get_mongodb_client(settings.mongo_url)
    if client is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return client[settings.mongo_database]


def build_user_repo(settings: Settings) -> UserRepository:
    return MongoUserRepository(_get_db(settings))


def build_token_client(settings: Settings) -> TokenClient:
    """Pick the token transport once, from configuration."""
    if settings.token_client == "memory":
        logger.warning("Using in-memory token client; tokens do not survive restarts")
        return InMemoryTokenClient()
    return HttpTokenClient(settings.token_service_url, timeout=settings.http_timeout_seconds)


def build_mailer_client(settings: Settings) -> MailerClient:
    """Pick the mailer transport once, from configuration."""
    if settings.mailer_client == "memory":
        logger.warning("Using in-memory mailer client; activation emails are not delivered")
        return InMemoryMailerClient()
    return HttpMailerClient(
        settings.mailer_service_url,
        activation_page_url=settings.activation_page_url,
        from_address=settings.mailer_from_address,
        timeout=settings.http_timeout_seconds,
    )


def build_user_service(settings: Settings, repository: UserRepository | None = None) -> UserService:
    return UserService(UserServiceDeps(
        repository=repository if repository is not None else build_user_repo(settings),
        password_manager=BcryptPasswordManager(rounds=settings.bcrypt_rounds),
        validator=RequiredFieldValidator(),
        token_client=build_token_client(settings),
        mailer_client=build_mailer_client(settings),
        session_codec=SessionTokenCodec(settings.jwt_secret_key),
    ))


@lru_cache
def get_user_service() -> UserService:
    """Process-wide service; built on first use so a missing database surfaces as 503."""
    return build_user_service(get_settings())
