"""User service — account lifecycle business logic.

Pure business logic with no HTTP dependencies. Sequences the collaborators
behind registration, activation, login, activation resend and session
authentication. Raises domain errors that route handlers map to HTTP
status codes.

Blocking collaborators (repository, password manager) run in worker threads;
token and mailer clients are awaited directly.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from domain.model.errors import (
    InvalidEmailError,
    InvalidJWTError,
    InvalidPasswordError,
    MissingFieldError,
    PasswordMismatchError,
    UserNotActivatedError,
    UserNotFoundError,
)
from domain.model.user import LoginRequest, RegistrationRequest, UserInfo, UserRecord
from port.mailer_client import MailerClient
from port.password_manager import PasswordManager
from port.token_client import TokenClient
from port.user_repository import UserRepository
from port.validator import Validator
from services.session_token import SessionTokenCodec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserServiceDeps:
    """Every collaborator the service needs, supplied at construction."""
    repository: UserRepository
    password_manager: PasswordManager
    validator: Validator
    token_client: TokenClient
    mailer_client: MailerClient
    session_codec: SessionTokenCodec


class UserService:
    """Orchestrates the user account lifecycle.

    Operations:
        register            persist an unactivated user, then token → email
        login               credentials → UserInfo with a session token
        activate            activation token → activated account
        restart_activation  credentials → fresh token → new email
        authenticate        session token → user ID of an activated account

    Cancellation of a register call returns immediately; the activation
    pipeline it already started keeps running and is not awaited.
    """

    def __init__(self, deps: UserServiceDeps):
        self._repo = deps.repository
        self._passwords = deps.password_manager
        self._validator = deps.validator
        self._tokens = deps.token_client
        self._mailer = deps.mailer_client
        self._sessions = deps.session_codec
        # Strong references so detached pipelines are not garbage collected
        self._pipelines: set[asyncio.Task] = set()

    # ── operations ───────────────────────────────────────────

    async def register(self, request: RegistrationRequest) -> str:
        """Register a new user and send the activation email.

        Returns the new user ID once the activation email has been sent.

        Raises:
            MissingFieldError: email or password empty
            DuplicateUserError: email already registered
            TokenServiceError / MailerServiceError: activation pipeline failed;
                the user stays persisted and unactivated
        """
        self._validator.validate_registration(request)

        password_hash = await asyncio.to_thread(self._passwords.generate_hash, request.password)

        now = datetime.now(timezone.utc)
        record = UserRecord(
            id='',
            first_name=request.first_name,
            last_name=request.last_name,
            email=request.email,
            password_hash=password_hash,
            activated=False,
            created_at=now,
            updated_at=now,
        )
        user_id = await asyncio.to_thread(self._repo.create_user, record)
        logger.info("User registered", extra={"userId": user_id})

        pipeline = asyncio.create_task(
            self._activation_pipeline(user_id, request.email, request.first_name),
            name=f"activation-{user_id}",
        )
        self._pipelines.add(pipeline)
        pipeline.add_done_callback(self._pipeline_done)

        # shield: cancelling the caller must not cancel the pipeline
        await asyncio.shield(pipeline)
        return user_id

    async def login(self, request: LoginRequest) -> UserInfo:
        """Authenticate by email and password and issue a session token.

        Raises:
            MissingFieldError: email or password empty
            InvalidEmailError: no account for this email
            UserNotActivatedError: account not yet activated
            InvalidPasswordError: password does not match
        """
        self._validator.validate_login(request)

        record = await self._get_by_email(request.email)
        if not record.activated:
            raise UserNotActivatedError()
        await self._check_password(record, request.password)

        token = self._sessions.issue(record.id)
        logger.info("User logged in", extra={"userId": record.id})
        return UserInfo.from_record(record, token=token)

    async def activate(self, activation_token: str) -> None:
        """Activate the account an activation token was minted for.

        Raises:
            MissingFieldError: token empty
            TokenServiceError: token unknown, expired or already used
            UserNotFoundError: token resolved to a user that no longer exists
        """
        if not activation_token:
            raise MissingFieldError("activationToken")

        user_id = await self._tokens.validate_activation_token(activation_token)
        await asyncio.to_thread(
            self._repo.update_user_by_id,
            user_id,
            True,
            datetime.now(timezone.utc),
        )
        logger.info("User activated", extra={"userId": user_id})

    async def restart_activation(self, request: LoginRequest) -> None:
        """Send a fresh activation email to a user who proves their credentials.

        Does not require the account to be unactivated. Token issuance and
        email dispatch run in order in the calling task.

        Raises:
            MissingFieldError, InvalidEmailError, InvalidPasswordError,
            TokenServiceError, MailerServiceError
        """
        self._validator.validate_login(request)

        record = await self._get_by_email(request.email)
        await self._check_password(record, request.password)

        activation_token = await self._tokens.create_activation_token(record.id)
        await self._mailer.send_activation_email(record.email, record.first_name, activation_token)
        logger.info("Activation email resent", extra={"userId": record.id})

    async def authenticate(self, session_token: str) -> str:
        """Resolve a session token to the ID of an activated user.

        Raises:
            InvalidJWTError: token empty, malformed or expired
            InvalidJWTSignatureError: token not signed by us
            UserNotFoundError: token subject no longer exists
            UserNotActivatedError: account not activated
        """
        if not session_token:
            raise InvalidJWTError("missing jwt")

        claims = self._sessions.verify(session_token)
        record = await asyncio.to_thread(self._repo.get_user_by_id, claims.user_id)
        if not record.activated:
            raise UserNotActivatedError()
        return record.id

    async def drain(self) -> None:
        """Wait for detached activation pipelines. Used on shutdown."""
        if self._pipelines:
            await asyncio.gather(*self._pipelines, return_exceptions=True)

    # ── helpers ──────────────────────────────────────────────

    async def _activation_pipeline(self, user_id: str, email: str, first_name: str) -> None:
        """Issue an activation token, then email it. The email never precedes the token."""
        try:
            activation_token = await self._tokens.create_activation_token(user_id)
            await self._mailer.send_activation_email(email, first_name, activation_token)
        except Exception as e:
            # The account stays persisted and unactivated; restart_activation repairs it
            logger.warning(
                "Activation pipeline failed",
                extra={"userId": user_id, "error": str(e), "errorType": type(e).__name__},
            )
            raise
        logger.info("Activation email sent", extra={"userId": user_id})

    def _pipeline_done(self, task: asyncio.Task) -> None:
        self._pipelines.discard(task)
        if not task.cancelled():
            # Mark the exception retrieved; it was already logged by the pipeline
            task.exception()

    async def _get_by_email(self, email: str) -> UserRecord:
        try:
            return await asyncio.to_thread(self._repo.get_user_by_email, email)
        except UserNotFoundError:
            raise InvalidEmailError() from None

    async def _check_password(self, record: UserRecord, password: str) -> None:
        try:
            await asyncio.to_thread(self._passwords.compare_hash, record.password_hash, password)
        except PasswordMismatchError:
            raise InvalidPasswordError() from None
