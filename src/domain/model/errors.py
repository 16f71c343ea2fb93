"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Route handlers catch them and map to appropriate HTTP status codes.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class NotFoundError(DomainError):
    """Requested entity does not exist."""


class DuplicateError(DomainError):
    """Entity with the same unique key already exists."""


class ValidationError(DomainError):
    """Input violates a business validation rule."""


class MissingFieldError(ValidationError):
    """A required request field is empty."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"missing field is required: {field}")


class DuplicateUserError(DuplicateError):
    """A user with this email already exists."""

    def __init__(self, message: str = "user already exists"):
        super().__init__(message)


class UserNotFoundError(NotFoundError):
    """No user record matches the lookup key."""

    def __init__(self, message: str = "user not found"):
        super().__init__(message)


class InvalidEmailError(DomainError):
    """No account for this email.

    Raised at the login boundary instead of UserNotFoundError so callers
    cannot tell a wrong email from a wrong password.
    """

    def __init__(self, message: str = "user with this email was not found"):
        super().__init__(message)


class InvalidPasswordError(DomainError):
    """Password does not match the stored hash."""

    def __init__(self, message: str = "invalid password provided"):
        super().__init__(message)


class UserNotActivatedError(DomainError):
    """Account exists but has not been activated yet."""

    def __init__(self, message: str = "user has not activated their account"):
        super().__init__(message)


class PasswordMismatchError(DomainError):
    """Raised by a PasswordManager when a plaintext does not match a hash."""


class InvalidJWTError(DomainError):
    """Session token is malformed, expired, or missing required claims."""

    def __init__(self, message: str = "invalid jwt"):
        super().__init__(message)


class InvalidJWTSignatureError(InvalidJWTError):
    """Session token signature was not produced with our secret."""

    def __init__(self, message: str = "invalid jwt signature"):
        super().__init__(message)


class CollaboratorError(DomainError):
    """A remote collaborator failed. Passed through to callers unchanged."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class TokenServiceError(CollaboratorError):
    """The activation token service rejected or failed a request."""


class MailerServiceError(CollaboratorError):
    """The mailer service failed to dispatch an email."""
