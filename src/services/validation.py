"""Required-field validation for account requests."""

from domain.model.errors import MissingFieldError
from domain.model.user import LoginRequest, RegistrationRequest


def _require(value: str | None, field: str) -> None:
    if not value:
        raise MissingFieldError(field)


class RequiredFieldValidator:
    """Checks that email and password are present.

    Only presence is checked here; password strength and email format
    are left to the transport layer.
    """

    def validate_registration(self, request: RegistrationRequest) -> None:
        _require(request.email, "email")
        _require(request.password, "password")

    def validate_login(self, request: LoginRequest) -> None:
        _require(request.email, "email")
        _require(request.password, "password")
