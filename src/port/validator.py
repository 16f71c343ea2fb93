from typing import Protocol

from domain.model.user import LoginRequest, RegistrationRequest


class Validator(Protocol):
    """Structural checks on inbound requests. Raise MissingFieldError."""

    def validate_registration(self, request: RegistrationRequest) -> None: ...

    def validate_login(self, request: LoginRequest) -> None: ...
