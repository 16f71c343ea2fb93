"""Pydantic models for API request/response."""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from domain.model.user import LoginRequest, RegistrationRequest, UserInfo


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class RegisterBody(_CamelModel):
    """Request model for user registration.

    Fields default to empty so that presence is checked by the service,
    which reports the missing field by name.
    """
    first_name: str = Field("", alias="firstName")
    last_name: str = Field("", alias="lastName")
    email: str = ""
    password: str = ""

    def to_domain(self) -> RegistrationRequest:
        return RegistrationRequest(
            email=self.email,
            password=self.password,
            first_name=self.first_name,
            last_name=self.last_name,
        )


class LoginBody(_CamelModel):
    """Request model for login and activation restart."""
    email: str = ""
    password: str = ""

    def to_domain(self) -> LoginRequest:
        return LoginRequest(email=self.email, password=self.password)


class ActivateBody(_CamelModel):
    activation_token: str = Field("", alias="activationToken")


class RegisterResponse(BaseModel):
    id: str = Field(..., description="New user ID")


class UserResponse(_CamelModel):
    """Public user view. Never carries password material."""
    id: str
    first_name: str = Field(..., serialization_alias="firstName")
    last_name: str = Field(..., serialization_alias="lastName")
    email: str
    token: Optional[str] = Field(None, description="Session token, set after login")

    @classmethod
    def from_domain(cls, user: UserInfo) -> "UserResponse":
        return cls(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            token=user.token,
        )


class LoginResponse(BaseModel):
    user: UserResponse


class MessageResponse(BaseModel):
    message: str


class AuthenticatedResponse(BaseModel):
    id: str = Field(..., description="Authenticated user ID")
