"""User account routes (register, login, activation, session check).

Domain errors raised by the service are mapped to status codes by the
handler in api.errors.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from api.dependencies import get_user_service
from api.models import (
    ActivateBody,
    AuthenticatedResponse,
    LoginBody,
    LoginResponse,
    MessageResponse,
    RegisterBody,
    RegisterResponse,
    UserResponse,
)
from domain.model.errors import DomainError
from services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/user", tags=["user"])

security = HTTPBearer(auto_error=False)


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(body: RegisterBody, service: UserService = Depends(get_user_service)):
    """Register a new user and send the activation email.

    Raises:
        HTTPException: 400 missing field, 409 email taken, 502 token/mailer failure
    """
    user_id = await service.register(body.to_domain())
    return RegisterResponse(id=user_id)


@router.post("/login", response_model=LoginResponse)
async def login(body: LoginBody, service: UserService = Depends(get_user_service)):
    """Login an activated user and return their info with a session token."""
    user = await service.login(body.to_domain())
    return LoginResponse(user=UserResponse.from_domain(user))


@router.post("/activate", response_model=MessageResponse)
async def activate(body: ActivateBody, service: UserService = Depends(get_user_service)):
    """Activate the account the activation token was issued for."""
    await service.activate(body.activation_token)
    return MessageResponse(message="account activated")


@router.post("/activate/restart", response_model=MessageResponse)
async def restart_activation(body: LoginBody, service: UserService = Depends(get_user_service)):
    """Send a new activation email after re-checking credentials."""
    await service.restart_activation(body.to_domain())
    return MessageResponse(message="activation email sent")


@router.get("/me", response_model=AuthenticatedResponse)
async def me(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    service: UserService = Depends(get_user_service),
):
    """Resolve the Bearer session token to the current user ID.

    Any authentication failure is reported as 401.
    """
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        user_id = await service.authenticate(credentials.credentials)
    except DomainError as e:
        logger.debug("Session authentication failed", extra={"errorType": type(e).__name__})
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )

    return AuthenticatedResponse(id=user_id)
