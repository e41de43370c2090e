"""Registration, login and the bearer-token dependency guarding catalog routes."""

from typing import Annotated

import jwt
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import decode_access_token
from app.schemas.auth import CredentialsRequest, CurrentUser, TokenResponse
from app.schemas.common import MessageResponse
from app.services.accounts import (
    AccountServiceError,
    EmailExistsError,
    InvalidInputError,
    InvalidPasswordError,
    UserNotFoundError,
    login,
    register,
)

router = APIRouter()
security = HTTPBearer(auto_error=False)


@router.post("/register", response_model=MessageResponse, status_code=201)
def post_register(
    body: CredentialsRequest,
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Create an account with role 'user'. Emails are unique."""
    try:
        register(db, body.email, body.password)
    except (InvalidInputError, EmailExistsError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    except AccountServiceError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message
        ) from e
    return MessageResponse(message="User registered")


@router.post("/login", response_model=TokenResponse)
def post_login(
    body: CredentialsRequest,
    db: Annotated[Session, Depends(get_db)],
) -> TokenResponse:
    """
    Authenticate with email and password; returns a JWT and the account role.
    Include the token in the Authorization header as: Bearer <token>
    """
    try:
        result = login(db, body.email, body.password)
    except (UserNotFoundError, InvalidPasswordError) as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=e.message) from e
    except AccountServiceError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message
        ) from e
    return TokenResponse(token=result.token, role=result.role)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> CurrentUser:
    """
    Dependency: require a valid Bearer JWT and return its claims.

    401 when no token is sent, 403 when the token is malformed, expired or
    signed with another secret. Claims are trusted as issued; the user row is
    not reloaded.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        payload = decode_access_token(credentials.credentials)
    except jwt.PyJWTError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid token",
        )
    user_id = payload.get("id")
    role = payload.get("role")
    if not isinstance(user_id, int) or isinstance(user_id, bool) or not isinstance(role, str):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid token",
        )
    return CurrentUser(id=user_id, role=role)
