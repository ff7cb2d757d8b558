"""
Authentication endpoints for login and self-registration.

Implements JWT-based stateless authentication:
- POST /token: Authenticate and receive a JWT access token
- POST /register: Create a (non-admin) user account and receive a token
"""

import logging
from fastapi import APIRouter, HTTPException, Depends, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import create_user_token
from app.crud import user as user_crud
from app.schemas.user import UserLoginRequest, UserRegisterRequest, TokenResponse

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = logging.getLogger(__name__)


@router.post("/token", response_model=TokenResponse)
def login(
    request: UserLoginRequest,
    db: Session = Depends(get_db)
):
    """
    Authenticate user and return a JWT access token.

    The token carries the username and admin flag.
    """
    user = user_crud.authenticate(db, request.username, request.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username/password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    logger.info(f"User logged in: {user.username}")

    return TokenResponse(access_token=create_user_token(user.username, user.is_admin))


@router.post("/register", status_code=201, response_model=TokenResponse)
def register(
    request: UserRegisterRequest,
    db: Session = Depends(get_db)
):
    """
    Register a new user account.

    Returns a JWT token for immediate login. Registered users are never admins.
    """
    new_user = user_crud.register(db, request)

    return TokenResponse(access_token=create_user_token(new_user.username, new_user.is_admin))
