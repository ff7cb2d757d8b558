"""
FastAPI dependencies for authentication and authorization.

Tokens are optional on every request: a valid bearer token yields the
caller's claims, anything else leaves the request anonymous. The ensure_*
dependencies then decide whether the route may proceed.
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from typing import Optional

from app.core.security import decode_token

# HTTP Bearer token scheme (Authorization: Bearer <token>)
security = HTTPBearer(auto_error=False)


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[dict]:
    """
    Decode the bearer token if one was sent.

    Returns:
        The token payload ({"sub": username, "is_admin": bool, ...}),
        or None for anonymous requests and invalid tokens.
    """
    if not credentials:
        return None

    try:
        payload = decode_token(credentials.credentials)
    except JWTError:
        return None

    if payload.get("sub") is None:
        return None
    return payload


async def ensure_logged_in(
    claims: Optional[dict] = Depends(get_current_user_claims),
) -> dict:
    """
    Require any authenticated user.

    Raises:
        HTTPException 401: If no valid token was supplied
    """
    if claims is None:
        raise _unauthorized()
    return claims


async def ensure_admin(
    claims: dict = Depends(ensure_logged_in),
) -> dict:
    """
    Require an admin user.

    Raises:
        HTTPException 401: If not logged in or not an admin
    """
    if not claims.get("is_admin"):
        raise _unauthorized()
    return claims


async def ensure_correct_user_or_admin(
    username: str,
    claims: dict = Depends(ensure_logged_in),
) -> dict:
    """
    Require the user named in the route path, or an admin.

    Raises:
        HTTPException 401: If the caller is neither that user nor an admin
    """
    if not (claims.get("is_admin") or claims.get("sub") == username):
        raise _unauthorized()
    return claims
