"""
Auth API Routes
Identity-provider callback, current user, logout
"""

import hmac
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Response, status

from app.api.dependencies import get_auth_service, get_bearer_token, get_current_user
from app.config import settings
from app.domain.models import User
from app.domain.schemas.auth import IdentityClaims, SessionResponse, UserResponse
from app.domain.services.auth_service import AuthService, mask_token

logger = logging.getLogger(__name__)
router = APIRouter()


def _to_user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        profile_image_url=user.profile_image_url,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


@router.post("/callback", response_model=SessionResponse)
async def identity_callback(
    claims: IdentityClaims,
    x_identity_secret: Optional[str] = Header(default=None),
    auth: AuthService = Depends(get_auth_service),
):
    """
    Sign in a user verified by the identity provider

    Upserts the user from the forwarded claims and issues a bearer token.
    """
    expected = settings.IDENTITY_PROVIDER_SECRET.encode("utf-8")
    supplied = (x_identity_secret or "").encode("utf-8")
    if not hmac.compare_digest(expected, supplied):
        logger.warning("Identity callback rejected for sub=%s", claims.sub)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    try:
        issued = await auth.sign_in(
            User(
                id=claims.sub,
                email=claims.email,
                first_name=claims.first_name,
                last_name=claims.last_name,
                profile_image_url=claims.profile_image_url,
            )
        )
    except Exception as e:
        logger.error(f"Error signing in user: {e}")
        raise HTTPException(
            status_code=500,
            detail="Failed to sign in"
        )

    logger.info("Session %s issued for user %s", mask_token(issued.token), issued.user.id)
    return SessionResponse(
        access_token=issued.token,
        expires_at=issued.expires_at,
        user=_to_user_response(issued.user),
    )


@router.get("/user", response_model=UserResponse)
async def current_user(user: User = Depends(get_current_user)):
    """Get the authenticated user"""
    return _to_user_response(user)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    user: User = Depends(get_current_user),
    token: str = Depends(get_bearer_token),
    auth: AuthService = Depends(get_auth_service),
):
    """Revoke the presented session token"""
    await auth.sign_out(token)
    logger.info("User %s signed out", user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
