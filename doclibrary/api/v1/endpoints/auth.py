"""Auth API: sign-up (auth user + guest profile) and password sign-in."""

from fastapi import APIRouter, Depends, Request

from doclibrary.api.v1.dependencies import get_user_admin_service
from doclibrary.application.use_cases.users import UserAdminService
from doclibrary.core.limiter import limit_sign_up
from doclibrary.schemas.user import (
    SessionResponse,
    SignInRequest,
    SignUpRequest,
    UserProfileResponse,
)

router = APIRouter()


@router.post("/sign-up", response_model=UserProfileResponse, status_code=201)
@limit_sign_up
async def sign_up(
    request: Request,
    body: SignUpRequest,
    admin: UserAdminService = Depends(get_user_admin_service),
):
    """Create the auth user and a profile row with role guest."""
    profile = await admin.sign_up(body.email, body.password)
    return UserProfileResponse.model_validate(profile)


@router.post("/sign-in", response_model=SessionResponse)
@limit_sign_up
async def sign_in(
    request: Request,
    body: SignInRequest,
    admin: UserAdminService = Depends(get_user_admin_service),
):
    """Exchange email and password for an access token."""
    session = await admin.sign_in(body.email, body.password)
    return SessionResponse(
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        expires_in=session.expires_in,
        user_id=session.user.id,
        email=session.user.email,
    )
