"""User admin API: listing, stats, role/status/tier changes, and removal."""

from fastapi import APIRouter, Depends, Request

from doclibrary.api.v1.dependencies import OptionalSession, get_user_admin_service
from doclibrary.application.use_cases.users import UserAdminService
from doclibrary.core.limiter import limit_writes
from doclibrary.schemas.user import UserResponse, UserStatsResponse, UserUpdateRequest

router = APIRouter()


@router.get("", response_model=list[UserResponse])
async def list_users(
    session: OptionalSession,
    admin: UserAdminService = Depends(get_user_admin_service),
):
    users = await admin.fetch_users(session)
    return [UserResponse.model_validate(u) for u in users]


@router.get("/stats", response_model=UserStatsResponse)
async def user_stats(
    session: OptionalSession,
    admin: UserAdminService = Depends(get_user_admin_service),
):
    stats = await admin.get_user_stats(session)
    return UserStatsResponse.model_validate(stats)


@router.patch("/{user_id}", status_code=204)
@limit_writes
async def update_user(
    request: Request,
    user_id: str,
    body: UserUpdateRequest,
    session: OptionalSession,
    admin: UserAdminService = Depends(get_user_admin_service),
):
    await admin.update_user(session, user_id, body.to_dto())


@router.delete("/{user_id}", status_code=204)
@limit_writes
async def delete_user(
    request: Request,
    user_id: str,
    session: OptionalSession,
    admin: UserAdminService = Depends(get_user_admin_service),
):
    """Delete a user profile. Admins cannot delete themselves."""
    await admin.delete_user(session, user_id)
