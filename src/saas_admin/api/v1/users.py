"""Endpoints about the calling profile."""

from fastapi import APIRouter

from src.saas_admin.api.dependencies import CurrentProfile
from src.saas_admin.schemas.profile import ProfileRead

router = APIRouter(prefix="/users", tags=["users"])


@router.get(
    "/me",
    response_model=ProfileRead,
    responses={401: {"description": "Not authenticated"}},
)
async def get_me(profile: CurrentProfile) -> ProfileRead:
    """Return the caller's own profile.

    This is always the signed-in identity, never the impersonated one.
    """
    return ProfileRead.model_validate(profile)
