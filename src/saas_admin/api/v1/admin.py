"""Admin API endpoints (admin role only).

Every route requires an authenticated caller; the admin check itself is
re-run inside each service call against the caller's stored role.
"""

from datetime import timedelta
from uuid import UUID

from fastapi import APIRouter, Response, status

from src.saas_admin.api.dependencies import (
    CurrentProfile,
    ImpersonationManagerDep,
    ProfileServiceDep,
    TenantServiceDep,
)
from src.saas_admin.api.outcomes import unwrap
from src.saas_admin.core.config import get_settings
from src.saas_admin.core.security import set_pointer_cookie
from src.saas_admin.schemas.impersonation import (
    ImpersonationStarted,
    PurgeResult,
    StartImpersonationRequest,
)
from src.saas_admin.schemas.profile import ProfileCreate, ProfileRead, ProfileRoleUpdate
from src.saas_admin.schemas.tenant import TenantCreate, TenantRead

router = APIRouter(prefix="/admin", tags=["admin"])

_ADMIN_ERRORS = {
    401: {"description": "Not authenticated"},
    403: {"description": "Only admins can perform this action"},
}


# =============================================================================
# Impersonation
# =============================================================================


@router.post(
    "/impersonation",
    response_model=ImpersonationStarted,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {
            "description": "Impersonation started; pointer cookie set",
            "content": {
                "application/json": {
                    "example": {
                        "session": {
                            "session_id": "7c9e6679-7425-40de-944b-e07fc1f90ae7",
                            "admin_id": "550e8400-e29b-41d4-a716-446655440000",
                            "admin_email": "admin@example.com",
                            "impersonated_id": "6fa459ea-ee8a-3ca4-894e-db77e160355e",
                            "user_email": "jane@example.com",
                            "user_role": "user",
                            "created_at": "2024-01-15T10:30:00Z",
                            "expires_at": "2024-01-15T11:30:00Z",
                        },
                        "redirect_to": "/dashboard",
                        "message": "Now viewing as jane@example.com",
                    }
                }
            },
        },
        **_ADMIN_ERRORS,
        404: {"description": "Target user not found"},
        500: {"description": "Failed to impersonate user"},
    },
)
async def start_impersonation(
    payload: StartImpersonationRequest,
    response: Response,
    caller: CurrentProfile,
    manager: ImpersonationManagerDep,
) -> ImpersonationStarted:
    """Start viewing the app as another profile.

    On success the pointer cookie is set and the client should navigate to
    ``redirect_to``. Nothing is persisted on failure.
    """
    settings = get_settings()
    view = unwrap(await manager.start(caller.id, payload.target_user_id))
    set_pointer_cookie(response, view.session_id, settings)
    return ImpersonationStarted(
        session=view,
        redirect_to=settings.impersonation_landing_path,
        message=f"Now viewing as {view.user_email}",
    )


@router.delete(
    "/impersonation/expired",
    response_model=PurgeResult,
    responses={
        200: {
            "description": "Expired sessions removed",
            "content": {
                "application/json": {
                    "example": {"deleted": 12, "cutoff": "2023-12-16T10:30:00"}
                }
            },
        },
        **_ADMIN_ERRORS,
    },
)
async def purge_expired_sessions(
    caller: CurrentProfile, manager: ImpersonationManagerDep
) -> PurgeResult:
    """Delete impersonation sessions that expired before the retention window."""
    retention_days = get_settings().impersonation_retention_days
    deleted, cutoff = unwrap(
        await manager.purge_expired(caller.id, timedelta(days=retention_days))
    )
    return PurgeResult(deleted=deleted, cutoff=cutoff)


# =============================================================================
# Profiles
# =============================================================================


@router.get("/profiles", response_model=list[ProfileRead], responses={**_ADMIN_ERRORS})
async def list_profiles(caller: CurrentProfile, service: ProfileServiceDep) -> list[ProfileRead]:
    profiles = unwrap(await service.list_profiles(caller.id))
    return [ProfileRead.model_validate(p) for p in profiles]


@router.post(
    "/profiles",
    response_model=ProfileRead,
    status_code=status.HTTP_201_CREATED,
    responses={
        **_ADMIN_ERRORS,
        404: {"description": "Tenant not found"},
        409: {"description": "A user with this email already exists"},
    },
)
async def create_profile(
    data: ProfileCreate, caller: CurrentProfile, service: ProfileServiceDep
) -> ProfileRead:
    """Create a profile. Without ``tenant_id`` it joins the calling admin's tenant."""
    profile = unwrap(await service.create_profile(caller.id, data))
    return ProfileRead.model_validate(profile)


@router.patch(
    "/profiles/{profile_id}/role",
    response_model=ProfileRead,
    responses={**_ADMIN_ERRORS, 404: {"description": "User not found"}},
)
async def update_profile_role(
    profile_id: UUID,
    data: ProfileRoleUpdate,
    caller: CurrentProfile,
    service: ProfileServiceDep,
) -> ProfileRead:
    profile = unwrap(await service.update_role(caller.id, profile_id, data.role))
    return ProfileRead.model_validate(profile)


@router.delete(
    "/profiles/{profile_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        **_ADMIN_ERRORS,
        404: {"description": "User not found"},
        409: {"description": "Admins cannot delete their own account"},
    },
)
async def delete_profile(
    profile_id: UUID, caller: CurrentProfile, service: ProfileServiceDep
) -> None:
    unwrap(await service.delete_profile(caller.id, profile_id))


# =============================================================================
# Tenants
# =============================================================================


@router.get("/tenants", response_model=list[TenantRead], responses={**_ADMIN_ERRORS})
async def list_tenants(caller: CurrentProfile, service: TenantServiceDep) -> list[TenantRead]:
    tenants = unwrap(await service.list_tenants(caller.id))
    return [TenantRead.model_validate(t) for t in tenants]


@router.post(
    "/tenants",
    response_model=TenantRead,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {
            "description": "Tenant created and owner assigned",
            "content": {
                "application/json": {
                    "example": {
                        "id": "550e8400-e29b-41d4-a716-446655440000",
                        "name": "Acme Corporation",
                        "domain": "acme.example.com",
                        "admin_id": "6fa459ea-ee8a-3ca4-894e-db77e160355e",
                        "created_at": "2024-01-15T10:30:00Z",
                    }
                }
            },
        },
        **_ADMIN_ERRORS,
        404: {"description": "Failed to verify user"},
        409: {"description": "Name or domain taken, or owner not assignable"},
    },
)
async def create_tenant(
    data: TenantCreate, caller: CurrentProfile, service: TenantServiceDep
) -> TenantRead:
    """Create a tenant and make ``admin_id`` its owner.

    The owner must be an existing profile with role ``user`` that does not
    already belong to a tenant.
    """
    tenant = unwrap(await service.create_tenant(caller.id, data))
    return TenantRead.model_validate(tenant)


@router.delete(
    "/tenants/{tenant_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={**_ADMIN_ERRORS, 404: {"description": "Tenant not found"}},
)
async def delete_tenant(tenant_id: UUID, caller: CurrentProfile, service: TenantServiceDep) -> None:
    """Delete a tenant after unassigning its member profiles."""
    unwrap(await service.delete_tenant(caller.id, tenant_id))
