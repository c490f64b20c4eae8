"""Authentication endpoints."""

from fastapi import APIRouter, HTTPException, Response, status
from starlette.requests import Request

from src.saas_admin.api.dependencies import AuthServiceDep
from src.saas_admin.core.config import get_settings
from src.saas_admin.core.rate_limit import limiter
from src.saas_admin.core.security import clear_session_cookie, set_session_cookie
from src.saas_admin.schemas.auth import SignInRequest, SignInResponse
from src.saas_admin.schemas.profile import ProfileRead
from src.saas_admin.services.outcome import Failure

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/sign-in",
    response_model=SignInResponse,
    responses={
        200: {
            "description": "Successful authentication",
            "content": {
                "application/json": {
                    "example": {
                        "access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                        "token_type": "bearer",
                        "redirect_to": "/admin",
                        "profile": {
                            "id": "550e8400-e29b-41d4-a716-446655440000",
                            "email": "admin@example.com",
                            "full_name": "Ada Admin",
                            "role": "admin",
                            "tenant_id": None,
                            "created_at": "2024-01-15T10:30:00Z",
                        },
                    }
                }
            },
        },
        401: {"description": "Invalid login credentials"},
        429: {"description": "Too many sign-in attempts"},
    },
)
@limiter.limit("5/minute")
async def sign_in(
    request: Request,
    response: Response,
    credentials: SignInRequest,
    service: AuthServiceDep,
) -> SignInResponse:
    """Verify credentials, set the session cookie and return the role landing path."""
    result = await service.sign_in(credentials.email, credentials.password)
    if isinstance(result, Failure):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=result.reason)

    set_session_cookie(response, result.data.access_token, get_settings())
    profile = result.data.profile
    return SignInResponse(
        access_token=result.data.access_token,
        redirect_to=profile.role_enum.landing_path,
        profile=ProfileRead.model_validate(profile),
    )


@router.post("/sign-out", status_code=status.HTTP_204_NO_CONTENT)
async def sign_out(response: Response) -> None:
    """Clear the session cookie. An active impersonation pointer is left alone."""
    clear_session_cookie(response, get_settings())
