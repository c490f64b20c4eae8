"""Authentication service - credential sign-in and session lookup."""

from dataclasses import dataclass
from uuid import UUID

from src.saas_admin.core.logging import get_logger
from src.saas_admin.core.security import (
    ACCESS_TOKEN_TYPE,
    DUMMY_PASSWORD_HASH,
    create_access_token,
    decode_token,
    verify_password,
)
from src.saas_admin.models import Profile
from src.saas_admin.repositories import ProfileRepository
from src.saas_admin.services.outcome import ErrorKind, Failure, Success

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid login credentials"


@dataclass(frozen=True)
class SignInResult:
    access_token: str
    profile: Profile


class AuthService:
    """Issues and looks up caller sessions backed by signed JWTs."""

    def __init__(self, profile_repo: ProfileRepository):
        self.profile_repo = profile_repo

    async def sign_in(self, email: str, password: str) -> Success[SignInResult] | Failure:
        """Verify credentials and issue an access token.

        Password verification always runs (against a dummy hash when the
        email is unknown) so response timing does not reveal which emails exist.
        """
        profile = await self.profile_repo.get_by_email(email)

        password_hash = profile.hashed_password if profile else DUMMY_PASSWORD_HASH
        password_valid = verify_password(password, password_hash)

        if profile is None or not password_valid:
            logger.info("Sign-in rejected")
            return Failure(ErrorKind.UNAUTHENTICATED, INVALID_CREDENTIALS)

        token = create_access_token(profile.id)
        logger.info("Sign-in succeeded", user_id=str(profile.id))
        return Success(SignInResult(access_token=token, profile=profile))

    async def lookup_session(self, token: str | None) -> Profile | None:
        """Resolve a session token to its profile. Any invalid token yields None."""
        if not token:
            return None

        payload = decode_token(token)
        if payload is None or payload.get("type") != ACCESS_TOKEN_TYPE:
            return None

        try:
            profile_id = UUID(str(payload.get("sub", "")))
        except ValueError:
            return None

        return await self.profile_repo.get_by_id(profile_id)
