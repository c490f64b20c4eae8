from pydantic import BaseModel, EmailStr, Field

from src.saas_admin.schemas.profile import ProfileRead


class SignInRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=100)


class SignInResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    redirect_to: str = Field(description="Landing area for the signed-in caller's role")
    profile: ProfileRead
