# journal_api/api/schemas/auth_schema.py
from pydantic import BaseModel, EmailStr, Field

from journal_api.api.schemas.user_schema import UserResponse


class SignupRequest(BaseModel):
    name: str = Field(min_length=1, max_length=50)
    email: EmailStr = Field(max_length=255)
    password: str = Field(min_length=6, max_length=200)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=200)


class RefreshRequest(BaseModel):
    # vazio/ausente vira MissingToken no manager, não 422
    refresh_token: str | None = None


class TokenPairResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "Bearer"


class AuthResponse(TokenPairResponse):
    user: UserResponse
