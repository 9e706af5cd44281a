# wildseries/schemas/auth.py

from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


# ──────────────── Sign Up ────────────────
class RegisterRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    username: Optional[str] = Field(None, min_length=2, max_length=50)


# ──────────────── Login ────────────────
class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
