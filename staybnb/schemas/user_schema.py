from pydantic import EmailStr, Field
from staybnb.schemas.base_schema import CamelModel


class UserBase(CamelModel):
    first_name: str
    last_name: str
    email: EmailStr
    username: str


class UserCreate(UserBase):
    password: str = Field(..., min_length=8)


class UserOut(UserBase):
    id: int


class UserSummary(CamelModel):
    """Public face of a user attached to spots, reviews and bookings"""
    id: int
    first_name: str
    last_name: str


class UserLogin(CamelModel):
    credential: str = Field(..., description="Email or username")
    password: str


class LoginResponse(CamelModel):
    access_token: str
    refresh_token: str
    token_type: str
    user: UserOut


class RefreshTokenRequest(CamelModel):
    refresh_token: str


class RefreshTokenResponse(CamelModel):
    access_token: str
    refresh_token: str
    token_type: str
