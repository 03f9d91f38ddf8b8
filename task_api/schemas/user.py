from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel


class UserCredentials(BaseModel):
    # Usernames are case-sensitive and stored exactly as given
    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1)

    @field_validator("password")
    @classmethod
    def check_password_length(cls, v):
        if len(v.encode("utf-8")) > 72:
            raise ValueError("password must be at most 72 bytes")
        return v


class AuthResponse(BaseModel):
    message: str
    token: str


class Token(BaseModel):
    access_token: str
    token_type: str


class TokenRequest(BaseModel):
    token: str | None = None


class TokenClaims(BaseModel):
    user_id: str
    username: str

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class VerifyResponse(BaseModel):
    user: TokenClaims | None = None
    valid: bool


class MessageResponse(BaseModel):
    message: str
