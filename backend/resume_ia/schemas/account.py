from pydantic import BaseModel, Field


class SignUpIn(BaseModel):
    email: str
    password: str
    confirm_password: str
    display_name: str | None = None


class SignInIn(BaseModel):
    email: str
    password: str


class PasswordResetIn(BaseModel):
    email: str


class DisplayNameIn(BaseModel):
    display_name: str = Field(min_length=1, max_length=128)


class AuthSessionOut(BaseModel):
    account_id: str
    email: str
    id_token: str
    refresh_token: str | None = None
    expires_in: int | None = None
    display_name: str | None = None


class AccountOut(BaseModel):
    account_id: str
    email: str | None = None
    display_name: str | None = None
    email_verified: bool = False
