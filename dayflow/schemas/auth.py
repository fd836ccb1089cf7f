from pydantic import BaseModel, ConfigDict
from typing import Optional


class LoginRequest(BaseModel):
    login_id: str
    password: str


class CurrentUser(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    login_id: str
    email: str
    first_name: str
    last_name: str
    role: str
    profile_picture: Optional[str] = None
    must_change_password: bool


class Token(BaseModel):
    access_token: str
    token_type: str
    user: CurrentUser


class PasswordChange(BaseModel):
    current_password: str
    new_password: str
