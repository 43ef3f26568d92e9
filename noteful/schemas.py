# noteful/schemas.py
from __future__ import annotations

from pydantic import BaseModel, ConfigDict


# ---------------- Users ----------------

class UserCreate(BaseModel):
    username: str
    password: str
    fullname: str = ""


class UserPublic(BaseModel):
    id: str
    username: str
    fullname: str

    model_config = ConfigDict(from_attributes=True)


# ---------------- Auth ----------------

class LoginRequest(BaseModel):
    username: str
    password: str


class AuthToken(BaseModel):
    authToken: str
