import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy import select
from sqlalchemy.orm import Session

from .auth import create_access_token, safe_decode_sub
from .db import get_db
from .errors import LoginError
from .models import User
from .schemas import AuthToken, LoginRequest

log = logging.getLogger("noteful.login")

router = APIRouter()

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/login")


def create_auth_token(user: User) -> str:
    return create_access_token(str(user.id), {"user": user.serialize()})


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    sub = safe_decode_sub(token)
    if not sub:
        raise HTTPException(status_code=401, detail="Invalid token")

    user = db.get(User, sub)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid token")
    return user


@router.post("/login", response_model=AuthToken)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    user = db.execute(
        select(User).where(User.username == data.username)
    ).scalar_one_or_none()

    if not user:
        log.info("login failed, unknown username: %s", data.username)
        raise LoginError("Incorrect username", "username")

    if not user.validate_password(data.password):
        log.info("login failed, bad password for: %s", data.username)
        raise LoginError("Incorrect password", "password")

    return {"authToken": create_auth_token(user)}


@router.post("/refresh", response_model=AuthToken)
def refresh(user: User = Depends(get_current_user)):
    return {"authToken": create_auth_token(user)}
