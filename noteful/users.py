import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .auth import hash_password
from .db import get_db
from .errors import UsernameTaken
from .models import User
from .schemas import UserPublic
from .validation import validate_new_user

log = logging.getLogger("noteful.users")

router = APIRouter()


@router.post("/users", status_code=201, response_model=UserPublic)
def create_user(
    payload: Optional[Dict[str, Any]] = Body(None),
    db: Session = Depends(get_db),
):
    data = validate_new_user(payload if payload is not None else {})

    existing = db.execute(
        select(User).where(User.username == data.username)
    ).scalar_one_or_none()
    if existing:
        log.info("registration rejected, username taken: %s", data.username)
        raise UsernameTaken()

    user = User(
        username=data.username,
        password_hash=hash_password(data.password),
        fullname=data.fullname,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # lost a race with a concurrent registration; the unique index decides
        db.rollback()
        log.info("registration rejected by unique index: %s", data.username)
        raise UsernameTaken()
    db.refresh(user)

    log.info("created user id=%s username=%s", user.id, user.username)
    return user
