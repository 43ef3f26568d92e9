from __future__ import annotations

import uuid

from sqlalchemy import Column, DateTime, String, Text

from .auth import utcnow, verify_password
from .db import Base


def _new_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    __tablename__ = "users"

    # uuid stored as text so the same model works on SQLite and Postgres
    id = Column(String(36), primary_key=True, default=_new_id)

    username = Column(Text, unique=True, nullable=False, index=True)
    password_hash = Column(Text, nullable=False)
    fullname = Column(Text, nullable=False, default="")

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    def serialize(self) -> dict:
        return {"id": self.id, "username": self.username, "fullname": self.fullname}

    def validate_password(self, password: str) -> bool:
        return verify_password(password, self.password_hash)

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username!r}>"
