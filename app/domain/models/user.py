"""User domain model — maps to the 'users' table."""

import secrets

from sqlalchemy import Column, String, Boolean, DateTime, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.infrastructure.database import Base


def generate_user_id() -> str:
    """24 hex characters, the shape clients validate user ids against."""
    return secrets.token_hex(12)


class User(Base):
    __tablename__ = "users"

    id = Column(String(24), primary_key=True, default=generate_user_id)
    name = Column(String(200), nullable=False)
    surname = Column(String(200), nullable=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    avatar = Column(String(500), nullable=True)

    # Practice schedule
    time = Column(String(20), nullable=False, default="")
    days = Column(JSON, nullable=False, default=list)
    has_completed_settings = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    favorites = relationship("Favorite", back_populates="user", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User {self.email}>"
