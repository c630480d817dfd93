"""User model for directory administrators."""
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, RecordMixin


class User(RecordMixin, Base):
    """Account able to log in; only the password hash is stored."""

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String, unique=True, index=True, nullable=False)
    email: Mapped[str] = mapped_column(String, unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String, nullable=False)
