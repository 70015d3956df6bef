import secrets
from typing import Optional

from sqlalchemy import String, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


def generate_api_key() -> str:
    """Generate a secure API key with 'ek_' prefix."""
    return f"ek_{secrets.token_urlsafe(32)}"


class ApiKey(Base):
    __tablename__ = "api_keys"

    secret: Mapped[str] = mapped_column(String(64), unique=True, nullable=False, default=generate_api_key)
    created_by: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("accounts.id"), nullable=True)

    def __repr__(self):
        return f"<ApiKey(id={self.id})>"
