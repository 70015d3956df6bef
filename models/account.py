import enum
from typing import Optional

from sqlalchemy import String, Boolean, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class AccountRole(str, enum.Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    DEFAULT = "default"


class Account(Base):
    __tablename__ = "accounts"

    username: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    role: Mapped[AccountRole] = mapped_column(
        SQLEnum(AccountRole, values_callable=lambda x: [e.value for e in x]),
        default=AccountRole.DEFAULT,
        nullable=False,
    )
    suspended: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    def __repr__(self):
        return f"<Account(id={self.id}, username={self.username}, role={self.role})>"
