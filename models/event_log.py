from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import String, Text, Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class EventLog(Base):
    __tablename__ = "event_logs"

    event: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    # "metadata" is reserved on declarative classes
    event_metadata: Mapped[Optional[str]] = mapped_column("metadata", Text, nullable=True)
    user_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    occurred_at: Mapped[datetime] = mapped_column(DateTime, default=lambda: datetime.now(timezone.utc))

    def __repr__(self):
        return f"<EventLog(event={self.event}, user_id={self.user_id})>"
