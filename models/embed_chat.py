from typing import Optional

from sqlalchemy import String, Text, Boolean, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base


class EmbedChat(Base):
    __tablename__ = "embed_chats"

    prompt: Mapped[str] = mapped_column(Text, nullable=False)
    # JSON text as produced by the chat pipeline
    response: Mapped[str] = mapped_column(Text, nullable=False)
    session_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    include: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    connection_information: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    embed_id: Mapped[int] = mapped_column(Integer, ForeignKey("embed_configs.id", ondelete="CASCADE"), nullable=False)

    embed_config: Mapped["EmbedConfig"] = relationship("EmbedConfig", back_populates="chats")

    def __repr__(self):
        return f"<EmbedChat(id={self.id}, embed_id={self.embed_id}, session_id={self.session_id})>"
