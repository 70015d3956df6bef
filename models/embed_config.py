import uuid
from typing import Optional

from sqlalchemy import String, Text, Boolean, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base


def generate_embed_uuid() -> str:
    return str(uuid.uuid4())


class EmbedConfig(Base):
    """Settings for one embeddable chat widget, scoped to a workspace.

    The appearance columns keep the camelCase names the widget and the public
    API use on the wire; the Python attributes are snake_case.
    """
    __tablename__ = "embed_configs"

    uuid: Mapped[str] = mapped_column(String(36), unique=True, nullable=False, default=generate_embed_uuid)
    enabled: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    chat_mode: Mapped[str] = mapped_column(String(32), default="query", nullable=False)

    # JSON text: list of allowed origins, NULL means no restriction
    allowlist_domains: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    allow_model_override: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    allow_temperature_override: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    allow_prompt_override: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    max_chats_per_day: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    max_chats_per_session: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    # Widget appearance
    chat_icon: Mapped[Optional[str]] = mapped_column("chatIcon", String(255), nullable=True)
    button_color: Mapped[Optional[str]] = mapped_column("buttonColor", String(255), nullable=True)
    user_bg_color: Mapped[Optional[str]] = mapped_column("userBgColor", String(255), nullable=True)
    assistant_bg_color: Mapped[Optional[str]] = mapped_column("assistantBgColor", String(255), nullable=True)
    brand_image_url: Mapped[Optional[str]] = mapped_column("brandImageUrl", String(255), nullable=True)
    assistant_name: Mapped[Optional[str]] = mapped_column("assistantName", String(255), nullable=True)
    assistant_icon: Mapped[Optional[str]] = mapped_column("assistantIcon", String(255), nullable=True)
    position: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    window_height: Mapped[Optional[str]] = mapped_column("windowHeight", String(255), nullable=True)
    window_width: Mapped[Optional[str]] = mapped_column("windowWidth", String(255), nullable=True)
    text_size: Mapped[Optional[str]] = mapped_column("textSize", String(255), nullable=True)
    support_email: Mapped[Optional[str]] = mapped_column("supportEmail", String(255), nullable=True)
    # JSON text: list of strings
    default_messages: Mapped[Optional[str]] = mapped_column("defaultMessages", Text, nullable=True)

    workspace_id: Mapped[int] = mapped_column(Integer, ForeignKey("workspaces.id", ondelete="CASCADE"), nullable=False)
    created_by: Mapped[Optional[int]] = mapped_column("createdBy", Integer, ForeignKey("accounts.id"), nullable=True)

    # Populated by EmbedConfigRepository.where_with_workspace
    chat_count = 0

    workspace: Mapped["Workspace"] = relationship("Workspace", back_populates="embed_configs")
    chats: Mapped[list["EmbedChat"]] = relationship(
        "EmbedChat", back_populates="embed_config", cascade="all, delete-orphan", passive_deletes=True
    )

    def __repr__(self):
        return f"<EmbedConfig(id={self.id}, uuid={self.uuid}, workspace_id={self.workspace_id})>"
