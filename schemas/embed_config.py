from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from utils.json_fields import safe_json_parse


class WorkspaceRefOut(BaseModel):
    id: int
    name: str

    model_config = {"from_attributes": True, "populate_by_name": True}


class EmbedAppearanceOut(BaseModel):
    """Widget appearance fields, serialized with the names the widget expects."""
    chat_icon: str | None = Field(None, alias="chatIcon")
    button_color: str | None = Field(None, alias="buttonColor")
    user_bg_color: str | None = Field(None, alias="userBgColor")
    assistant_bg_color: str | None = Field(None, alias="assistantBgColor")
    brand_image_url: str | None = Field(None, alias="brandImageUrl")
    assistant_name: str | None = Field(None, alias="assistantName")
    assistant_icon: str | None = Field(None, alias="assistantIcon")
    position: str | None = None
    window_height: str | None = Field(None, alias="windowHeight")
    window_width: str | None = Field(None, alias="windowWidth")
    text_size: str | None = Field(None, alias="textSize")
    support_email: str | None = Field(None, alias="supportEmail")
    default_messages: list[str] = Field(default_factory=list, alias="defaultMessages")

    model_config = {"from_attributes": True, "populate_by_name": True}

    @field_validator("default_messages", mode="before")
    @classmethod
    def decode_default_messages(cls, value):
        messages = safe_json_parse(value, [])
        if not isinstance(messages, list):
            return []
        return [message for message in messages if isinstance(message, str)]


class PublicEmbedOut(EmbedAppearanceOut):
    id: int
    uuid: str
    enabled: bool
    chat_mode: str
    created_at: datetime = Field(alias="createdAt")
    workspace: WorkspaceRefOut


class PublicEmbedListItemOut(PublicEmbedOut):
    chat_count: int = 0


class PublicEmbedListOut(BaseModel):
    embeds: list[PublicEmbedListItemOut]


class PublicEmbedDetailOut(BaseModel):
    embed: PublicEmbedOut


class EmbedConfigOut(EmbedAppearanceOut):
    id: int
    uuid: str
    enabled: bool
    chat_mode: str
    allowlist_domains: list[str] | None = None
    allow_model_override: bool
    allow_temperature_override: bool
    allow_prompt_override: bool
    max_chats_per_day: int | None = None
    max_chats_per_session: int | None = None
    workspace_id: int
    created_by: int | None = Field(None, alias="createdBy")
    created_at: datetime = Field(alias="createdAt")

    @field_validator("allowlist_domains", mode="before")
    @classmethod
    def decode_allowlist(cls, value):
        if not value:
            return None
        domains = safe_json_parse(value, [])
        return domains if isinstance(domains, list) else []


class EmbedConfigWithWorkspaceOut(EmbedConfigOut):
    workspace: WorkspaceRefOut
    chat_count: int = 0


class EmbedConfigListOut(BaseModel):
    embeds: list[EmbedConfigWithWorkspaceOut]


class EmbedCreateOut(BaseModel):
    embed: EmbedConfigOut
    error: str | None = None


class EmbedUpdateOut(BaseModel):
    success: bool
    error: str | None = None


class EmbedAssetUploadOut(BaseModel):
    success: bool
    image_url: str = Field(alias="imageUrl")

    model_config = {"populate_by_name": True}


class WidgetConfigOut(EmbedAppearanceOut):
    """What the embedded widget needs to render and talk to the chat endpoint."""
    uuid: str
    chat_mode: str
    allow_model_override: bool
    allow_temperature_override: bool
    allow_prompt_override: bool
    max_chats_per_session: int | None = None
