from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from schemas.embed_config import WorkspaceRefOut
from utils.json_fields import safe_json_parse


class EmbedChatOut(BaseModel):
    id: int
    session_id: str
    prompt: str
    response: str
    created_at: datetime = Field(alias="createdAt")

    model_config = {"from_attributes": True, "populate_by_name": True}


class EmbedSessionChatOut(BaseModel):
    id: int
    prompt: str
    response: str
    created_at: datetime = Field(alias="createdAt")

    model_config = {"from_attributes": True, "populate_by_name": True}


class EmbedChatListOut(BaseModel):
    chats: list[EmbedChatOut]


class EmbedSessionChatListOut(BaseModel):
    chats: list[EmbedSessionChatOut]


class EmbedRefOut(BaseModel):
    id: int
    uuid: str
    workspace: WorkspaceRefOut

    model_config = {"from_attributes": True, "populate_by_name": True}


class EmbedChatAdminOut(EmbedChatOut):
    include: bool
    connection_information: dict[str, Any] = Field(default_factory=dict)
    embed_config: EmbedRefOut

    @field_validator("connection_information", mode="before")
    @classmethod
    def decode_connection_information(cls, value):
        decoded = safe_json_parse(value, {})
        return decoded if isinstance(decoded, dict) else {}


class EmbedChatPageIn(BaseModel):
    offset: int = Field(0, ge=0)
    limit: int = Field(20, ge=1, le=100)


class EmbedChatPageOut(BaseModel):
    chats: list[EmbedChatAdminOut]
    has_pages: bool = Field(alias="hasPages")
    total_chats: int = Field(alias="totalChats")

    model_config = {"populate_by_name": True}


class EmbedChatDeleteOut(BaseModel):
    success: bool
    error: str | None = None
