"""
Embed API endpoints for API key holders.

Every route requires a valid key in the ``X-API-Key`` header.
``defaultMessages`` is always returned as a decoded list.
"""
from fastapi import APIRouter, Depends, HTTPException

from repositories.embed_chat_repository import EmbedChatRepository, get_embed_chat_repository
from repositories.embed_config_repository import EmbedConfigRepository, get_embed_config_repository
from schemas.embed_chat import EmbedChatListOut, EmbedSessionChatListOut
from schemas.embed_config import PublicEmbedDetailOut, PublicEmbedListOut
from utils.api_key_auth import get_api_key

router = APIRouter(dependencies=[Depends(get_api_key)])


@router.get("", response_model=PublicEmbedListOut)
def list_embeds(
    embed_config_repository: EmbedConfigRepository = Depends(get_embed_config_repository),
):
    embeds = embed_config_repository.where_with_workspace()
    return {"embeds": embeds}


@router.get("/{embed_uuid}", response_model=PublicEmbedDetailOut)
def get_embed(
    embed_uuid: str,
    embed_config_repository: EmbedConfigRepository = Depends(get_embed_config_repository),
):
    embed = embed_config_repository.get_with_workspace({"uuid": embed_uuid})
    if not embed:
        raise HTTPException(status_code=404, detail="Embed not found")
    return {"embed": embed}


@router.get("/{embed_uuid}/chats", response_model=EmbedChatListOut)
def list_embed_chats(
    embed_uuid: str,
    embed_config_repository: EmbedConfigRepository = Depends(get_embed_config_repository),
    embed_chat_repository: EmbedChatRepository = Depends(get_embed_chat_repository),
):
    """All chats of an embed across sessions, oldest first."""
    embed = embed_config_repository.get({"uuid": embed_uuid})
    if not embed:
        raise HTTPException(status_code=404, detail="Embed not found")

    chats = embed_chat_repository.where({"embed_id": embed.id}, order_by={"id": "asc"})
    return {"chats": chats}


@router.get("/{embed_uuid}/chats/{session_uuid}", response_model=EmbedSessionChatListOut)
def list_embed_session_chats(
    embed_uuid: str,
    session_uuid: str,
    embed_config_repository: EmbedConfigRepository = Depends(get_embed_config_repository),
    embed_chat_repository: EmbedChatRepository = Depends(get_embed_chat_repository),
):
    embed = embed_config_repository.get({"uuid": embed_uuid})
    if not embed:
        raise HTTPException(status_code=404, detail="Embed not found")

    chats = embed_chat_repository.where(
        {"embed_id": embed.id, "session_id": session_uuid},
        order_by={"id": "asc"},
    )
    if not chats:
        raise HTTPException(status_code=404, detail="No chats found for this session")
    return {"chats": chats}
