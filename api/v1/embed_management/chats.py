from fastapi import APIRouter, Depends

from models import Account
from repositories.embed_chat_repository import EmbedChatRepository, get_embed_chat_repository
from schemas.embed_chat import EmbedChatDeleteOut, EmbedChatPageIn, EmbedChatPageOut
from utils.get_current_account import get_current_account_admin

router = APIRouter()


@router.post("/embed/chats", response_model=EmbedChatPageOut)
def list_embed_chats(
    page: EmbedChatPageIn = EmbedChatPageIn(),
    account: Account = Depends(get_current_account_admin),
    embed_chat_repository: EmbedChatRepository = Depends(get_embed_chat_repository),
):
    """Page through chats of every embed, newest first."""
    chats = embed_chat_repository.where_with_embed_and_workspace(
        {}, page.limit, {"id": "desc"}, page.offset * page.limit
    )
    total_chats = embed_chat_repository.count()
    return {
        "chats": chats,
        "hasPages": total_chats > (page.offset + 1) * page.limit,
        "totalChats": total_chats,
    }


@router.delete("/embed/chats/{chat_id}", response_model=EmbedChatDeleteOut)
def delete_embed_chat(
    chat_id: int,
    account: Account = Depends(get_current_account_admin),
    embed_chat_repository: EmbedChatRepository = Depends(get_embed_chat_repository),
):
    success, error = embed_chat_repository.delete({"id": chat_id})
    return {"success": success, "error": error}
