from typing import Any

from fastapi import APIRouter, BackgroundTasks, Body, Depends, HTTPException
from fastapi.responses import JSONResponse

from core.logging_config import LogContext, get_logger
from models import Account, EmbedConfig
from repositories.embed_config_repository import (
    EmbedConfigRepository,
    CREATE_FAILED_ERROR,
    NO_VALID_FIELDS_ERROR,
    get_embed_config_repository,
)
from schemas.embed_config import EmbedConfigListOut, EmbedCreateOut, EmbedUpdateOut
from services.event_log_service import EventLogService, get_event_log_service
from utils.get_current_account import get_current_account_admin
from .dependencies import get_embed_or_404

router = APIRouter()
logger = get_logger(__name__)


@router.get("/embeds", response_model=EmbedConfigListOut)
def list_embeds(
    account: Account = Depends(get_current_account_admin),
    embed_config_repository: EmbedConfigRepository = Depends(get_embed_config_repository),
):
    """List all embeds, newest first, with their workspace and chat count."""
    embeds = embed_config_repository.where_with_workspace({}, None, {"created_at": "desc"})
    return {"embeds": embeds}


@router.post("/embeds/new", response_model=EmbedCreateOut)
def create_embed(
    background_tasks: BackgroundTasks,
    data: dict[str, Any] = Body(...),
    account: Account = Depends(get_current_account_admin),
    embed_config_repository: EmbedConfigRepository = Depends(get_embed_config_repository),
    event_log_service: EventLogService = Depends(get_event_log_service),
):
    """Create an embed for a workspace.

    The body is a loose mapping of embed fields; unknown or invalid fields
    are dropped, a missing or unknown ``workspace_id`` fails the request.
    """
    with LogContext(user_id=account.id):
        embed, error = embed_config_repository.create(data, account.id)
    if error:
        logger.warning_ctx("Embed creation rejected", error=error, user_id=account.id)
        raise HTTPException(status_code=500 if error == CREATE_FAILED_ERROR else 400, detail=error)

    event_log_service.schedule(background_tasks, "embed_created", {"embedId": embed.id}, account.id)
    return {"embed": embed, "error": None}


@router.post("/embed/update/{embed_id}", response_model=EmbedUpdateOut)
def update_embed(
    background_tasks: BackgroundTasks,
    data: dict[str, Any] = Body(...),
    account: Account = Depends(get_current_account_admin),
    embed: EmbedConfig = Depends(get_embed_or_404),
    embed_config_repository: EmbedConfigRepository = Depends(get_embed_config_repository),
    event_log_service: EventLogService = Depends(get_event_log_service),
):
    """Apply a partial update to an embed."""
    with LogContext(embed_id=embed.id, user_id=account.id):
        success, error, _ = embed_config_repository.update(embed.id, data)
    if not success:
        status_code = 400 if error == NO_VALID_FIELDS_ERROR else 500
        return JSONResponse(status_code=status_code, content={"success": False, "error": error})

    event_log_service.schedule(background_tasks, "embed_updated", {"embedId": embed.id}, account.id)
    return {"success": True, "error": None}


@router.delete("/embed/{embed_id}", response_model=EmbedUpdateOut)
def delete_embed(
    background_tasks: BackgroundTasks,
    account: Account = Depends(get_current_account_admin),
    embed: EmbedConfig = Depends(get_embed_or_404),
    embed_config_repository: EmbedConfigRepository = Depends(get_embed_config_repository),
    event_log_service: EventLogService = Depends(get_event_log_service),
):
    """Delete an embed and, through the cascade, its chat history."""
    embed_id = embed.id
    with LogContext(embed_id=embed_id, user_id=account.id):
        deleted = embed_config_repository.delete({"id": embed_id})
    if not deleted:
        raise HTTPException(status_code=500, detail="Failed to delete embed")

    event_log_service.schedule(background_tasks, "embed_deleted", {"embedId": embed_id}, account.id)
    return {"success": True, "error": None}
