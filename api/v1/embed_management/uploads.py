from fastapi import APIRouter, BackgroundTasks, Depends, File, HTTPException, UploadFile, status
from starlette.concurrency import run_in_threadpool

from core.logging_config import get_logger
from core.settings import settings
from models import Account, EmbedConfig
from repositories.embed_config_repository import EmbedConfigRepository, get_embed_config_repository
from schemas.embed_config import EmbedAssetUploadOut
from services.asset_storage_service import (
    ALLOWED_IMAGE_TYPES,
    AssetStorageService,
    get_asset_storage_service,
)
from services.event_log_service import EventLogService, get_event_log_service
from utils.get_current_account import get_current_account_admin
from .dependencies import get_embed_or_404

router = APIRouter()
logger = get_logger(__name__)


async def store_embed_asset(
    field: str,
    embed: EmbedConfig,
    file: UploadFile,
    embed_config_repository: EmbedConfigRepository,
    asset_storage_service: AssetStorageService,
) -> str:
    """Upload an image for ``field`` and point the embed at it. Returns the public URL."""
    if file.content_type not in ALLOWED_IMAGE_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid file type. Allowed: {', '.join(ALLOWED_IMAGE_TYPES)}"
        )

    max_bytes = settings.ASSET_MAX_UPLOAD_BYTES
    content = await file.read(max_bytes + 1)
    if len(content) > max_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File size exceeds {max_bytes // (1024 * 1024)}MB limit"
        )
    if not content:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="File upload failed.")

    image_url = await run_in_threadpool(
        asset_storage_service.upload, content, file.filename, file.content_type
    )
    if not image_url:
        raise HTTPException(status_code=500, detail="Failed to upload file to storage")

    success, error, _ = embed_config_repository.update(embed.id, {field: image_url})
    if not success:
        logger.error_ctx("Failed to store uploaded asset on embed", embed_id=embed.id, field=field, error=error)
        raise HTTPException(status_code=500, detail="Internal server error.")

    return image_url


@router.post("/embed/{embed_id}/upload-assistantIcon", response_model=EmbedAssetUploadOut)
async def upload_assistant_icon(
    background_tasks: BackgroundTasks,
    file: UploadFile = File(..., alias="assistantIcon"),
    account: Account = Depends(get_current_account_admin),
    embed: EmbedConfig = Depends(get_embed_or_404),
    embed_config_repository: EmbedConfigRepository = Depends(get_embed_config_repository),
    asset_storage_service: AssetStorageService = Depends(get_asset_storage_service),
    event_log_service: EventLogService = Depends(get_event_log_service),
):
    image_url = await store_embed_asset(
        "assistantIcon", embed, file, embed_config_repository, asset_storage_service
    )
    event_log_service.schedule(
        background_tasks, "embed_updated", {"embedId": embed.id, "field": "assistantIcon"}, account.id
    )
    return {"success": True, "imageUrl": image_url}


@router.post("/embed/{embed_id}/upload-brandImageUrl", response_model=EmbedAssetUploadOut)
async def upload_brand_image(
    background_tasks: BackgroundTasks,
    file: UploadFile = File(..., alias="brandImageUrl"),
    account: Account = Depends(get_current_account_admin),
    embed: EmbedConfig = Depends(get_embed_or_404),
    embed_config_repository: EmbedConfigRepository = Depends(get_embed_config_repository),
    asset_storage_service: AssetStorageService = Depends(get_asset_storage_service),
    event_log_service: EventLogService = Depends(get_event_log_service),
):
    image_url = await store_embed_asset(
        "brandImageUrl", embed, file, embed_config_repository, asset_storage_service
    )
    event_log_service.schedule(
        background_tasks, "embed_updated", {"embedId": embed.id, "field": "brandImageUrl"}, account.id
    )
    return {"success": True, "imageUrl": image_url}
