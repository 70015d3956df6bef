from fastapi import Depends, HTTPException, Path

from models import EmbedConfig
from repositories.embed_config_repository import EmbedConfigRepository, get_embed_config_repository


def get_embed_or_404(
    embed_id: int = Path(..., description="Embed id"),
    embed_config_repository: EmbedConfigRepository = Depends(get_embed_config_repository),
) -> EmbedConfig:
    embed = embed_config_repository.get({"id": embed_id})
    if not embed:
        raise HTTPException(status_code=404, detail="Embed not found")
    return embed
