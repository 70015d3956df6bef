"""
Configuration endpoint for the embeddable chat widget.

No credentials are required. The embed's allowlist decides which page
origins may load it: an unset allowlist allows any origin, an empty one
allows none.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException

from core.logging_config import get_logger
from repositories.embed_config_repository import EmbedConfigRepository, get_embed_config_repository
from schemas.embed_config import WidgetConfigOut

router = APIRouter()
logger = get_logger(__name__)


def _normalize_origin(origin: str) -> str:
    return origin.strip().rstrip("/").lower()


def is_origin_allowed(allowed_hosts: Optional[list], origin: Optional[str]) -> bool:
    if allowed_hosts is None:
        return True
    if not origin:
        return False
    normalized = _normalize_origin(origin)
    return any(
        isinstance(host, str) and _normalize_origin(host) == normalized
        for host in allowed_hosts
    )


@router.get("/{embed_uuid}/config", response_model=WidgetConfigOut)
def get_widget_config(
    embed_uuid: str,
    origin: Optional[str] = Header(None),
    embed_config_repository: EmbedConfigRepository = Depends(get_embed_config_repository),
):
    embed = embed_config_repository.get({"uuid": embed_uuid})
    if not embed or not embed.enabled:
        raise HTTPException(status_code=404, detail="Embed not found")

    allowed_hosts = embed_config_repository.parse_allowed_hosts(embed)
    if not is_origin_allowed(allowed_hosts, origin):
        logger.warning_ctx("Widget origin not allowed", embed_id=embed.id, origin=origin)
        raise HTTPException(status_code=401, detail="Invalid request.")

    return embed
