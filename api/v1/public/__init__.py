"""Public API endpoints"""

from fastapi import APIRouter
from . import embed, widget

router = APIRouter()
router.include_router(embed.router, prefix="/embed", tags=["Public Embeds"])
router.include_router(widget.router, prefix="/widget", tags=["Embed Widget"])
