"""Admin endpoints for managing embed configurations"""

from fastapi import APIRouter
from . import embeds, chats, uploads

router = APIRouter()
router.include_router(embeds.router, tags=["Embed Management"])
router.include_router(chats.router, tags=["Embed Management"])
router.include_router(uploads.router, tags=["Embed Management"])
