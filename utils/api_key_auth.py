"""
API Key authentication for the public embed API
"""
from typing import Optional
from fastapi import Header, HTTPException, status, Depends
from sqlalchemy.exc import SQLAlchemyError

from models import ApiKey
from services.api_key_service import ApiKeyService, get_api_key_service


async def get_api_key(
    x_api_key: Optional[str] = Header(None, description="API Key for authentication"),
    api_key_service: ApiKeyService = Depends(get_api_key_service),
) -> ApiKey:
    """
    Validate the API key from the X-API-Key header.

    Args:
        x_api_key: API key from X-API-Key header
        api_key_service: API key service instance

    Returns:
        The matching ApiKey record

    Raises:
        HTTPException: If the API key is missing or invalid
    """
    if not x_api_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-API-Key header",
            headers={"WWW-Authenticate": "ApiKey"},
        )

    try:
        api_key = api_key_service.get_by_secret(x_api_key)
    except SQLAlchemyError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"API key validation failed: {str(e)}"
        )

    if not api_key:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid API Key",
        )

    return api_key
