import os
import re
import uuid

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from core.logging_config import get_logger
from core.settings import settings

logger = get_logger(__name__)

ALLOWED_IMAGE_TYPES = ("image/png", "image/jpeg", "image/gif", "image/webp", "image/svg+xml")


class AssetStorageService:
    """Stores embed images (assistant icon, brand image) in S3 or MinIO."""

    KEY_PREFIX = "embeds"
    MAX_NAME_LENGTH = 64

    def __init__(self, s3_client=None, bucket_name: str | None = None):
        self.bucket_name = bucket_name or settings.AWS_S3_ASSETS_BUCKET_NAME
        self.s3_client = s3_client or self._create_s3_client()

    @staticmethod
    def _create_s3_client():
        s3_config = {"region_name": settings.AWS_REGION}

        # Use local endpoint if configured (self-hosted mode)
        if settings.S3_LOCAL_ENDPOINT:
            s3_config["endpoint_url"] = settings.S3_LOCAL_ENDPOINT
        if settings.AWS_ACCESS_KEY_ID and settings.AWS_SECRET_ACCESS_KEY:
            s3_config["aws_access_key_id"] = settings.AWS_ACCESS_KEY_ID
            s3_config["aws_secret_access_key"] = settings.AWS_SECRET_ACCESS_KEY

        return boto3.client("s3", **s3_config)

    def build_key(self, filename: str | None) -> str:
        name = os.path.basename(filename or "") or "asset"
        safe_name = re.sub(r"[^A-Za-z0-9._-]", "_", name)[-self.MAX_NAME_LENGTH:]
        return f"{self.KEY_PREFIX}/{uuid.uuid4()}-{safe_name}"

    def public_url(self, key: str) -> str:
        if settings.ASSETS_PUBLIC_URL:
            base = settings.ASSETS_PUBLIC_URL
        elif settings.S3_LOCAL_ENDPOINT:
            base = f"{settings.S3_LOCAL_ENDPOINT}/{self.bucket_name}"
        else:
            base = f"https://{self.bucket_name}.s3.{settings.AWS_REGION}.amazonaws.com"
        return f"{base.rstrip('/')}/{key}"

    def upload(self, content: bytes, filename: str | None, content_type: str | None) -> str | None:
        """Upload an asset and return its public URL, or None when storage rejects it."""
        key = self.build_key(filename)
        try:
            self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=key,
                Body=content,
                ContentType=content_type or "application/octet-stream",
            )
        except (ClientError, BotoCoreError) as e:
            logger.error_ctx("Asset upload failed", key=key, bucket=self.bucket_name, error=str(e))
            return None

        logger.info_ctx("Asset uploaded", key=key, size=len(content))
        return self.public_url(key)


def get_asset_storage_service() -> AssetStorageService:
    return AssetStorageService()
