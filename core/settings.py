from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_NAME: str = "embeds"
    DATABASE_USER: str = "embeds"
    DATABASE_PASSWORD: str = "embeds"
    DATABASE_HOST: str = "localhost"
    DATABASE_PORT: int = 5432

    @property
    def DATABASE_URL(self) -> str:
        return (
            f"postgresql+psycopg2://{self.DATABASE_USER}:"
            f"{self.DATABASE_PASSWORD}@{self.DATABASE_HOST}:"
            f"{self.DATABASE_PORT}/{self.DATABASE_NAME}"
        )

    # Standalone auth settings
    JWT_SECRET_KEY: str | None = None
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    # Asset storage for embed icons and brand images
    # MinIO S3-compatible storage (leave empty for AWS S3)
    S3_LOCAL_ENDPOINT: str | None = None
    AWS_REGION: str = "eu-central-1"
    AWS_ACCESS_KEY_ID: str | None = None
    AWS_SECRET_ACCESS_KEY: str | None = None
    AWS_S3_ASSETS_BUCKET_NAME: str = "embed-assets-dev"
    # Public base URL for uploaded assets, defaults to the bucket URL
    ASSETS_PUBLIC_URL: str | None = None
    ASSET_MAX_UPLOAD_BYTES: int = 5 * 1024 * 1024

    CORS_ORIGINS: str = "*"

    DEBUG: bool = False

    # Sentry error tracking
    SENTRY_DSN: str | None = None
    SENTRY_ENVIRONMENT: str = "development"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


settings = Settings()
