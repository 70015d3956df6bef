from fastapi import Depends
from sqlalchemy.orm import Session

from db.session import get_db
from models import ApiKey


class ApiKeyService:
    """API keys for the public embed API, stored in the main database."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_secret(self, secret: str) -> ApiKey | None:
        return self.db.query(ApiKey).filter(ApiKey.secret == secret).first()

    def list_keys(self) -> list[ApiKey]:
        return self.db.query(ApiKey).order_by(ApiKey.created_at.desc()).all()

    def create(self, created_by: int | None = None) -> ApiKey:
        api_key = ApiKey(created_by=created_by)
        self.db.add(api_key)
        self.db.commit()
        self.db.refresh(api_key)
        return api_key

    def delete(self, api_key_id: int) -> bool:
        api_key = self.db.get(ApiKey, api_key_id)
        if not api_key:
            return False
        self.db.delete(api_key)
        self.db.commit()
        return True


def get_api_key_service(db: Session = Depends(get_db)) -> ApiKeyService:
    return ApiKeyService(db)
