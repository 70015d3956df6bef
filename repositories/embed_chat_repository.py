from typing import Any, Mapping, NamedTuple

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from core.logging_config import get_logger
from db.session import get_db
from models import EmbedChat, EmbedConfig
from repositories.query_helpers import apply_order_by, apply_window, clause_or_empty

logger = get_logger(__name__)

DELETE_FAILED_ERROR = "Failed to delete embed chats"


class EmbedChatDeleteResult(NamedTuple):
    success: bool
    error: str | None = None


class EmbedChatRepository:
    def __init__(self, db: Session):
        self.db = db

    def where(
        self,
        clause: Mapping[str, Any] | None = None,
        limit: int | None = None,
        order_by: Mapping[str, str] | None = None,
        offset: int | None = None,
    ) -> list[EmbedChat]:
        try:
            query = self.db.query(EmbedChat).filter_by(**clause_or_empty(clause))
            query = apply_order_by(query, EmbedChat, order_by)
            return apply_window(query, limit=limit, offset=offset).all()
        except SQLAlchemyError as e:
            logger.error_ctx("Failed to list embed chats", clause=str(clause), error=str(e))
            return []

    def where_with_embed_and_workspace(
        self,
        clause: Mapping[str, Any] | None = None,
        limit: int | None = None,
        order_by: Mapping[str, str] | None = None,
        offset: int | None = None,
    ) -> list[EmbedChat]:
        """List chats with their embed and the embed's workspace eagerly loaded."""
        try:
            query = (
                self.db.query(EmbedChat)
                .options(joinedload(EmbedChat.embed_config).joinedload(EmbedConfig.workspace))
                .filter_by(**clause_or_empty(clause))
            )
            query = apply_order_by(query, EmbedChat, order_by)
            return apply_window(query, limit=limit, offset=offset).all()
        except SQLAlchemyError as e:
            logger.error_ctx("Failed to list embed chats with embeds", clause=str(clause), error=str(e))
            return []

    def count(self, clause: Mapping[str, Any] | None = None) -> int:
        try:
            return self.db.query(EmbedChat).filter_by(**clause_or_empty(clause)).count()
        except SQLAlchemyError as e:
            logger.error_ctx("Failed to count embed chats", clause=str(clause), error=str(e))
            return 0

    def delete(self, clause: Mapping[str, Any] | None = None) -> EmbedChatDeleteResult:
        clause = clause_or_empty(clause)
        if not clause:
            return EmbedChatDeleteResult(False, "A clause is required to delete embed chats")

        try:
            deleted = self.db.query(EmbedChat).filter_by(**clause).delete(synchronize_session=False)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error_ctx("Failed to delete embed chats", clause=str(clause), error=str(e))
            return EmbedChatDeleteResult(False, DELETE_FAILED_ERROR)

        if not deleted:
            return EmbedChatDeleteResult(False, "Embed chat not found")
        return EmbedChatDeleteResult(True, None)


def get_embed_chat_repository(db: Session = Depends(get_db)) -> EmbedChatRepository:
    return EmbedChatRepository(db)
