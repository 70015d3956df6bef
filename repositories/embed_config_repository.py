from typing import Any, Mapping, NamedTuple

from fastapi import Depends
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from core.logging_config import get_logger
from db.session import get_db
from models import EmbedConfig, EmbedChat, Workspace
from models.embed_config import generate_embed_uuid
from repositories.query_helpers import apply_order_by, apply_window, clause_or_empty
from utils.embed_config_fields import (
    clearable_fields,
    parse_allowed_hosts,
    to_attributes,
    validate_fields,
)

logger = get_logger(__name__)

NO_VALID_FIELDS_ERROR = "No valid fields to update!"
EMBED_NOT_FOUND_ERROR = "Embed not found"
CREATE_FAILED_ERROR = "Failed to create embed"
UPDATE_FAILED_ERROR = "Failed to update embed"


class EmbedCreateResult(NamedTuple):
    embed: EmbedConfig | None
    message: str | None = None


class EmbedUpdateResult(NamedTuple):
    success: bool
    error: str | None = None
    embed: EmbedConfig | None = None


class EmbedConfigRepository:
    """Data access for embed configurations.

    Write paths sanitize their input through ``validate_fields``. Storage
    failures are logged and turned into result values (``None``, ``[]``,
    ``False`` or an error message) instead of being raised to the caller.
    """

    parse_allowed_hosts = staticmethod(parse_allowed_hosts)

    def __init__(self, db: Session):
        self.db = db

    def create(self, data: Mapping[str, Any], creator_id: int | None = None) -> EmbedCreateResult:
        validated = validate_fields(data)

        workspace_id = validated.get("workspace_id")
        if workspace_id is None:
            return EmbedCreateResult(None, "A valid workspace_id is required")

        try:
            workspace = self.db.get(Workspace, workspace_id)
            if not workspace:
                return EmbedCreateResult(None, f"Workspace {workspace_id} does not exist")

            values = {"enabled": True, **to_attributes(validated)}
            embed = EmbedConfig(
                **values,
                uuid=generate_embed_uuid(),
                created_by=int(creator_id) if creator_id is not None else None,
            )
            self.db.add(embed)
            self.db.commit()
            self.db.refresh(embed)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error_ctx("Failed to create embed", workspace_id=workspace_id, error=str(e))
            return EmbedCreateResult(None, CREATE_FAILED_ERROR)

        logger.info_ctx("Embed created", embed_id=embed.id, workspace_id=workspace_id)
        return EmbedCreateResult(embed, None)

    def update(self, embed_id: int | None, data: Mapping[str, Any] | None = None) -> EmbedUpdateResult:
        if not embed_id:
            raise ValueError("No embed id provided for update")

        # Explicit values win over "cleared" markers for the same field
        updates = {**clearable_fields(data), **validate_fields(data)}
        if not updates:
            return EmbedUpdateResult(False, NO_VALID_FIELDS_ERROR)

        try:
            embed_pk = int(embed_id)
        except (TypeError, ValueError):
            return EmbedUpdateResult(False, EMBED_NOT_FOUND_ERROR)

        try:
            embed = self.db.get(EmbedConfig, embed_pk)
            if not embed:
                return EmbedUpdateResult(False, EMBED_NOT_FOUND_ERROR)

            for attribute, value in to_attributes(updates).items():
                setattr(embed, attribute, value)

            self.db.commit()
            self.db.refresh(embed)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error_ctx("Failed to update embed", embed_id=embed_id, error=str(e))
            return EmbedUpdateResult(False, UPDATE_FAILED_ERROR)

        return EmbedUpdateResult(True, None, embed)

    def get(self, clause: Mapping[str, Any] | None = None) -> EmbedConfig | None:
        try:
            return self.db.query(EmbedConfig).filter_by(**clause_or_empty(clause)).first()
        except SQLAlchemyError as e:
            logger.error_ctx("Failed to fetch embed", clause=str(clause), error=str(e))
            return None

    def get_with_workspace(self, clause: Mapping[str, Any] | None = None) -> EmbedConfig | None:
        try:
            return (
                self.db.query(EmbedConfig)
                .options(joinedload(EmbedConfig.workspace))
                .filter_by(**clause_or_empty(clause))
                .first()
            )
        except SQLAlchemyError as e:
            logger.error_ctx("Failed to fetch embed with workspace", clause=str(clause), error=str(e))
            return None

    def where(
        self,
        clause: Mapping[str, Any] | None = None,
        limit: int | None = None,
        order_by: Mapping[str, str] | None = None,
    ) -> list[EmbedConfig]:
        try:
            query = self.db.query(EmbedConfig).filter_by(**clause_or_empty(clause))
            query = apply_order_by(query, EmbedConfig, order_by)
            return apply_window(query, limit=limit).all()
        except SQLAlchemyError as e:
            logger.error_ctx("Failed to list embeds", clause=str(clause), error=str(e))
            return []

    def where_with_workspace(
        self,
        clause: Mapping[str, Any] | None = None,
        limit: int | None = None,
        order_by: Mapping[str, str] | None = None,
    ) -> list[EmbedConfig]:
        """List embeds with their workspace loaded and ``chat_count`` set."""
        chat_count = (
            select(func.count(EmbedChat.id))
            .where(EmbedChat.embed_id == EmbedConfig.id)
            .correlate(EmbedConfig)
            .scalar_subquery()
            .label("chat_count")
        )

        try:
            query = (
                self.db.query(EmbedConfig, chat_count)
                .options(joinedload(EmbedConfig.workspace))
                .filter_by(**clause_or_empty(clause))
            )
            query = apply_order_by(query, EmbedConfig, order_by)
            rows = apply_window(query, limit=limit).all()
        except SQLAlchemyError as e:
            logger.error_ctx("Failed to list embeds with workspace", clause=str(clause), error=str(e))
            return []

        embeds = []
        for embed, count in rows:
            embed.chat_count = count or 0
            embeds.append(embed)
        return embeds

    def delete(self, clause: Mapping[str, Any] | None = None) -> bool:
        clause = clause_or_empty(clause)
        if not clause:
            logger.warning("Refusing to delete an embed without a clause")
            return False

        try:
            embed = self.db.query(EmbedConfig).filter_by(**clause).first()
            if not embed:
                return False
            self.db.delete(embed)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error_ctx("Failed to delete embed", clause=str(clause), error=str(e))
            return False

        return True


def get_embed_config_repository(db: Session = Depends(get_db)) -> EmbedConfigRepository:
    return EmbedConfigRepository(db)
