from typing import Any, Mapping

from sqlalchemy.orm import Query

from core.logging_config import get_logger

logger = get_logger(__name__)


def apply_order_by(query: Query, model, order_by: Mapping[str, str] | None) -> Query:
    """Apply ``{"column": "asc" | "desc"}`` ordering to a query."""
    if not order_by:
        return query

    for column_name, direction in order_by.items():
        column = getattr(model, column_name, None)
        if column is None:
            logger.warning(f"Ignoring unknown order_by column {column_name!r} for {model.__name__}")
            continue
        query = query.order_by(column.desc() if str(direction).lower() == "desc" else column.asc())
    return query


def apply_window(query: Query, limit: int | None = None, offset: int | None = None) -> Query:
    if offset:
        query = query.offset(offset)
    if limit is not None:
        query = query.limit(limit)
    return query


def clause_or_empty(clause: Mapping[str, Any] | None) -> dict[str, Any]:
    return dict(clause) if clause else {}
