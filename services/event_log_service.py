import json
from typing import Any

from fastapi import BackgroundTasks
from sqlalchemy.orm import sessionmaker

from core.logging_config import get_logger
from db.session import SessionLocal, session_scope
from models import EventLog

logger = get_logger(__name__)


class EventLogService:
    """Records management events (embed_created, embed_updated, ...).

    Logging is fire-and-forget: it runs in its own session, usually as a
    background task, and a failure never reaches the request that caused it.
    """

    def __init__(self, session_factory: sessionmaker = SessionLocal):
        self.session_factory = session_factory

    def log_event(self, event: str, metadata: dict[str, Any] | None = None, user_id: int | None = None) -> bool:
        try:
            with session_scope(self.session_factory) as session:
                session.add(EventLog(
                    event=event,
                    event_metadata=json.dumps(metadata or {}, default=str),
                    user_id=user_id,
                ))
        except Exception as e:
            logger.error_ctx("Failed to record event", event_name=event, user_id=user_id, error=str(e))
            return False

        logger.info_ctx("Event recorded", event_name=event, user_id=user_id)
        return True

    def schedule(
        self,
        background_tasks: BackgroundTasks,
        event: str,
        metadata: dict[str, Any] | None = None,
        user_id: int | None = None,
    ) -> None:
        background_tasks.add_task(self.log_event, event, metadata, user_id)


def get_event_log_service() -> EventLogService:
    return EventLogService()
