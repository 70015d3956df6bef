import json
import pytest
from unittest.mock import Mock
from fastapi import BackgroundTasks
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker

from models import EventLog
from services.event_log_service import EventLogService


@pytest.mark.unit
class TestEventLogService:

    def test_log_event_persists_event(self, db_session):
        service = EventLogService(session_factory=sessionmaker(bind=db_session.get_bind()))

        assert service.log_event("embed_created", {"embedId": 3}, user_id=7) is True

        event = db_session.query(EventLog).one()
        assert event.event == "embed_created"
        assert json.loads(event.event_metadata) == {"embedId": 3}
        assert event.user_id == 7

    def test_log_event_failure_is_swallowed(self):
        mock_session = Mock()
        mock_session.commit.side_effect = OperationalError("INSERT", {}, Exception("db down"))
        service = EventLogService(session_factory=Mock(return_value=mock_session))

        assert service.log_event("embed_deleted", {"embedId": 1}) is False
        mock_session.rollback.assert_called_once()
        mock_session.close.assert_called_once()

    def test_schedule_adds_background_task(self):
        service = EventLogService(session_factory=Mock())
        background_tasks = BackgroundTasks()

        service.schedule(background_tasks, "embed_updated", {"embedId": 2}, 5)

        assert len(background_tasks.tasks) == 1
        task = background_tasks.tasks[0]
        assert task.func == service.log_event
        assert task.args == ("embed_updated", {"embedId": 2}, 5)
