import pytest
from unittest.mock import Mock
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker

from db.session import session_scope
from models import Workspace


@pytest.mark.unit
class TestSessionScope:

    def test_commits_and_closes(self, db_session):
        factory = sessionmaker(bind=db_session.get_bind())

        with session_scope(factory) as session:
            session.add(Workspace(name="Acme", slug="acme"))

        assert db_session.query(Workspace).filter_by(slug="acme").count() == 1

    def test_storage_error_rolls_back_and_propagates(self):
        mock_session = Mock()
        mock_session.commit.side_effect = OperationalError("INSERT", {}, Exception("db down"))

        with pytest.raises(OperationalError):
            with session_scope(Mock(return_value=mock_session)):
                pass

        mock_session.rollback.assert_called_once()
        mock_session.close.assert_called_once()

    def test_other_errors_roll_back_without_commit(self):
        mock_session = Mock()

        with pytest.raises(RuntimeError):
            with session_scope(Mock(return_value=mock_session)):
                raise RuntimeError("abort")

        mock_session.commit.assert_not_called()
        mock_session.rollback.assert_called_once()
        mock_session.close.assert_called_once()
