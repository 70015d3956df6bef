import json
from typing import Generator
import pytest
from unittest.mock import Mock
from sqlalchemy import create_engine, event, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient
from faker import Faker

from main import app
from models.base import Base
from models import Account, AccountRole, ApiKey, EmbedChat, EmbedConfig, Workspace
from models.embed_config import generate_embed_uuid
from db.session import get_db
from core.settings import Settings
from services.event_log_service import get_event_log_service
from utils.get_current_account import get_current_account_admin

fake = Faker()

# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={
        "check_same_thread": False,
    },
    poolclass=StaticPool,
)


@event.listens_for(engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # Needed for ON DELETE CASCADE from embeds to their chats
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """Create a test database session."""
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def mock_event_log_service():
    return Mock()


@pytest.fixture(scope="function")
def client(db_session: Session, mock_event_log_service) -> Generator[TestClient, None, None]:
    """Create a test client with database session override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_event_log_service] = lambda: mock_event_log_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_client(client: TestClient, sample_account: Account) -> TestClient:
    """Test client authenticated as an admin account."""
    app.dependency_overrides[get_current_account_admin] = lambda: sample_account
    return client


@pytest.fixture
def mock_settings():
    """Mock settings for testing."""
    return Settings(
        DATABASE_NAME="test_db",
        DATABASE_USER="test_user",
        DATABASE_PASSWORD="test_pass",
        DATABASE_HOST="localhost",
        DATABASE_PORT=5432,
        JWT_SECRET_KEY="test-secret-key-with-enough-length-for-hs256",
        AWS_REGION="us-east-1",
        AWS_ACCESS_KEY_ID="test_key",
        AWS_SECRET_ACCESS_KEY="test_secret",
        AWS_S3_ASSETS_BUCKET_NAME="test-assets",
        ASSETS_PUBLIC_URL=None,
        S3_LOCAL_ENDPOINT=None,
    )


@pytest.fixture
def sample_workspace(db_session: Session) -> Workspace:
    """Create a sample workspace for testing."""
    workspace = Workspace(
        name=fake.company(),
        slug=fake.unique.slug(),
    )
    db_session.add(workspace)
    db_session.commit()
    db_session.refresh(workspace)
    return workspace


@pytest.fixture
def sample_account(db_session: Session) -> Account:
    """Create a sample admin account for testing."""
    account = Account(
        username=fake.unique.user_name(),
        password_hash="not-a-real-hash",
        role=AccountRole.ADMIN,
    )
    db_session.add(account)
    db_session.commit()
    db_session.refresh(account)
    return account


@pytest.fixture
def sample_embed(db_session: Session, sample_workspace: Workspace, sample_account: Account) -> EmbedConfig:
    """Create a sample embed for testing."""
    embed = EmbedConfig(
        uuid=generate_embed_uuid(),
        enabled=True,
        chat_mode="chat",
        workspace_id=sample_workspace.id,
        created_by=sample_account.id,
        assistant_name="Support Bot",
        default_messages=json.dumps(["Hi there!", "How can I help?"]),
    )
    db_session.add(embed)
    db_session.commit()
    db_session.refresh(embed)
    return embed


@pytest.fixture
def sample_chats(db_session: Session, sample_embed: EmbedConfig) -> list[EmbedChat]:
    """Three chats: two in one session, one in another."""
    first_session, second_session = fake.uuid4(), fake.uuid4()
    chats = [
        EmbedChat(
            prompt=fake.sentence(),
            response=json.dumps({"text": fake.sentence()}),
            session_id=session_id,
            connection_information=json.dumps({"host": "https://example.com"}),
            embed_id=sample_embed.id,
        )
        for session_id in (first_session, first_session, second_session)
    ]
    db_session.add_all(chats)
    db_session.commit()
    for chat in chats:
        db_session.refresh(chat)
    return chats


@pytest.fixture
def sample_api_key(db_session: Session, sample_account: Account) -> ApiKey:
    api_key = ApiKey(created_by=sample_account.id)
    db_session.add(api_key)
    db_session.commit()
    db_session.refresh(api_key)
    return api_key


@pytest.fixture
def mock_s3_client():
    """Mock S3 client."""
    mock_client = Mock()
    mock_client.put_object.return_value = {'ETag': 'test-etag'}
    return mock_client
