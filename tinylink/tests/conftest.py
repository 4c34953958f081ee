import pytest
from fastapi.testclient import TestClient

from tinylink.app_factory import create_app
from tinylink.core.config import Settings
from tinylink.db.Connection.database import Database
from tinylink.services.shortener import LinkRegistry


# File-backed SQLite so that concurrent tests get real, separate connections
@pytest.fixture
def database_url(tmp_path):
    return f"sqlite:///{tmp_path / 'tinylink_test.db'}"


@pytest.fixture
def database(database_url):
    """Creates a fresh database for each test."""
    db = Database(database_url, pool_size=10, max_overflow=20, timeout=30)
    db.create_all()
    try:
        yield db
    finally:
        db.dispose()


@pytest.fixture
def test_settings(database_url):
    return Settings(DATABASE_URL=database_url, STATIC_DIR=None, LOG_LEVEL="DEBUG")


@pytest.fixture
def registry(database):
    return LinkRegistry(database)


@pytest.fixture
def app(test_settings, database):
    return create_app(test_settings, database)


@pytest.fixture
def client(app):
    """Creates a test client bound to the per-test database."""
    return TestClient(app)


@pytest.fixture
def sample_urls():
    """Provides sample URLs for testing."""
    return [
        "https://example.com/test1",
        "https://google.com/search?q=test",
        "https://github.com/user/repo",
    ]
