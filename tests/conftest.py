"""Common test fixtures for the notebook CLI."""

import io
import tempfile
from pathlib import Path

import pytest

from notebook.config import config
from notebook.models.db_models import create_db_engine, get_session_factory, init_db
from notebook.services.tag_service import TagService
from notebook.storage.tag_repository import TagRepository
from tests.fakes import RecordingErrorLogger


@pytest.fixture
def temp_dir():
    """Create a temporary directory for the database and logs."""
    with tempfile.TemporaryDirectory() as tmp:
        yield Path(tmp)


@pytest.fixture
def test_config(temp_dir, monkeypatch):
    """Point the global config at a throwaway SQLite database."""
    database_url = f"sqlite:///{temp_dir / 'test_notebook.db'}"
    log_dir = temp_dir / "logs"
    # The environment feeds each CLI run, the global instance feeds the rest
    monkeypatch.setenv("NOTEBOOK_DATABASE_URL", database_url)
    monkeypatch.setenv("NOTEBOOK_LOG_DIR", str(log_dir))
    monkeypatch.setattr(config, "database_url", database_url)
    monkeypatch.setattr(config, "log_dir", log_dir)
    yield config


@pytest.fixture
def engine(test_config):
    """Create an engine with the schema in place."""
    engine = init_db(create_db_engine(test_config.get_db_url(), connect_args={}))
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return get_session_factory(engine)


@pytest.fixture
def tag_repository(session_factory):
    """Create a test tag repository."""
    yield TagRepository(session_factory)


@pytest.fixture
def error_logger():
    return RecordingErrorLogger()


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def tag_service(tag_repository, error_logger, output):
    """Create a TagService writing into an in-memory buffer."""
    yield TagService(
        repository=tag_repository, error_logger=error_logger, out=output
    )
