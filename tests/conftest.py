import pytest

from pccs_tutor.db import init_db
from pccs_tutor.settings import SqliteSettingsStore


@pytest.fixture
def tmp_db(tmp_path):
    """Provide a temporary SQLite database path for tests."""
    db_path = str(tmp_path / "test_tutor.db")
    return db_path


@pytest.fixture
def store(tmp_db):
    """A settings store backed by a fresh temporary database."""
    init_db(tmp_db)
    return SqliteSettingsStore(tmp_db)
