"""Unit tests for the key-value substrates."""

import os
import tempfile

import pytest

from src.tools.data_tools.recency_store.kv_store import (
    InMemoryKeyValueStore,
    SqliteKeyValueStore,
    get_db_path,
)
from src.tools.data_tools.recency_store.recency_store import RecencyStore


@pytest.fixture
def temp_db_dir():
    """Create a temporary directory for test database."""
    with tempfile.TemporaryDirectory() as tmpdir:
        os.environ['WEATHER_DB_DIR'] = tmpdir
        yield tmpdir
        # Cleanup
        if 'WEATHER_DB_DIR' in os.environ:
            del os.environ['WEATHER_DB_DIR']


class TestSqliteKeyValueStore:
    """Tests for the SQLite-backed store."""

    def test_init_db(self, temp_db_dir):
        """Test database initialization."""
        SqliteKeyValueStore()
        db_path = get_db_path()
        assert db_path == os.path.join(temp_db_dir, 'weather.db')
        assert os.path.exists(db_path)

    def test_get_set_delete(self, temp_db_dir):
        kv = SqliteKeyValueStore()

        assert kv.get('lastSearched') is None
        kv.set('lastSearched', 'Paris')
        kv.set('lastSearched', 'Rome')
        assert kv.get('lastSearched') == 'Rome'

        kv.delete('lastSearched')
        assert kv.get('lastSearched') is None

    def test_values_survive_reopen(self, temp_db_dir):
        """History written by one store instance is read by the next."""
        RecencyStore(SqliteKeyValueStore()).record_success('Tokyo')

        assert RecencyStore(SqliteKeyValueStore()).load() == (['Tokyo'], 'Tokyo')


class TestInMemoryKeyValueStore:
    """Tests for the dict-backed store."""

    def test_initial_values_are_copied(self):
        initial = {'lastSearched': 'Paris'}
        kv = InMemoryKeyValueStore(initial)
        kv.set('lastSearched', 'Rome')

        assert initial == {'lastSearched': 'Paris'}
        assert kv.get('lastSearched') == 'Rome'

    def test_delete_missing_key(self):
        kv = InMemoryKeyValueStore()
        kv.delete('searchHistory')
        assert kv.get('searchHistory') is None
