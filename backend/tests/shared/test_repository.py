"""Tests for shared/repository.py."""

from types import SimpleNamespace
from typing import Optional
from unittest.mock import MagicMock

from shared.repository import BaseRepository


class TestBaseRepository:
    def test_init_stores_db_client(self):
        """Should store the database client in _db attribute."""
        mock_db = MagicMock()
        repo = BaseRepository(mock_db)
        assert repo._db is mock_db

    def test_generic_type_parameter(self):
        """Should work with generic type parameter."""

        class MockModel:
            pass

        class TestRepository(BaseRepository[MockModel]):
            def get_by_id(self, id: str) -> Optional[MockModel]:
                return None

        repo = TestRepository(MagicMock())
        assert repo.get_by_id("x") is None

    def test_first_row(self):
        result = SimpleNamespace(data=[{"id": "a"}, {"id": "b"}])
        assert BaseRepository._first(result) == {"id": "a"}

    def test_first_of_empty(self):
        assert BaseRepository._first(SimpleNamespace(data=[])) is None
        assert BaseRepository._first(SimpleNamespace(data=None)) is None
