"""Tests for todo_api/store/factory.py — build_todo_store."""

import pytest

from todo_api.config.settings import get_settings
from todo_api.store.base import InMemoryTodoStore
from todo_api.store.dynamodb_store import DynamoDBTodoStore
from todo_api.store.factory import build_todo_store


class TestBuildTodoStore:

    def test_memory_backend(self, override_settings):
        override_settings(STORE_BACKEND="memory")
        assert isinstance(build_todo_store(get_settings()), InMemoryTodoStore)

    def test_dynamodb_backend(self, override_settings):
        override_settings(STORE_BACKEND="dynamodb", TODOS_TABLE="Todos", AWS_REGION="eu-west-1")
        store = build_todo_store(get_settings())
        assert isinstance(store, DynamoDBTodoStore)
        assert store._table_name == "Todos"
        assert store._region == "eu-west-1"

    def test_unknown_backend(self, override_settings):
        override_settings(STORE_BACKEND="redis")
        with pytest.raises(ValueError, match="redis"):
            build_todo_store(get_settings())
