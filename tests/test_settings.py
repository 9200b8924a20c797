"""Tests for todo_api/config/settings.py — Settings."""

import pytest
from pydantic import ValidationError

from todo_api.config.settings import Settings, get_settings


class TestSettings:

    def test_defaults(self, override_settings):
        override_settings()
        s = get_settings()
        assert s.todos_table == "test-todos-table"
        assert s.store_backend == "dynamodb"
        assert s.metrics_backend == "cloudwatch"
        assert s.metrics_namespace == "TodoApp"
        assert s.api_base_path == "/"
        assert s.log_level == "INFO"

    def test_table_name_required(self, monkeypatch):
        monkeypatch.delenv("TODOS_TABLE", raising=False)
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_env_override(self, override_settings):
        override_settings(
            TODOS_TABLE="Todos",
            STORE_BACKEND="memory",
            AWS_REGION="eu-central-1",
            LOG_LEVEL="DEBUG",
        )
        s = get_settings()
        assert s.todos_table == "Todos"
        assert s.store_backend == "memory"
        assert s.aws_region == "eu-central-1"
        assert s.log_level == "DEBUG"

    def test_cached(self, override_settings):
        override_settings()
        assert get_settings() is get_settings()
