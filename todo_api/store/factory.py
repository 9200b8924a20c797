"""Factory for todo store backends."""

from todo_api.config.settings import Settings
from todo_api.store.base import InMemoryTodoStore, TodoStore


def build_todo_store(settings: Settings) -> TodoStore:
    """Construct the store selected by STORE_BACKEND."""
    backend = settings.store_backend

    if backend == "memory":
        return InMemoryTodoStore()

    if backend == "dynamodb":
        # Lazy import to keep boto3 off the path for in-memory runs
        from todo_api.store.dynamodb_store import DynamoDBTodoStore
        return DynamoDBTodoStore(
            table_name=settings.todos_table,
            region=settings.aws_region,
        )

    raise ValueError(f"Unknown store backend: {backend}")
