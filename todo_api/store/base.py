"""Todo store abstraction + in-memory implementation."""

import copy
from abc import ABC, abstractmethod
from enum import Enum


class StoreErrorKind(Enum):
    NOT_FOUND = "not_found"
    OTHER = "other"


class StoreError(Exception):
    """Raised by a TodoStore when an operation cannot be applied."""

    def __init__(self, kind: StoreErrorKind, message: str = ""):
        self.kind = kind
        self.message = message or kind.value
        super().__init__(self.message)


class TodoStore(ABC):
    """Abstract base for todo persistence, keyed by todoId."""

    @abstractmethod
    async def get(self, todo_id: str) -> dict | None:
        """Fetch one item. Returns None if not found."""
        ...

    @abstractmethod
    async def put(self, item: dict) -> None:
        """Write a full item unconditionally."""
        ...

    @abstractmethod
    async def update(self, todo_id: str, fields: dict) -> dict:
        """Set the given attributes on an existing item and return the new image.

        Raises:
            StoreError: NOT_FOUND if no item has this id.
        """
        ...

    @abstractmethod
    async def delete(self, todo_id: str) -> None:
        """Delete an existing item.

        Raises:
            StoreError: NOT_FOUND if no item has this id.
        """
        ...

    @abstractmethod
    async def scan_all(self) -> list[dict]:
        """Return every item in a single pass."""
        ...


class InMemoryTodoStore(TodoStore):
    """Dict-backed store for local runs and tests."""

    def __init__(self, items: list[dict] | None = None):
        self._items: dict[str, dict] = {}
        for item in items or []:
            self._items[item["todoId"]] = copy.deepcopy(item)

    async def get(self, todo_id: str) -> dict | None:
        item = self._items.get(todo_id)
        return copy.deepcopy(item) if item is not None else None

    async def put(self, item: dict) -> None:
        self._items[item["todoId"]] = copy.deepcopy(item)

    async def update(self, todo_id: str, fields: dict) -> dict:
        if todo_id not in self._items:
            raise StoreError(StoreErrorKind.NOT_FOUND, f"Todo {todo_id} does not exist")
        self._items[todo_id].update(copy.deepcopy(fields))
        return copy.deepcopy(self._items[todo_id])

    async def delete(self, todo_id: str) -> None:
        if self._items.pop(todo_id, None) is None:
            raise StoreError(StoreErrorKind.NOT_FOUND, f"Todo {todo_id} does not exist")

    async def scan_all(self) -> list[dict]:
        return [copy.deepcopy(item) for item in self._items.values()]
