"""Todo item and partial-update models."""

import uuid
from dataclasses import asdict, dataclass
from datetime import datetime, timezone


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision, e.g. 2024-01-01T12:00:00.000Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def new_todo_id() -> str:
    return str(uuid.uuid4())


@dataclass
class Todo:
    todoId: str
    title: str
    description: str = ""
    completed: bool = False
    createdAt: str = ""
    updatedAt: str = ""

    def to_item(self) -> dict:
        return asdict(self)


@dataclass
class TodoUpdate:
    """Fields to replace on an existing todo. None = leave untouched."""

    title: str | None = None
    description: str | None = None
    completed: bool | None = None

    FIELDS = ("title", "description", "completed")

    @classmethod
    def from_body(cls, body) -> "TodoUpdate":
        """Pick the updatable fields present in a request body.

        Presence is what counts: False and "" are values to set. A JSON
        null is treated as absent so an update never clears a field.
        """
        if not isinstance(body, dict):
            return cls()
        return cls(**{name: body.get(name) for name in cls.FIELDS})

    def is_empty(self) -> bool:
        return not self.fields()

    def fields(self) -> dict:
        """The set fields as an attribute -> value mapping."""
        return {
            name: getattr(self, name)
            for name in self.FIELDS
            if getattr(self, name) is not None
        }
