"""Request dispatcher — routes a todo request to a store operation.

Pipeline: Route by method -> Validate body -> Store call -> (create) Metric -> Response

Everything that escapes a handler becomes a 500 with a fixed body, so
store or internal details never reach the caller.
"""

import json
from collections.abc import Callable
from dataclasses import dataclass, field
from decimal import Decimal

from todo_api.logging.structured import get_logger
from todo_api.metrics.sink import MetricsSink
from todo_api.store.base import StoreError, StoreErrorKind, TodoStore
from todo_api.todos.models import Todo, TodoUpdate, new_todo_id, utc_timestamp

CREATED_METRIC = "TodoCreatedCount"

RESPONSE_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,POST,PUT,DELETE,OPTIONS",
}


@dataclass
class TodoRequest:
    method: str
    path: str = "/todos"
    path_parameters: dict = field(default_factory=dict)
    body: str | bytes | None = None
    headers: dict = field(default_factory=dict)

    @property
    def todo_id(self) -> str | None:
        return (self.path_parameters or {}).get("id") or None


@dataclass
class TodoResponse:
    status_code: int
    headers: dict
    body: str  # JSON text, empty for 204

    def json(self):
        return json.loads(self.body) if self.body else None


def make_response(status_code: int, payload=None) -> TodoResponse:
    body = "" if payload is None else json.dumps(payload, default=_json_default)
    return TodoResponse(status_code=status_code, headers=dict(RESPONSE_HEADERS), body=body)


def error_response(status_code: int, message: str) -> TodoResponse:
    return make_response(status_code, {"error": message})


class TodoDispatcher:
    """Translates TodoRequests into store operations and TodoResponses."""

    def __init__(
        self,
        store: TodoStore,
        metrics: MetricsSink,
        clock: Callable[[], str] = utc_timestamp,
        id_factory: Callable[[], str] = new_todo_id,
    ):
        self._store = store
        self._metrics = metrics
        self._clock = clock
        self._id_factory = id_factory

    async def dispatch(self, request: TodoRequest) -> TodoResponse:
        logger = get_logger()
        method = request.method.upper()
        todo_id = request.todo_id

        logger.info(
            "Request received",
            extra={"log_data": {"method": method, "path": request.path, "todoId": todo_id}},
        )

        try:
            if method == "POST":
                return await self.create(request)
            if method == "GET":
                return await self.get(todo_id) if todo_id else await self.list_todos()
            if method == "PUT" and todo_id:
                return await self.update(todo_id, request)
            if method == "DELETE" and todo_id:
                return await self.delete(todo_id)
            return error_response(405, "Method not allowed")
        except Exception:
            logger.exception("Request failed")
            return error_response(500, "Internal server error")

    async def create(self, request: TodoRequest) -> TodoResponse:
        body = _parse_body(request.body)
        if not isinstance(body, dict) or not body.get("title"):
            return error_response(400, "Title is required")

        now = self._clock()
        todo = Todo(
            todoId=self._id_factory(),
            title=body["title"],
            description=body.get("description") or "",
            completed=False,
            createdAt=now,
            updatedAt=now,
        )
        item = todo.to_item()
        await self._store.put(item)

        await self._emit_metric(CREATED_METRIC, 1)

        get_logger().info("Todo created", extra={"log_data": {"todoId": todo.todoId}})
        return make_response(201, item)

    async def get(self, todo_id: str) -> TodoResponse:
        item = await self._store.get(todo_id)
        if item is None:
            return error_response(404, "Todo not found")

        get_logger().info("Todo retrieved", extra={"log_data": {"todoId": todo_id}})
        return make_response(200, item)

    async def list_todos(self) -> TodoResponse:
        items = await self._store.scan_all()

        get_logger().info("Todos listed", extra={"log_data": {"count": len(items)}})
        return make_response(200, {"todos": items})

    async def update(self, todo_id: str, request: TodoRequest) -> TodoResponse:
        changes = TodoUpdate.from_body(_parse_body(request.body))
        if changes.is_empty():
            return error_response(400, "No valid fields to update")

        fields = changes.fields()
        fields["updatedAt"] = self._clock()

        try:
            item = await self._store.update(todo_id, fields)
        except StoreError as e:
            if e.kind is StoreErrorKind.NOT_FOUND:
                return error_response(404, "Todo not found")
            raise

        get_logger().info("Todo updated", extra={"log_data": {"todoId": todo_id}})
        return make_response(200, item)

    async def delete(self, todo_id: str) -> TodoResponse:
        try:
            await self._store.delete(todo_id)
        except StoreError as e:
            if e.kind is StoreErrorKind.NOT_FOUND:
                return error_response(404, "Todo not found")
            raise

        get_logger().info("Todo deleted", extra={"log_data": {"todoId": todo_id}})
        return make_response(204)

    async def _emit_metric(self, name: str, value: float) -> None:
        """Best-effort: a metrics outage never fails the request."""
        try:
            await self._metrics.emit_count(name, value)
        except Exception as e:
            get_logger().error(
                "Failed to put metric",
                extra={"log_data": {"metric": name, "error": str(e)}},
            )


def _parse_body(raw: str | bytes | None):
    # Malformed JSON or non-UTF-8 bytes raise here and surface as a 500.
    # Decimals stay Decimal: the DynamoDB resource rejects float.
    return json.loads(raw or "{}", parse_float=Decimal)


def _json_default(value):
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    return str(value)
