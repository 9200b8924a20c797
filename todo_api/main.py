"""Todo Service — FastAPI application entry point.

Every /todos route hands the raw request to the TodoDispatcher, which
owns routing by method, validation and the response format.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response

from todo_api.config.settings import Settings, get_settings
from todo_api.logging.structured import (
    RequestTimer,
    generate_request_id,
    get_logger,
    request_id_var,
    setup_logging,
)
from todo_api.metrics.sink import build_metrics_sink
from todo_api.store.factory import build_todo_store
from todo_api.todos.dispatcher import TodoDispatcher, TodoRequest

VERSION = "1.0.0"


def build_dispatcher(settings: Settings) -> TodoDispatcher:
    """Wire a dispatcher to the configured store and metrics backends."""
    return TodoDispatcher(
        store=build_todo_store(settings),
        metrics=build_metrics_sink(settings),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle hooks."""
    setup_logging()
    get_logger().info("Todo service started")
    yield
    get_logger().info("Todo service stopped")


def get_dispatcher(app: FastAPI) -> TodoDispatcher:
    """Return the app's dispatcher, building it from settings on first use."""
    if app.state.dispatcher is None:
        app.state.dispatcher = build_dispatcher(get_settings())
    return app.state.dispatcher


def create_app(dispatcher: TodoDispatcher | None = None) -> FastAPI:
    app = FastAPI(
        title="Todo Service",
        description="CRUD API for todo items",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.dispatcher = dispatcher

    @app.get("/health")
    async def health():
        return {"status": "healthy", "version": VERSION}

    # No method filter: any verb, HEAD and TRACE included, reaches the dispatcher
    app.add_route("/todos", todos_collection, methods=None, include_in_schema=False)
    app.add_route("/todos/{id}", todos_item, methods=None, include_in_schema=False)

    return app


async def todos_collection(request: Request) -> Response:
    return await _dispatch(request, {})


async def todos_item(request: Request) -> Response:
    return await _dispatch(request, {"id": request.path_params["id"]})


async def _dispatch(request: Request, path_parameters: dict) -> Response:
    """Translate the ASGI request, run it through the dispatcher, translate back."""
    request_id_var.set(generate_request_id())
    dispatcher = get_dispatcher(request.app)

    # Raw bytes: decoding happens inside the dispatcher so bad UTF-8 is a 500
    raw_body = await request.body()
    todo_request = TodoRequest(
        method=request.method,
        path=request.url.path,
        path_parameters=path_parameters,
        body=raw_body or None,
        headers=dict(request.headers),
    )

    with RequestTimer() as timer:
        result = await dispatcher.dispatch(todo_request)

    get_logger().info(
        "Request completed",
        extra={"log_data": {
            "method": todo_request.method,
            "path": todo_request.path,
            "status": result.status_code,
            "latency_ms": timer.elapsed_ms,
        }},
    )

    return Response(
        content=result.body,
        status_code=result.status_code,
        headers=result.headers,
    )


app = create_app()
