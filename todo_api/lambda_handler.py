"""AWS Lambda entry point.

Mangum translates API Gateway proxy events into ASGI, so the FastAPI
app serves /todos unchanged on Lambda.
"""

from fastapi import FastAPI
from mangum import Mangum

from todo_api.config.settings import Settings, get_settings
from todo_api.logging.structured import setup_logging
from todo_api.main import app


def build_handler(settings: Settings, asgi_app: FastAPI = app) -> Mangum:
    """Wrap the app for API Gateway, stripping the stage prefix from paths."""
    return Mangum(asgi_app, lifespan="off", api_gateway_base_path=settings.api_base_path)


# Lifespan hooks are off under Mangum, so logging is configured here
setup_logging()

handler = build_handler(get_settings())
