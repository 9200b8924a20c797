"""Application settings loaded from environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Target table (TODOS_TABLE), required at process start
    todos_table: str

    # Store
    store_backend: str = "dynamodb"  # "dynamodb" | "memory"
    aws_region: str = "us-east-1"

    # Metrics
    metrics_backend: str = "cloudwatch"  # "cloudwatch" | "none"
    metrics_namespace: str = "TodoApp"

    # API Gateway stage prefix stripped before routing
    api_base_path: str = "/"

    # Logging
    log_level: str = "INFO"
    log_file: str = ""  # Empty = stdout only

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
