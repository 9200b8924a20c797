"""Metrics sinks for custom counters."""

import asyncio
from abc import ABC, abstractmethod
from datetime import datetime, timezone

from todo_api.config.settings import Settings


class MetricsSink(ABC):
    """Write-only counter reporting. Callers treat failures as non-fatal."""

    @abstractmethod
    async def emit_count(self, name: str, value: float) -> None:
        ...


class NullMetricsSink(MetricsSink):
    """Discards every metric."""

    async def emit_count(self, name: str, value: float) -> None:
        pass


class CloudWatchMetricsSink(MetricsSink):
    """Publishes counters with cloudwatch:PutMetricData."""

    def __init__(self, namespace: str, region: str = "us-east-1"):
        self._namespace = namespace
        self._region = region
        self._client = None

    def _get_client(self):
        """Lazy-init boto3 client."""
        if self._client is None:
            import boto3

            self._client = boto3.client("cloudwatch", region_name=self._region)
        return self._client

    async def emit_count(self, name: str, value: float) -> None:
        await asyncio.to_thread(
            self._get_client().put_metric_data,
            Namespace=self._namespace,
            MetricData=[{
                "MetricName": name,
                "Value": value,
                "Unit": "Count",
                "Timestamp": datetime.now(timezone.utc),
            }],
        )


def build_metrics_sink(settings: Settings) -> MetricsSink:
    """Construct the sink selected by METRICS_BACKEND."""
    backend = settings.metrics_backend

    if backend == "none":
        return NullMetricsSink()

    if backend == "cloudwatch":
        return CloudWatchMetricsSink(
            namespace=settings.metrics_namespace,
            region=settings.aws_region,
        )

    raise ValueError(f"Unknown metrics backend: {backend}")
