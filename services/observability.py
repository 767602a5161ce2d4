"""Request observability: Prometheus metrics for the HTTP layer and the classifier."""
from typing import Optional
import time

from fastapi import APIRouter, Request
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

request_counter = Counter(
    "review_http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)

request_latency = Histogram(
    "review_http_request_duration_seconds",
    "HTTP request latency",
    ["method", "path"],
    buckets=(0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1),
)

classification_counter = Counter(
    "review_classifications_total",
    "Reviews classified, by resulting sentiment",
    ["sentiment", "mode"],
)

metrics_router = APIRouter()


@metrics_router.get("/metrics")
async def metrics_endpoint():
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


def record_request_metrics(request: Request, status_code: int, duration: float):
    path = request.url.path
    method = request.method
    request_counter.labels(method=method, path=path, status=str(status_code)).inc()
    request_latency.labels(method=method, path=path).observe(duration)


def record_classification(sentiment: str, mode: str):
    classification_counter.labels(sentiment=sentiment, mode=mode).inc()


def request_timer() -> float:
    return time.perf_counter()


def elapsed(start_time: Optional[float]) -> float:
    if start_time is None:
        return 0.0
    return time.perf_counter() - start_time
