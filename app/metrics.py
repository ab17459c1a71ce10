import time
from flask import request
from prometheus_client import Counter, Histogram
from sqlalchemy import event

from models import db

DB_QUERY_DURATION = Histogram(
    "mandi_db_query_duration_seconds",
    "Database query duration in seconds",
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2, 5),
)

ERROR_COUNTER = Counter(
    "mandi_http_errors_total",
    "HTTP responses with status >= 400",
    ["endpoint", "method", "code"],
)

# result is "ok" or the HTTP status of the failure
WORKFLOW_OUTCOMES = Counter(
    "mandi_workflow_outcomes_total",
    "Signup, shop profile and order workflow outcomes",
    ["operation", "result"],
)

TRACKED_BLUEPRINTS = ("wholesaler", "orders")


def record_outcome(operation: str, result: str = "ok") -> None:
    WORKFLOW_OUTCOMES.labels(operation, result).inc()


def _time_queries(engine):
    @event.listens_for(engine, "before_cursor_execute")
    def _start(conn, cursor, statement, parameters, context, executemany):
        conn.info.setdefault("_query_start_time", []).append(time.perf_counter())

    @event.listens_for(engine, "after_cursor_execute")
    def _stop(conn, cursor, statement, parameters, context, executemany):
        started = conn.info["_query_start_time"].pop()
        DB_QUERY_DURATION.observe(time.perf_counter() - started)


def init_app(app):
    """Time every SQL statement and count failed and workflow responses."""
    with app.app_context():
        _time_queries(db.engine)

    @app.after_request
    def _count_response(resp):
        endpoint = request.endpoint or "unknown"
        if resp.status_code >= 400:
            ERROR_COUNTER.labels(endpoint, request.method, resp.status_code).inc()
        if request.blueprint in TRACKED_BLUEPRINTS:
            result = "ok" if resp.status_code < 400 else str(resp.status_code)
            record_outcome(endpoint.split(".", 1)[-1], result)
        return resp
