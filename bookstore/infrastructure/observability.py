"""Structured Logging — JSON formatter, setup, and per-request access logging.

Invariants:
    - Every record rendered as one JSON object: timestamp, level, logger, message
    - Known extras (error_code, path, status, isbn, operation, method, duration_ms)
      are copied onto the object only when set
    - One access-log line per HTTP request, written after the response status is known

Design Decisions:
    - stdlib logging + a small Formatter: no logging dependency to carry
    - setup_logging called once on startup via lifespan; it replaces handlers it
      installed earlier so repeated startups (tests, reloads) don't duplicate lines
"""

import json
import logging
import time
from datetime import datetime, timezone

from fastapi import FastAPI, Request

EXTRA_FIELDS = (
    "error_code", "path", "status", "isbn", "operation", "method", "duration_ms",
)

access_logger = logging.getLogger("bookstore.access")


class JSONFormatter(logging.Formatter):
    """Render a LogRecord as a single-line JSON document."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log.update({
            key: record.__dict__[key]
            for key in EXTRA_FIELDS
            if record.__dict__.get(key) is not None
        })
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def build_handler(fmt: str) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.set_name("bookstore")
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    return handler


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install the application handler on the root logger."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == "bookstore":
            root.removeHandler(existing)
    root.addHandler(build_handler(fmt))
    root.setLevel(getattr(logging, level.upper(), logging.INFO))


def register_request_logging(app: FastAPI) -> None:
    """Log method, path, status and latency for every request."""

    @app.middleware("http")
    async def log_request(request: Request, call_next):
        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            # unhandled errors are rendered outside this middleware; still a 500
            duration_ms = round((time.perf_counter() - started) * 1000, 2)
            access_logger.info(
                f"{request.method} {request.url.path} {status_code}",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status": status_code,
                    "duration_ms": duration_ms,
                },
            )
