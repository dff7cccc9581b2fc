"""Observability — JSON log lines and per-request access logging.

Invariants:
    - Every JSON line carries timestamp (of the record), level, service, logger, message
    - Request context (method, path, status_code, duration_ms) and resource
      context (user_id, resource_id, object_key) appear only when set
    - setup_logging owns exactly one root handler, however often it is called
    - One access line per request, logged after the response is produced

Design Decisions:
    - Access logging lives in an http middleware so error responses produced by
      the registered handlers are logged with their final status
    - uvicorn.access is silenced when our access log is active to avoid duplicate lines
"""

import json
import logging
import time
from datetime import datetime, timezone

from fastapi import Request

logger = logging.getLogger("wildwatch.access")

SERVICE_NAME = "wildwatch-api"

_CONTEXT_FIELDS = (
    "method", "path", "status_code", "duration_ms",
    "user_id", "resource_id", "object_key",
    "error_code", "total_count",
)


class JSONFormatter(logging.Formatter):
    """One JSON object per record, tagged with the service name."""

    def __init__(self, service: str = SERVICE_NAME):
        super().__init__()
        self.service = service

    def format(self, record: logging.LogRecord) -> str:
        line = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "service": self.service,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _CONTEXT_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                line[key] = value
        if record.exc_info:
            line["exception"] = self.formatException(record.exc_info)
        return json.dumps(line, ensure_ascii=False, default=str)


class _WildwatchHandler(logging.StreamHandler):
    """Marker type so setup_logging can find the handler it installed."""


def setup_logging(level: str = "INFO", fmt: str = "json", service: str = SERVICE_NAME):
    """Install (or replace) the root handler; text format is for local runs."""
    root = logging.getLogger()
    for existing in [h for h in root.handlers if isinstance(h, _WildwatchHandler)]:
        root.removeHandler(existing)

    handler = _WildwatchHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter(service))
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    logging.getLogger("uvicorn.access").disabled = True


async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    duration_ms = round((time.perf_counter() - started) * 1000, 2)
    logger.info(
        f"{request.method} {request.url.path} {response.status_code}",
        extra={
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
        },
    )
    return response
