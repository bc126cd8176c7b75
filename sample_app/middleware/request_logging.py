"""
Request logging and request ID tracking.

Logs every incoming request and its completion (status and duration),
and echoes an X-Request-ID header so log lines can be correlated.
"""
import logging
import time
import uuid

from flask import Flask, g, request

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = 'X-Request-ID'


def init_request_logging(app: Flask) -> None:
    """Register before/after request hooks on the app."""

    @app.before_request
    def start_request():
        g.request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        g.request_started = time.perf_counter()
        logger.info(
            'Incoming API request %s %s id=%s content_type=%s',
            request.method, request.path, g.request_id, request.content_type
        )

    @app.after_request
    def finish_request(response):
        started = g.get('request_started')
        duration_ms = (time.perf_counter() - started) * 1000 if started else 0.0
        request_id = g.get('request_id')
        if request_id:
            response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            'API request completed %s %s status=%s duration=%.1fms id=%s',
            request.method, request.path, response.status_code, duration_ms, request_id
        )
        return response
