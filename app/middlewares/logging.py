"""
Request logging middleware.
Logs `METHOD path status in Nms :: <json body>` for every /api request.
"""
import logging
import time
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

log = logging.getLogger("app.requests")

MAX_LINE = 80

class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        path = request.url.path
        if not path.startswith("/api"):
            return response

        duration_ms = int((time.perf_counter() - start) * 1000)
        line = f"{request.method} {path} {response.status_code} in {duration_ms}ms"

        if response.headers.get("content-type", "").startswith("application/json"):
            # el body es un stream: se lee entero y se arma una respuesta nueva
            body = b"".join([chunk async for chunk in response.body_iterator])
            response = Response(
                content=body,
                status_code=response.status_code,
                headers=dict(response.headers),
            )
            line += f" :: {body.decode('utf-8', errors='replace')}"

        if len(line) > MAX_LINE:
            line = line[: MAX_LINE - 1] + "…"
        log.info(line)
        return response
