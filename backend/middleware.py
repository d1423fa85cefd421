import asyncio
import logging

from fastapi.responses import JSONResponse

log = logging.getLogger(__name__)


class RequestTimeoutMiddleware:
    """
    Plain ASGI middleware that cancels the downstream app after `timeout`
    seconds and answers 503. Cancelling the app (rather than the
    BaseHTTPMiddleware call_next) drops the request's pending engine work
    right away.
    """

    def __init__(self, app, timeout: float = 10.0):
        self.app = app
        self.timeout = timeout

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message):
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await asyncio.wait_for(
                self.app(scope, receive, send_wrapper), timeout=self.timeout
            )
        except asyncio.TimeoutError:
            log.warning(
                "%s %s timed out after %ss",
                scope.get("method"), scope.get("path"), self.timeout,
            )
            if response_started:
                # headers are already out; nothing sensible left to send
                return
            response = JSONResponse(status_code=503, content={"error": "request timed out"})
            await response(scope, receive, send)
