import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from config import Settings
from middleware import RequestTimeoutMiddleware
from routers.status import router as status_router
from services.aggregator import StatusCollector
from services.engine import EngineClient, build_engine_client

log = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    engine: Optional[EngineClient] = None,
) -> FastAPI:
    """
    Build the exporter app. `engine` overrides the client chosen by
    ENGINE_MODE (tests pass a fake one).
    """
    settings = settings or Settings.from_env()
    if engine is None:
        engine = build_engine_client(settings)
        log.info("using %s engine client", settings.engine_mode)

    # --- FastAPI App Initialization ---
    app = FastAPI(title="Container Status Exporter")
    app.state.settings = settings
    app.state.collector = StatusCollector(engine, max_workers=settings.inspect_workers)

    # --- Middleware (last added runs first) ---

    # global request ceiling, shared by every route
    app.state.limiter = Limiter(
        key_func=get_remote_address,
        application_limits=[settings.rate_limit],
    )
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    app.add_middleware(RequestTimeoutMiddleware, timeout=settings.request_timeout)

    @app.middleware("http")
    async def remove_trailing_slash(request: Request, call_next):
        path = request.scope["path"]
        if len(path) > 1 and path.endswith("/"):
            request.scope["path"] = path.rstrip("/") or "/"
        return await call_next(request)

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        log.exception("unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": str(exc)})

    app.include_router(status_router)
    return app


app = create_app()


def main():
    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    log.info("Server starting on %s:%s", settings.host, settings.port)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
