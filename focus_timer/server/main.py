"""Persistence server: daily focus totals and timer preferences in one JSON file."""

from __future__ import annotations

import logging
from pathlib import Path

import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from focus_timer import config
from focus_timer.data.store import JsonFileStore
from focus_timer.server.routers.daily_total import router as daily_total_router
from focus_timer.server.routers.preferences import router as preferences_router


logger = logging.getLogger(__name__)


def create_app(store: JsonFileStore | None = None) -> FastAPI:
    app = FastAPI(
        title="Focus Timer API",
        description="Daily focus totals and last-used timer duration",
        version="1.0.0",
    )
    app.state.store = store or JsonFileStore(config.DATA_FILE)
    app.state.store.init()

    app.include_router(daily_total_router, prefix=config.API_PREFIX)
    app.include_router(preferences_router, prefix=config.API_PREFIX)

    @app.exception_handler(HTTPException)
    async def http_error(request: Request, exc: HTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(RequestValidationError)
    async def invalid_payload(request: Request, exc: RequestValidationError):
        messages = [error.get("msg", "Invalid value") for error in exc.errors()]
        return JSONResponse(status_code=400, content={"error": "; ".join(messages) or "Invalid payload"})

    @app.exception_handler(Exception)
    async def server_error(request: Request, exc: Exception):
        logger.exception("Server error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app


def find_certificates(cert_dir: Path) -> tuple[Path, Path] | None:
    """Returns the first `(*.crt, *.key)` pair found in `cert_dir`."""
    try:
        files = sorted(cert_dir.iterdir())
    except OSError:
        return None
    crt = next((f for f in files if f.suffix == ".crt"), None)
    key = next((f for f in files if f.suffix == ".key"), None)
    if crt is None or key is None:
        return None
    return crt, key


def main() -> None:
    logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = create_app()
    certificates = find_certificates(config.CERT_DIR)
    if certificates is None:
        logger.warning("SSL certs missing in %s, falling back to HTTP (notifications may fail)", config.CERT_DIR)
        logger.info("Focus Timer (HTTP) running at http://%s:%s", config.HOST, config.PORT)
        uvicorn.run(app, host=config.HOST, port=config.PORT)
        return
    crt, key = certificates
    logger.info("Focus Timer (HTTPS) running at https://%s:%s", config.HOST, config.PORT)
    uvicorn.run(app, host=config.HOST, port=config.PORT, ssl_certfile=str(crt), ssl_keyfile=str(key))


if __name__ == "__main__":
    main()
