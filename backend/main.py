# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
FastAPI application.

Responsibilities
----------------
* Instantiate the FastAPI app and its SessionManager.
* Register CORS and request-logging middleware.
* Translate application errors into ``{"error": ...}`` JSON responses.
* Mount the auth and todo routers.
* Answer OPTIONS for every path and expose /health for liveness checks.

Production note
---------------
The session cookie is not flagged ``Secure`` by default.  Set
SESSION_COOKIE_SECURE=true and a real SESSION_SECRET when serving over HTTPS.
"""

import time
from datetime import timedelta

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from sqlalchemy.exc import SQLAlchemyError
from starlette.datastructures import Headers
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from auth.router import router as auth_router
from todos.router import router as todos_router
from core.config import settings
from core.errors import AppError
from core.logger import logger
from core.security import SessionManager, get_client_ip
from database import SessionLocal, init_db
from seed import insert_test_data

app = FastAPI(title="Todo List", version="1.0.0")

app.state.session_manager = SessionManager(
    secret_key=settings.session_secret,
    max_age=timedelta(days=settings.session_expire_days),
    secure=settings.session_cookie_secure,
)

# ---------------------------------------------------------------------------
# OPTIONS short-circuit
# ---------------------------------------------------------------------------
# Registered before the CORS middleware so it sits inside it: browser
# preflights are answered by CORS, any other OPTIONS request is answered here
# with an empty 200 and never reaches an auth guard.


class _OptionsMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=200)
        return await call_next(request)


app.add_middleware(_OptionsMiddleware)

# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------
# Credentials are allowed so the browser sends the session cookie; this
# requires an explicit origin list (no "*").
#
# Preflights always get an empty 200.  The Access-Control-* headers are only
# present when the origin is on the allow-list, so the browser still blocks
# everyone else.


class _CORSMiddleware(CORSMiddleware):
    def preflight_response(self, request_headers: Headers) -> Response:
        checked = super().preflight_response(request_headers)
        if not self.is_allowed_origin(origin=request_headers["origin"]):
            return Response(status_code=200)

        headers = {
            key: value
            for key, value in checked.headers.items()
            if key.startswith("access-control-") or key == "vary"
        }
        return Response(status_code=200, headers=headers)


app.add_middleware(
    _CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


# ---------------------------------------------------------------------------
# Request-logging middleware
# ---------------------------------------------------------------------------
# Only the URL and metadata are recorded, never request bodies.


class _RequestLogMiddleware(BaseHTTPMiddleware):
    """Log method, path, client IP, response status and latency (ms)."""

    async def dispatch(self, request: Request, call_next) -> Response:
        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000

        logger.info(
            "%s %s | client=%s status=%d latency=%.1fms",
            request.method,
            request.url.path,
            get_client_ip(request),
            response.status_code,
            elapsed_ms,
        )
        return response


app.add_middleware(_RequestLogMiddleware)

# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------


@app.exception_handler(AppError)
async def _app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def _validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


@app.exception_handler(StarletteHTTPException)
async def _http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(SQLAlchemyError)
async def _database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    return PlainTextResponse("Database error", status_code=500)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
app.include_router(auth_router)
app.include_router(todos_router)

# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


@app.on_event("startup")
def _on_startup():
    logger.info("Todo List service starting up")
    if settings.uses_default_secret:
        logger.warning(
            "Using default session secret. Set SESSION_SECRET environment variable in production."
        )

    init_db()

    if settings.seed_data:
        db = SessionLocal()
        try:
            insert_test_data(db)
        except SQLAlchemyError:
            logger.exception("Failed to insert test data")
        finally:
            db.close()


@app.on_event("shutdown")
def _on_shutdown():
    logger.info("Todo List service shutting down")


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------


@app.get("/health")
def health():
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    logger.info("Server starting on port %d", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
