from contextlib import asynccontextmanager
from typing import Optional
import logging

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cache import close_redis, get_redis
from db import close_pool, open_pool
from logging_config import setup_logging
from models import AppStats, CollectIn, HealthOut, RegisterIn, StatusOut, UserOut
from repo_apps import AppRepo
from repo_counters import CounterRepo
from repo_events import EventRepo
from repo_users import UserRepo
from service_events import AppNotFound, EventService
from service_users import UserService
from settings import settings

logger = logging.getLogger(__name__)

# Instantiate the repos + services once so the routes remain thin. Routes
# get them through the `get_*_service` dependencies, which tests replace
# via `app.dependency_overrides`.
event_svc = EventService(EventRepo(), AppRepo(), CounterRepo(get_redis()))
user_svc = UserService(UserRepo())

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "X-DNS-Prefetch-Control": "off",
    "Cross-Origin-Opener-Policy": "same-origin",
}


def get_event_service() -> EventService:
    return event_svc


def get_user_service() -> UserService:
    return user_svc


def _error_message(e: Exception) -> str:
    return str(e) if settings.expose_errors else "internal error"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


router = APIRouter()


@router.get("/healthz", response_model=HealthOut)
def healthz(svc: EventService = Depends(get_event_service)):
    try:
        return svc.health_check()
    except Exception as e:
        logger.exception("Health check failed")
        return JSONResponse(
            status_code=500,
            content={"status": "error", "message": _error_message(e)},
        )


@router.post("/api/register", response_model=UserOut, status_code=201)
def register(
    body: Optional[RegisterIn] = None,
    svc: UserService = Depends(get_user_service),
):
    body = body or RegisterIn()
    try:
        return svc.register(body.email, body.name)
    except ValueError as e:
        return _error(400, str(e))
    except Exception as e:
        logger.exception("Register error")
        return _error(500, _error_message(e))


@router.post("/api/collect", response_model=StatusOut, status_code=201)
def collect(
    body: Optional[CollectIn] = None,
    svc: EventService = Depends(get_event_service),
):
    body = body or CollectIn()
    try:
        svc.collect(body.api_key, body.type, body.payload)
        return {"status": "ok"}
    except ValueError as e:
        return _error(400, str(e))
    except AppNotFound as e:
        return _error(404, str(e))
    except Exception as e:
        logger.exception("Collect error")
        return _error(500, _error_message(e))


@router.get("/api/apps/{app_id}/stats", response_model=AppStats)
def app_stats(app_id: int, svc: EventService = Depends(get_event_service)):
    try:
        return svc.stats(app_id)
    except Exception as e:
        logger.exception("Stats error")
        return _error(500, _error_message(e))


async def invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies and path params get the same 400 `{"error": ...}` shape."""

    first = exc.errors()[0]
    where = ".".join(p for p in first.get("loc", ()) if isinstance(p, str) and p not in ("body", "path"))
    message = f"{where}: {first['msg']}" if where else first["msg"]
    return _error(400, message)


@asynccontextmanager
async def lifespan(app: FastAPI):
    open_pool()
    yield
    close_pool()
    close_redis()


def create_app() -> FastAPI:
    """Build the FastAPI app: logging, middleware, routes and docs.

    Swagger UI is served at `/api/docs` from the route declarations.
    """

    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(
        title="Event Collector",
        lifespan=lifespan,
        docs_url="/api/docs",
        openapi_url="/api/openapi.json",
        redoc_url=None,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list(),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response

    app.add_exception_handler(RequestValidationError, invalid_request)
    app.include_router(router)
    return app


app = create_app()


def main() -> None:
    logger.info("Server running on http://localhost:%s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
