from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator
from sqlalchemy.exc import IntegrityError
from starlette.requests import Request

from app.api.v1.router import api_router
from app.core.auth import SessionCookieMiddleware
from app.core.config import settings
from app.core.logging import get_logger, setup_logging
from app.db.bootstrap import run_migrations_and_seed

setup_logging()
logger = get_logger(__name__)

api = FastAPI(
    title="CleanOrderAPI",
    version="1.0.0",
    description="API para la gestión de órdenes (CleanOrder).",
    docs_url="/docs",
    redoc_url="/redoc",
    swagger_ui_parameters={"displayRequestDuration": True, "persistAuthorization": True},
)

# ordem: o último adicionado roda primeiro -> CORS antes da autenticação
api.add_middleware(SessionCookieMiddleware)
api.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,  # cookie AuthToken cross-site
    allow_methods=["*"],
    allow_headers=["*"],
)

# métricas /metrics (Prometheus)
Instrumentator().instrument(api).expose(api, include_in_schema=False, should_gzip=True)

api.include_router(api_router, prefix="/api/v1")

@api.get("/healthz", tags=["health"])
def healthz():
    return {"status": "ok"}

@api.on_event("startup")
def startup():
    run_migrations_and_seed()

@api.exception_handler(IntegrityError)
def handle_integrity_error(request: Request, exc: IntegrityError):
    return JSONResponse(
        status_code=409,
        content={"code": "UNIQUE_VIOLATION", "message": "Registro duplicado.", "details": str(getattr(exc, "orig", exc))},
    )

@api.exception_handler(Exception)
def handle_unexpected(request: Request, exc: Exception):
    logger.exception("unhandled error", extra={"path": request.url.path})
    return JSONResponse(
        status_code=500,
        content={"code": "INTERNAL_ERROR", "message": "Error interno.", "details": str(exc)},
    )
