import json
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import settings
from db import engine, init_db, is_sqlite
from core.errors import AppError
from core.logging_config import configure_logging
from api.asset_events.views import router as asset_history_router
from api.assets.views import router as assets_router
from api.check_outs.views import router as check_outs_router
from api.dashboard.views import router as dashboard_router
from api.employees.views import router as employees_router
from api.master_data.views import categories_router, departments_router, sites_router
from api.reconciliation.views import router as reconciliation_router
from api.scans.views import router as scans_router
from api.so_sessions.views import router as so_sessions_router
from api.users.views import router as users_router

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


def get_cors_origins() -> list[str]:
    """Get CORS origins from settings or use defaults."""
    cors_env = settings.CORS_ORIGINS

    # Try to parse as JSON array
    if cors_env:
        try:
            origins = json.loads(cors_env)
            if isinstance(origins, list):
                return origins
        except json.JSONDecodeError:
            # If not valid JSON, treat as comma-separated
            return [o.strip() for o in cors_env.split(",") if o.strip()]

    # Default origins for development
    return [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
    ]


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting stock opname API (env=%s)", settings.APP_ENV)
    if is_sqlite(settings.DATABASE_URL):
        await init_db()
    yield
    await engine.dispose()
    logger.info("Stock opname API stopped")


app = FastAPI(
    title="Asset Stock Opname API",
    description="API for managing assets and stock opname (physical inventory) sessions",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# Stock opname
app.include_router(so_sessions_router, prefix="/api/v1")
app.include_router(scans_router, prefix="/api/v1")
app.include_router(reconciliation_router, prefix="/api/v1")

# Registry
app.include_router(assets_router, prefix="/api/v1")
app.include_router(asset_history_router, prefix="/api/v1")
app.include_router(check_outs_router, prefix="/api/v1")
app.include_router(sites_router, prefix="/api/v1")
app.include_router(categories_router, prefix="/api/v1")
app.include_router(departments_router, prefix="/api/v1")
app.include_router(employees_router, prefix="/api/v1")

# Administration
app.include_router(users_router, prefix="/api/v1")
app.include_router(dashboard_router, prefix="/api/v1")


# Health check endpoint
@app.get("/health", tags=["system"])
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy"}
