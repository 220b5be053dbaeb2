import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

# ✅ Import All API Routes
from app.api.routes import auth, counter, health

from app.core import config
from app.core.logging_config import setup_logging
from app.db.init_db import init_db
from app.db.migrate import run_migrations

setup_logging(config.LOG_LEVEL, log_dir=config.LOG_DIR or None)
logger = logging.getLogger(__name__)


# ============================================
# ✅ STARTUP: FAIL FAST IF THE STORE IS DOWN
# ============================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    if config.RUN_MIGRATIONS:
        run_migrations()
    # Any error here aborts startup instead of serving degraded responses
    init_db()
    logger.info("Daily Counter API started")
    yield
    logger.info("Daily Counter API stopped")


# ============================================
# ✅ FASTAPI APP INIT
# ============================================

app = FastAPI(title="Daily Counter API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials="*" not in config.CORS_ORIGINS,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "x-user-id", "Authorization"],
)


# ============================================
# ✅ ERROR HANDLERS
# ============================================

@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(f"Database error on {request.method} {request.url.path}")
    body = {"error": "Internal server error"}
    if config.DEBUG:
        body["details"] = str(exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    # Malformed bodies are client errors like any other missing field
    logger.info(f"Rejected malformed request on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid request body"},
    )


# ============================================
# ✅ REGISTER ALL ROUTERS
# ============================================

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(counter.router)
