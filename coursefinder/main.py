# coursefinder/main.py

import logging

from contextlib import asynccontextmanager
from fastapi import Depends, FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.middleware import SlowAPIMiddleware
from slowapi.errors import RateLimitExceeded
from sqlalchemy.ext.asyncio import AsyncSession

from coursefinder.common.app_state import AppState
from coursefinder.common.database.database import (
    close_db_connection,
    connect_to_db,
    get_db_session,
    ping_database,
)
from coursefinder.common.config import settings
from coursefinder.common.exceptions import register_exception_handlers
from coursefinder.common.rate_limit import limiter
from coursefinder.common.utils.global_functions import failure_body, resPayloadData
from coursefinder.common.utils.global_messages import GlobalMessages
from coursefinder.router.routers import include_routers

# Centralized logging configuration
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

# Lifespan context manager for startup and shutdown events
@asynccontextmanager
async def lifespan(app: FastAPI):
    await connect_to_db()
    yield
    await close_db_connection()

# Initialize FastAPI app with lifespan manager
app = FastAPI(
    title="Course Finder API",
    description="Search university courses and keep a personal list of saved courses with notes.",
    version="1.0.0",
    debug=settings.DEBUG,
    lifespan=lifespan
)

# Application state owned by the composition root
app.state.core = AppState.from_settings(settings)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

# Middleware for CORS using allowed origins from settings
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers from a separate file
include_routers(app)

# Health check endpoint
@app.get("/health", tags=["Health"])
async def health_check(db: AsyncSession = Depends(get_db_session)):
    if await ping_database(db):
        return resPayloadData(True, message="API is running", data={"status": "healthy", "database": "connected"})
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=failure_body("service_unavailable", GlobalMessages.SERVICE_UNAVAILABLE),
    )
