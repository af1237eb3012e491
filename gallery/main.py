# gallery/main.py
from contextlib import asynccontextmanager
import logging

from fastapi.middleware.cors import CORSMiddleware
from fastapi import FastAPI

from gallery.core.config import get_settings
from gallery.core.errors import register_exception_handlers
from gallery.database import create_db_and_tables

# Import models so SQLModel metadata is populated before create_all()
from gallery.models import user as _user_models  # noqa: F401
from gallery.models import artwork as _artwork_models  # noqa: F401
from gallery.models import media_blog as _media_blog_models  # noqa: F401
from gallery.models import transaction as _transaction_models  # noqa: F401


# Routers
from gallery.routers.auth import router as auth_router
from gallery.routers.users import router as users_router
from gallery.routers.artworks import router as artworks_router
from gallery.routers.series import router as series_router
from gallery.routers.media_blog import router as media_blog_router
from gallery.routers.payment import router as payment_router
from gallery.routers.admin_artworks import router as admin_artworks_router
from gallery.routers.admin_series import router as admin_series_router
from gallery.routers.admin_media_blog import router as admin_media_blog_router
from gallery.routers.admin_users import router as admin_users_router
from gallery.routers.admin_transactions import router as admin_transactions_router
from gallery.routers.admin_stats import router as admin_stats_router

settings = get_settings()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Verify DB connectivity and create tables.

    Shutdown:
      - No special cleanup needed for sync engine.
    """
    logger.info("Startup: connecting to database...")
    try:
        create_db_and_tables()
        logger.info("Startup: DB connection OK, tables verified.")
    except Exception as e:
        logger.error("Startup: DB connection FAILED: %s", e)
        raise
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version="0.1.0",
    lifespan=lifespan,
)

register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API prefix, e.g. /api
for router in (
    auth_router,
    users_router,
    artworks_router,
    series_router,
    media_blog_router,
    payment_router,
    admin_artworks_router,
    admin_series_router,
    admin_media_blog_router,
    admin_users_router,
    admin_transactions_router,
    admin_stats_router,
):
    app.include_router(router, prefix=settings.API_PREFIX)


@app.get("/")
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "gallery-api"}
