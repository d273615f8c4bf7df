"""Entrypoint for the FastAPI application."""
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from perfume_catalog.api import health, perfumes, upload
from perfume_catalog.api.errors import register_exception_handlers
from perfume_catalog.core.config import get_settings
from perfume_catalog.core.db import init_db

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="[%(asctime)s] %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

# StaticFiles refuses to mount a directory that does not exist yet.
upload_dir = Path(settings.upload_dir)
upload_dir.mkdir(parents=True, exist_ok=True)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    if settings.create_tables_on_startup:
        init_db()
    logger.info(f"{settings.app_name} started, API at {settings.api_prefix}, uploads at {upload_dir}")
    yield


app = FastAPI(
    title=settings.app_name,
    version="0.1.0",
    description="Perfume catalog inventory API with image uploads",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
    allow_credentials=True,
)

register_exception_handlers(app)

# Register API routers
app.include_router(health.router, prefix=settings.api_prefix)
app.include_router(perfumes.router, prefix=settings.api_prefix)
app.include_router(upload.router, prefix=settings.api_prefix)

app.mount(settings.uploads_url_prefix, StaticFiles(directory=upload_dir), name="uploads")
