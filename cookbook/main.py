"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from cookbook.api import favorites, ingredients, own_recipes, recipes, shopping_list, users
from cookbook.config import get_settings
from cookbook.exceptions import setup_exception_handlers
from cookbook.services.images import AVATARS_FOLDER, THUMBS_FOLDER

settings = get_settings()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    for folder in (AVATARS_FOLDER, THUMBS_FOLDER):
        (settings.static_dir / folder).mkdir(parents=True, exist_ok=True)
    settings.upload_tmp_dir.mkdir(parents=True, exist_ok=True)
    logger.info(f"Cookbook API starting ({settings.environment})")
    yield
    logger.info("Cookbook API shutting down")


app = FastAPI(
    title="Cookbook API",
    description="Recipe catalog with favorites, own recipes and a shopping list",
    version="0.1.0",
    lifespan=lifespan,
)

setup_exception_handlers(app)

# CORS middleware for development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000", "http://localhost:5173"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Register routers
app.include_router(users.router)
app.include_router(recipes.router)
app.include_router(own_recipes.router)
app.include_router(favorites.router)
app.include_router(ingredients.router)
app.include_router(shopping_list.router)

# Uploaded images; directories are created on startup
app.mount(
    f"/{AVATARS_FOLDER}",
    StaticFiles(directory=settings.static_dir / AVATARS_FOLDER, check_dir=False),
    name=AVATARS_FOLDER,
)
app.mount(
    f"/{THUMBS_FOLDER}",
    StaticFiles(directory=settings.static_dir / THUMBS_FOLDER, check_dir=False),
    name=THUMBS_FOLDER,
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
