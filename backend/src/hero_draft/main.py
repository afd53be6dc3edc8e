"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hero_draft.config import settings
from hero_draft.api.routes.admin import router as admin_router
from hero_draft.api.routes.draft import router as draft_router
from hero_draft.api.routes.items import router as items_router
from hero_draft.errors import HeroNotFoundError, SourceUnavailable
from hero_draft.services.recommendation_engine import create_engine

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup: build the engine unless a test already injected one.
    # Catalog tables load lazily on first request.
    if not hasattr(app.state, "engine"):
        app.state.engine = create_engine(settings)
    yield


app = FastAPI(
    title="Hero Draft",
    description="Hero partner and item build recommendations",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(HeroNotFoundError)
async def hero_not_found_handler(request: Request, exc: HeroNotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(SourceUnavailable)
async def source_unavailable_handler(request: Request, exc: SourceUnavailable):
    logger.error(f"Catalog source unavailable: {exc}")
    return JSONResponse(status_code=503, content={"detail": "Catalog data unavailable"})


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "hero-draft"}


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Hero Draft API",
        "version": "0.1.0",
        "docs": "/docs",
    }


# Register routers
app.include_router(items_router)
app.include_router(draft_router)
app.include_router(admin_router)
