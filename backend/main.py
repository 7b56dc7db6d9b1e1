"""
FastAPI Application Entry Point.

This is the main entry point for the Emojify API.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from apps.core.config import settings
from apps.emojify.router import get_engine, router as emojify_router

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Emoji images and cloud clients are loaded once; a missing image aborts startup
    get_engine()
    logger.info("Emojify engine ready")
    yield


app = FastAPI(
    title="Emojify API",
    description="Replaces faces in stored images with emojis matching their emotions.",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include Routers
app.include_router(emojify_router)


@app.get("/health")
async def health():
    """Global health check."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
