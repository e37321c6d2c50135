# FastAPI application entry point
# Defines the main app instance and core routes

import logging
import os
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler

from fastapi import FastAPI
from pydantic import BaseModel

from .api import tools
from .config import Settings, get_config
from .services.factory import create_search_store

_log_formatter = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
logger = logging.getLogger(__name__)


def configure_logging(config: Settings) -> None:
    """Console logging, plus a rotating file when log_file is set.

    Safe to call repeatedly: a file handler for the same path is added once.
    """
    logging.basicConfig(level=config.log_level.upper(), format=_log_formatter)
    if config.log_file is None:
        return

    root = logging.getLogger()
    log_path = os.path.abspath(config.log_file)
    for handler in root.handlers:
        if isinstance(handler, RotatingFileHandler) and handler.baseFilename == log_path:
            handler.setLevel(config.log_level.upper())
            return

    config.log_file.parent.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(log_path, maxBytes=2_000_000, backupCount=3)
    file_handler.setLevel(config.log_level.upper())
    file_handler.setFormatter(logging.Formatter(_log_formatter))
    root.addHandler(file_handler)


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the configured search store before accepting queries."""
    config = get_config()
    configure_logging(config)

    logger.info(f"Starting Tool Search Gateway with provider: {config.search_provider}")
    app.state.search_store = create_search_store(config)
    logger.info(f"Search store ready: {app.state.search_store.strategy}")

    yield

    logger.info("Shutting down Tool Search Gateway")


app = FastAPI(
    title="Tool Search Gateway",
    description="Selects the most relevant aggregated MCP tools for each query",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(tools.router)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint returning welcome message."""
    return {"message": "Welcome to Tool Search Gateway"}


@app.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="healthy", message="Service is running")
