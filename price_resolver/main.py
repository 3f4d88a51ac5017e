"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from price_resolver import __version__
from price_resolver.api.v1.pricing import router as pricing_router
from price_resolver.config import settings
from price_resolver.database import dispose_engine
from price_resolver.exceptions import InvalidInput

structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.dev.ConsoleRenderer() if settings.environment == "development"
        else structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(
        getattr(logging, settings.log_level.upper(), logging.INFO)
    ),
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown."""
    logger.info("app_starting", environment=settings.environment)
    yield
    await dispose_engine()
    logger.info("app_shutting_down")


app = FastAPI(
    title="Price Resolver API",
    description="Resolves the best-matching price for price sets in a given context",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(pricing_router)


@app.exception_handler(InvalidInput)
async def invalid_input_handler(request: Request, exc: InvalidInput) -> JSONResponse:
    logger.info("invalid_input", path=request.url.path, code=exc.code, message=exc.message)
    return JSONResponse(status_code=400, content=exc.to_response().model_dump())


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "Price Resolver API",
        "version": __version__,
        "status": "running",
    }
