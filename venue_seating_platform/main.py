"""FastAPI application setup and configuration."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from venue_seating_platform.config import settings
from venue_seating_platform.api import api_router
from venue_seating_platform.database import init_database, close_database
from venue_seating_platform.middleware import (
    ErrorHandlerMiddleware,
    LoggingMiddleware,
    register_exception_handlers,
)
from venue_seating_platform.utils.logging_config import setup_logging

# Set up logging
setup_logging(
    log_level="DEBUG" if settings.debug else settings.log_level,
    log_file="logs/venue_seating.log" if settings.environment == "production" else None,
    enable_json_logging=settings.enable_json_logging or settings.environment == "production",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    logger.info("Starting Venue Seating Platform")
    await init_database()
    yield
    logger.info("Shutting down Venue Seating Platform")
    await close_database()

app = FastAPI(
    title="Venue Seating Platform API",
    description="""
    ## Venue Seating Platform

    Venue layouts and guest seating for events.

    ### Key Features

    * **Venues and rooms**: Describe where events take place
    * **Seat layouts**: Create seats one by one or generate rectangular grids
    * **Seating assignments**: Bind each guest to exactly one seat per event
    * **Seating charts**: Live totals of assigned and available seats

    ### Authentication

    Protected endpoints expect `Authorization: Bearer <access_token>`, where
    the token's `sub` claim is the user id.

    ### Error Handling

    ```json
    {
      "error": {
        "error_code": "SEAT_OCCUPIED",
        "message": "Human readable error message",
        "details": {"seat_id": "..."},
        "suggestions": ["Choose a different seat"]
      },
      "error_id": "...",
      "timestamp": "..."
    }
    ```
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {"name": "venues", "description": "Venue management operations"},
        {"name": "rooms", "description": "Room management within a venue"},
        {"name": "seats", "description": "Seat layout and grid generation"},
        {"name": "seating", "description": "Guest seat assignments and seating charts"},
        {"name": "health", "description": "System health endpoints"},
    ],
    lifespan=lifespan,
)

register_exception_handlers(app)

# Middleware added last runs first: logging wraps error handling
app.add_middleware(
    ErrorHandlerMiddleware,
    debug=settings.debug
)

app.add_middleware(
    LoggingMiddleware,
    log_requests=settings.enable_request_logging
)

if settings.debug:
    # Development: Allow all origins for easier development
    cors_origins = ["*"]
    cors_allow_credentials = False  # Cannot use credentials with wildcard origins
else:
    cors_origins = settings.cors_origins
    cors_allow_credentials = settings.cors_allow_credentials

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
    expose_headers=settings.cors_expose_headers
)

# Include API routes
app.include_router(api_router)


@app.get("/", tags=["health"])
async def root():
    """Root endpoint for API information."""
    return {
        "message": "Venue Seating Platform API",
        "version": "1.0.0",
        "docs_url": "/docs",
        "redoc_url": "/redoc",
        "status": "operational"
    }


@app.get("/health", tags=["health"])
async def health_check():
    """Basic health check endpoint for uptime monitoring."""
    return {"status": "healthy", "service": "venue-seating-platform"}
