"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from account_service.api import user
from account_service.config import get_settings
from account_service.database import init_db
from account_service.errors import AccountServiceError, account_service_error_handler

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    logging.basicConfig(level=settings.log_level.upper())
    init_db()
    yield


app = FastAPI(
    title="Account Service API",
    description="User registration, sign-in and profile management",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_exception_handler(AccountServiceError, account_service_error_handler)

# CORS middleware for development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:3000",
            "http://localhost:5173",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(user.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
