"""FastAPI application entry point."""

import os
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from dotenv import load_dotenv

# Must run before anything reads settings from the environment
load_dotenv()

from adapter.mongodb.connection import get_mongodb_client
from adapter.mongodb.indexes import ensure_all_indexes
from api.dependencies import get_settings, get_user_service
from api.errors import domain_error_handler
from api.routes import health, users
from domain.model.errors import DomainError
from utils.logging import setup_structured_logging

setup_structured_logging(os.getenv("LOG_LEVEL", "INFO"), service="user-account-service")

logger = logging.getLogger(__name__)

SERVICE_NAME = "User Account Service"
VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown logic."""
    settings = get_settings()
    client = get_mongodb_client(settings.mongo_url)
    if client:
        if ensure_all_indexes(client[settings.mongo_database]):
            logger.info("MongoDB indexes verified/created successfully")
        else:
            logger.warning("Failed to create some MongoDB indexes")
    else:
        logger.warning("MongoDB unavailable, skipping index creation")

    yield

    # Let activation emails already in flight finish
    if get_user_service.cache_info().currsize:
        await get_user_service().drain()


app = FastAPI(
    title=SERVICE_NAME,
    description="Registration, activation, login and session authentication",
    version=VERSION,
    lifespan=lifespan,
)

app.add_exception_handler(DomainError, domain_error_handler)

app.include_router(users.router)
app.include_router(health.router)


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port, access_log=False)
