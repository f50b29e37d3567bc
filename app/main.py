# app/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1.api import api_router
from app.core.config import settings
from app.core.errors import AppError, app_error_handler, validation_error_handler

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Schema is owned by Alembic (alembic upgrade head), not created here
    logger.info("Classifieds chat service starting up...")
    yield
    logger.info("Classifieds chat service shutting down...")


app = FastAPI(
    title="Classifieds Chat Service",
    version="1.0.0",
    description="""
        Buyer/seller messaging for the classifieds marketplace.

        ## Features

        * **Chat rooms**: one conversation per ad and buyer, opened from the ad page
        * **Messages**: plain-text messages with read receipts
        * **Inbox**: conversations with last message and unread counts

        ## Authentication

        Every endpoint requires a JWT, either as `Authorization: Bearer <token>`
        or in the marketplace auth cookie.
        """,
    lifespan=lifespan,
)

origins = settings.get_cors_origins() or [
    "http://localhost:3000",  # Development only
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,  # Allow cookies and authorization headers
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

app.add_exception_handler(AppError, app_error_handler)
app.add_exception_handler(RequestValidationError, validation_error_handler)

app.include_router(api_router, prefix="/api/v1")


@app.get("/")
def read_root():
    return {"status": "Classifieds Chat Service is running"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
