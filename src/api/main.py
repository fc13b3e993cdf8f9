"""Library catalog API: FastAPI app, middleware, routers and lifespan."""

import os
import sys
import logging
import tomllib
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

# api.security, the Google adapter and the Mongo connection read env at import
load_dotenv()

_src_path = Path(__file__).resolve().parent.parent
if str(_src_path) not in sys.path:
    sys.path.insert(0, str(_src_path))

from api.routes import auth, authors, books, health
from api.exception_handlers import setup_exception_handlers
from api.security import SESSION_COOKIE_NAME, SESSION_COOKIE_SECURE, SESSION_TTL_SECONDS
from utils.logging import setup_structured_logging
from adapter.mongodb.connection import DATABASE_NAME, close_client, get_mongodb_client
from adapter.mongodb.indexes import ensure_all_indexes

setup_structured_logging()

logger = logging.getLogger(__name__)

with open(_src_path.parent / "pyproject.toml", "rb") as f:
    VERSION = tomllib.load(f)["project"]["version"]

SERVICE_NAME = "Library Management API"

DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://localhost:3001,http://localhost:5173"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create catalog, user and session indexes on startup; close MongoDB on shutdown."""
    logger.info("Starting service", extra={
        "version": VERSION,
        "sessionCookie": SESSION_COOKIE_NAME,
        "sessionTtlSeconds": SESSION_TTL_SECONDS,
        "secureCookie": SESSION_COOKIE_SECURE,
    })

    client = get_mongodb_client()
    if client is None:
        logger.warning("MongoDB unavailable at startup; indexes not checked")
    elif not ensure_all_indexes(client[DATABASE_NAME]):
        logger.warning("Some MongoDB indexes could not be created", extra={"database": DATABASE_NAME})

    yield

    close_client()


app = FastAPI(
    title=SERVICE_NAME,
    description=(
        "CRUD API for books and authors with Google OAuth session authentication. "
        "POST, PUT and DELETE operations require a session (log in at /auth/google)."
    ),
    version=VERSION,
    lifespan=lifespan,
)

# Session cookies need credentialed CORS, which browsers refuse with a
# wildcard origin, so origins are always an explicit list.
cors_origins = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS).split(",")
    if origin.strip()
]
logger.info(f"CORS configured with origins: {cors_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

setup_exception_handlers(app)

# Register routes
app.include_router(auth.router)
app.include_router(books.router)
app.include_router(authors.router)
app.include_router(health.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": SERVICE_NAME,
        "version": VERSION,
        "documentation": "/docs",
        "authentication": {
            "login": "/auth/google",
            "logout": "/auth/logout",
            "status": "/auth/status",
            "dashboard": "/auth/dashboard",
        },
        "endpoints": {
            "books": "/api/books",
            "authors": "/api/authors",
        },
        "note": "POST, PUT, and DELETE operations require authentication",
    }


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    # Application logs go through structured logging; skip uvicorn's access log
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=port,
        access_log=False
    )
