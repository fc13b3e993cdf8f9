"""Health check endpoint.

Reports the database (with the collections the API relies on) and whether
Google OAuth is configured. Only the database decides the status code.
"""

import logging
from datetime import datetime, timezone
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from adapter.external.google_oauth import GOOGLE_CLIENT_ID, GOOGLE_CLIENT_SECRET
from adapter.mongodb.connection import (
    AUTHORS_COLLECTION_NAME,
    BOOKS_COLLECTION_NAME,
    DATABASE_NAME,
    SESSIONS_COLLECTION_NAME,
    USERS_COLLECTION_NAME,
    get_mongodb_client,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])

REQUIRED_COLLECTIONS = (
    USERS_COLLECTION_NAME,
    SESSIONS_COLLECTION_NAME,
    BOOKS_COLLECTION_NAME,
    AUTHORS_COLLECTION_NAME,
)


def _database_status() -> dict:
    client = get_mongodb_client()
    if client is None:
        return {"status": "unhealthy", "message": "Connection failed or not configured"}

    try:
        existing = set(client[DATABASE_NAME].list_collection_names())
    except PyMongoError as e:
        logger.warning("Health check could not list collections", extra={"error": str(e)[:200]})
        return {"status": "unhealthy", "message": "Database did not respond"}

    # Collections appear on first write, so a missing one is not a failure
    return {
        "status": "healthy",
        "database": DATABASE_NAME,
        "collections": {name: name in existing for name in REQUIRED_COLLECTIONS},
    }


@router.get("")
async def health():
    """Health check with database and OAuth configuration status."""
    mongodb = _database_status()
    healthy = mongodb["status"] == "healthy"

    body = {
        "status": "healthy" if healthy else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        "services": {
            "mongodb": mongodb,
            "google_oauth": {"configured": bool(GOOGLE_CLIENT_ID and GOOGLE_CLIENT_SECRET)},
        },
    }
    return JSONResponse(
        content=body,
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
    )
