"""Shared MongoDB client for the user, session and catalog stores.

One ``MongoClient`` is cached per process. A cached client that stops
answering pings is replaced; a missing ``MONGO_URL`` or a failed first
connection disables MongoDB until ``close_client`` is called.
"""

import os
import logging
from pymongo import MongoClient
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)

# Driver debug output would drown the structured application log
logging.getLogger('pymongo').setLevel(logging.WARNING)

MONGO_URL = os.getenv('MONGO_URL')
DATABASE_NAME = os.getenv('MONGODB_DATABASE', 'library')
MONGO_TIMEOUT_MS = int(os.getenv('MONGO_TIMEOUT_MS', '5000'))

USERS_COLLECTION_NAME = 'users'
SESSIONS_COLLECTION_NAME = 'sessions'
BOOKS_COLLECTION_NAME = os.getenv('MONGO_COLLECTION_BOOKS', 'books')
AUTHORS_COLLECTION_NAME = os.getenv('MONGO_COLLECTION_AUTHORS', 'authors')

_client: MongoClient | None = None
_connected_once = False
_disabled = False


def close_client() -> None:
    """Close the cached client and forget any earlier connection failure."""
    global _client, _connected_once, _disabled
    if _client is not None:
        _client.close()
    _client = None
    _connected_once = False
    _disabled = False


def _is_alive(client: MongoClient) -> bool:
    try:
        client.admin.command('ping')
        return True
    except PyMongoError:
        return False


def _connect() -> MongoClient:
    client = MongoClient(
        MONGO_URL,
        serverSelectionTimeoutMS=MONGO_TIMEOUT_MS,
        connectTimeoutMS=MONGO_TIMEOUT_MS,
        maxPoolSize=10,
        retryWrites=True,
        retryReads=True,
        # session expiry compares against aware UTC datetimes
        tz_aware=True,
    )
    client.admin.command('ping')
    return client


def get_mongodb_client() -> MongoClient | None:
    """Return a live MongoDB client, or None when the database is unavailable."""
    global _client, _connected_once, _disabled

    if _client is not None:
        if _is_alive(_client):
            return _client
        logger.warning("MongoDB client lost connection, reconnecting", extra={"database": DATABASE_NAME})
        _client = None

    if _disabled:
        return None

    if not MONGO_URL:
        logger.error("MONGO_URL is not configured")
        _disabled = True
        return None

    try:
        _client = _connect()
    except PyMongoError as e:
        if not _connected_once:
            # A bad URL or credentials will not fix themselves; stop retrying
            _disabled = True
        logger.error("MongoDB connection failed", extra={"database": DATABASE_NAME, "error": str(e)[:200]})
        return None

    if not _connected_once:
        logger.info("MongoDB connected", extra={"database": DATABASE_NAME})
    _connected_once = True
    return _client
