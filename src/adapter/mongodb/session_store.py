"""MongoDB implementation of SessionStore.

Sessions expire through a TTL index on ``expires_at``. MongoDB purges
expired documents lazily, so reads also check the expiry explicitly.
"""

import secrets
from datetime import datetime, timedelta, timezone
from logging import getLogger

from pymongo.database import Database
from pymongo.errors import PyMongoError

from adapter.mongodb import SESSIONS_COLLECTION_NAME

logger = getLogger(__name__)

TOKEN_BYTES = 32


class MongoSessionStore:
    def __init__(self, db: Database):
        self.collection = db[SESSIONS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create the TTL index for sessions collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(
                self.collection, [('expires_at', 1)], 'idx_sessions_expires_at',
                expireAfterSeconds=0,
            )
            return True
        except Exception as e:
            logger.error("Failed to create sessions indexes", extra={"error": str(e)})
            return False

    def create(self, user_ref: str, ttl_seconds: int) -> str | None:
        token = secrets.token_urlsafe(TOKEN_BYTES)
        now = datetime.now(timezone.utc)
        try:
            self.collection.insert_one({
                '_id': token,
                'user_id': user_ref,
                'created_at': now,
                'expires_at': now + timedelta(seconds=ttl_seconds),
            })
            return token
        except PyMongoError as e:
            logger.error("Failed to create session", extra={"userId": user_ref, "error": str(e)})
            return None

    def get(self, token: str) -> str | None:
        try:
            doc = self.collection.find_one({'_id': token})
        except PyMongoError as e:
            logger.error("Failed to read session", extra={"error": str(e)})
            return None

        if not doc:
            return None
        expires_at = doc['expires_at']
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        if expires_at <= datetime.now(timezone.utc):
            return None
        return doc['user_id']

    def delete(self, token: str) -> bool:
        try:
            result = self.collection.delete_one({'_id': token})
            return result.deleted_count > 0
        except PyMongoError as e:
            logger.error("Failed to delete session", extra={"error": str(e)})
            return False
