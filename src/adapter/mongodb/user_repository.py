"""MongoDB implementation of UserRepository."""

import uuid
from datetime import datetime, timezone
from logging import getLogger

from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from adapter.mongodb import USERS_COLLECTION_NAME
from domain.model.errors import StoreUniquenessViolation
from domain.model.user import User, from_stored_document, to_document

logger = getLogger(__name__)


class MongoUserRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('email', 1)], 'idx_users_email', unique=True)
            create_index_safe(self.collection, [('google_id', 1)], 'idx_users_google_id', sparse=True)
            create_index_safe(self.collection, [('created_at', -1)], 'idx_users_created_at')
            return True
        except Exception as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    def create(self, user: User) -> User | None:
        """Insert a new user in a single write and return the stored User."""
        user_id = uuid.uuid4().hex
        user_doc = {'_id': user_id, **to_document(user)}
        try:
            self.collection.insert_one(user_doc)
        except DuplicateKeyError as e:
            logger.warning("User creation failed: email already exists", extra={"error": str(e)[:200]})
            raise StoreUniquenessViolation("Email already registered") from e
        except PyMongoError as e:
            logger.error("Failed to create user", extra={"error": str(e)})
            return None

        logger.info("User created", extra={"userId": user_id, "provider": user.provider.value})
        return from_stored_document(user_doc)

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        try:
            doc = self.collection.find_one({'email': email})
            return from_stored_document(doc) if doc else None
        except PyMongoError as e:
            logger.error("Failed to get user by email", extra={"error": str(e)})
            return None

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        try:
            doc = self.collection.find_one({'_id': user_id})
            return from_stored_document(doc) if doc else None
        except PyMongoError as e:
            logger.error("Failed to get user by ID", extra={"userId": user_id, "error": str(e)})
            return None

    def find_by_google_id_or_email(self, google_id: str, email: str) -> User | None:
        """Find a user whose google_id or email matches."""
        try:
            doc = self.collection.find_one({
                '$or': [
                    {'google_id': google_id},
                    {'email': email},
                ]
            })
            return from_stored_document(doc) if doc else None
        except PyMongoError as e:
            logger.error("Failed to look up user", extra={"error": str(e)})
            return None

    def update(self, user_id: str, fields: dict) -> User | None:
        """Set fields, refresh updated_at, and return the updated User."""
        patch = {**fields, 'updated_at': fields.get('updated_at', datetime.now(timezone.utc))}
        if 'provider' in patch:
            patch['provider'] = getattr(patch['provider'], 'value', patch['provider'])
        try:
            doc = self.collection.find_one_and_update(
                {'_id': user_id},
                {'$set': patch},
                return_document=ReturnDocument.AFTER,
            )
            if not doc:
                return None
            logger.debug("Updated user", extra={"userId": user_id})
            return from_stored_document(doc)
        except PyMongoError as e:
            logger.error("Failed to update user", extra={"userId": user_id, "error": str(e)})
            return None
