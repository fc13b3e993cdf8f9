"""MongoDB implementation of AuthorRepository."""

import uuid
from dataclasses import asdict
from datetime import datetime, time, timezone
from logging import getLogger

from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from adapter.mongodb import AUTHORS_COLLECTION_NAME
from domain.model.author import Author
from domain.model.errors import StoreUniquenessViolation

logger = getLogger(__name__)


class MongoAuthorRepository:
    def __init__(self, db: Database):
        self.collection = db[AUTHORS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for authors collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('email', 1)], 'idx_authors_email', unique=True)
            return True
        except Exception as e:
            logger.error("Failed to create authors indexes", extra={"error": str(e)})
            return False

    # ── helpers ──────────────────────────────────────────────

    def _to_domain(self, doc: dict) -> Author:
        """Convert MongoDB document to Author domain model."""
        birth = doc.get('birth_date')
        return Author(
            id=doc['_id'],
            first_name=doc['first_name'],
            last_name=doc.get('last_name'),
            email=doc['email'],
            birth_date=birth.date() if birth else None,
            nationality=doc['nationality'],
            biography=doc.get('biography'),
            website=doc.get('website'),
            created_at=doc['created_at'],
            updated_at=doc['updated_at'],
        )

    def _to_document(self, author: Author) -> dict:
        doc = asdict(author)
        doc.pop('id')
        if author.birth_date is not None:
            doc['birth_date'] = datetime.combine(author.birth_date, time.min, tzinfo=timezone.utc)
        return doc

    # ── write operations ─────────────────────────────────────

    def create(self, author: Author) -> Author | None:
        author_id = uuid.uuid4().hex
        doc = {'_id': author_id, **self._to_document(author)}
        try:
            self.collection.insert_one(doc)
        except DuplicateKeyError as e:
            raise StoreUniquenessViolation("Email already exists") from e
        except PyMongoError as e:
            logger.error("Failed to create author", extra={"error": str(e)})
            return None

        logger.info("Author created", extra={"authorId": author_id})
        return self._to_domain(doc)

    def update(self, author_id: str, author: Author) -> Author | None:
        doc = self._to_document(author)
        doc.pop('created_at')
        try:
            updated = self.collection.find_one_and_update(
                {'_id': author_id},
                {'$set': doc},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as e:
            raise StoreUniquenessViolation("Email already exists") from e
        except PyMongoError as e:
            logger.error("Failed to update author", extra={"authorId": author_id, "error": str(e)})
            return None
        return self._to_domain(updated) if updated else None

    def delete(self, author_id: str) -> bool:
        try:
            return self.collection.delete_one({'_id': author_id}).deleted_count > 0
        except PyMongoError as e:
            logger.error("Failed to delete author", extra={"authorId": author_id, "error": str(e)})
            return False

    # ── read operations ──────────────────────────────────────

    def get_by_id(self, author_id: str) -> Author | None:
        try:
            doc = self.collection.find_one({'_id': author_id})
            return self._to_domain(doc) if doc else None
        except PyMongoError as e:
            logger.error("Failed to get author", extra={"authorId": author_id, "error": str(e)})
            return None

    def get_by_email(self, email: str) -> Author | None:
        try:
            doc = self.collection.find_one({'email': email})
            return self._to_domain(doc) if doc else None
        except PyMongoError as e:
            logger.error("Failed to get author by email", extra={"error": str(e)})
            return None

    def find_all(self) -> list[Author]:
        try:
            return [self._to_domain(doc) for doc in self.collection.find({})]
        except PyMongoError as e:
            logger.error("Failed to list authors", extra={"error": str(e)})
            return []
