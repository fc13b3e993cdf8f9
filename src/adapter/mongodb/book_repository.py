"""MongoDB implementation of BookRepository."""

import uuid
from dataclasses import asdict
from datetime import date, datetime, time, timezone
from logging import getLogger

from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from adapter.mongodb import BOOKS_COLLECTION_NAME
from domain.model.book import Book
from domain.model.errors import StoreUniquenessViolation

logger = getLogger(__name__)


def _to_datetime(value: date | None) -> datetime | None:
    # BSON has no date-only type
    if value is None:
        return None
    return datetime.combine(value, time.min, tzinfo=timezone.utc)


class MongoBookRepository:
    def __init__(self, db: Database):
        self.collection = db[BOOKS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for books collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('isbn', 1)], 'idx_books_isbn', unique=True)
            create_index_safe(self.collection, [('author', 1)], 'idx_books_author')
            return True
        except Exception as e:
            logger.error("Failed to create books indexes", extra={"error": str(e)})
            return False

    # ── helpers ──────────────────────────────────────────────

    def _to_domain(self, doc: dict) -> Book:
        """Convert MongoDB document to Book domain model."""
        published = doc.get('published_date')
        return Book(
            id=doc['_id'],
            title=doc['title'],
            author=doc['author'],
            isbn=doc['isbn'],
            published_date=published.date() if published else None,
            genre=doc['genre'],
            pages=doc.get('pages'),
            publisher=doc['publisher'],
            language=doc.get('language'),
            description=doc.get('description'),
            available_copies=doc.get('available_copies', 1),
            total_copies=doc.get('total_copies', 1),
            created_at=doc['created_at'],
            updated_at=doc['updated_at'],
        )

    def _to_document(self, book: Book) -> dict:
        doc = asdict(book)
        doc.pop('id')
        doc['published_date'] = _to_datetime(book.published_date)
        return doc

    # ── write operations ─────────────────────────────────────

    def create(self, book: Book) -> Book | None:
        book_id = uuid.uuid4().hex
        doc = {'_id': book_id, **self._to_document(book)}
        try:
            self.collection.insert_one(doc)
        except DuplicateKeyError as e:
            raise StoreUniquenessViolation("ISBN already exists") from e
        except PyMongoError as e:
            logger.error("Failed to create book", extra={"isbn": book.isbn, "error": str(e)})
            return None

        logger.info("Book created", extra={"bookId": book_id})
        return self._to_domain(doc)

    def update(self, book_id: str, book: Book) -> Book | None:
        doc = self._to_document(book)
        doc.pop('created_at')
        try:
            updated = self.collection.find_one_and_update(
                {'_id': book_id},
                {'$set': doc},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as e:
            raise StoreUniquenessViolation("ISBN already exists") from e
        except PyMongoError as e:
            logger.error("Failed to update book", extra={"bookId": book_id, "error": str(e)})
            return None
        return self._to_domain(updated) if updated else None

    def delete(self, book_id: str) -> bool:
        try:
            return self.collection.delete_one({'_id': book_id}).deleted_count > 0
        except PyMongoError as e:
            logger.error("Failed to delete book", extra={"bookId": book_id, "error": str(e)})
            return False

    # ── read operations ──────────────────────────────────────

    def get_by_id(self, book_id: str) -> Book | None:
        try:
            doc = self.collection.find_one({'_id': book_id})
            return self._to_domain(doc) if doc else None
        except PyMongoError as e:
            logger.error("Failed to get book", extra={"bookId": book_id, "error": str(e)})
            return None

    def get_by_isbn(self, isbn: str) -> Book | None:
        try:
            doc = self.collection.find_one({'isbn': isbn})
            return self._to_domain(doc) if doc else None
        except PyMongoError as e:
            logger.error("Failed to get book by ISBN", extra={"isbn": isbn, "error": str(e)})
            return None

    def find_all(self) -> list[Book]:
        try:
            return [self._to_domain(doc) for doc in self.collection.find({})]
        except PyMongoError as e:
            logger.error("Failed to list books", extra={"error": str(e)})
            return []

    def exists_for_author(self, names: list[str]) -> bool:
        try:
            return self.collection.find_one({'author': {'$in': names}}) is not None
        except PyMongoError as e:
            logger.error("Failed to check author books", extra={"error": str(e)})
            # Unknown state blocks the delete
            return True
