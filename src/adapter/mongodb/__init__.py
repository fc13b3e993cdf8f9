from adapter.mongodb.connection import (
    DATABASE_NAME,
    USERS_COLLECTION_NAME,
    SESSIONS_COLLECTION_NAME,
    BOOKS_COLLECTION_NAME,
    AUTHORS_COLLECTION_NAME,
)
