"""MongoDB index management.

Each Mongo repository declares its indexes through ``create_index_safe``;
``ensure_all_indexes`` runs them all once at startup.
"""

from logging import getLogger

logger = getLogger(__name__)

# Index options that change behaviour and must match for an index to be reused
_COMPARED_OPTIONS = ('unique', 'sparse', 'expireAfterSeconds')


def _key_list(keys) -> list[tuple]:
    return [tuple(k) for k in keys]


def create_index_safe(collection, keys: list, name: str, **options) -> bool:
    """Create an index, replacing any existing one that clashes with it.

    An existing index clashes when it has the same name or the same keys but
    differs in keys, name or one of the compared options (unique, sparse, TTL).
    An identical index is left alone.
    """
    wanted = _key_list(keys)

    for idx_name, info in collection.index_information().items():
        if idx_name == '_id_':
            continue
        same_name = idx_name == name
        same_keys = _key_list(info.get('key', [])) == wanted
        if not (same_name or same_keys):
            continue

        options_match = all(info.get(opt) == options.get(opt) for opt in _COMPARED_OPTIONS)
        if same_name and same_keys and options_match:
            return True

        logger.warning(
            "Replacing conflicting index",
            extra={"collection": collection.name, "index": idx_name, "wanted": name},
        )
        collection.drop_index(idx_name)

    collection.create_index(keys, name=name, **options)
    return True


def ensure_all_indexes(db) -> bool:
    """Ensure indexes for users, sessions, books and authors. Called at startup."""
    from adapter.mongodb.user_repository import MongoUserRepository
    from adapter.mongodb.session_store import MongoSessionStore
    from adapter.mongodb.book_repository import MongoBookRepository
    from adapter.mongodb.author_repository import MongoAuthorRepository

    results = [
        MongoUserRepository(db).ensure_indexes(),
        MongoSessionStore(db).ensure_indexes(),
        MongoBookRepository(db).ensure_indexes(),
        MongoAuthorRepository(db).ensure_indexes(),
    ]
    return all(results)
