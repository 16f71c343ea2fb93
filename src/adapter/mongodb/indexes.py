"""MongoDB index management utilities.

Index creation that tolerates an existing index with a conflicting name or
key spec by dropping it and recreating the desired one.
"""

from logging import getLogger

from pymongo.database import Database
from pymongo.errors import PyMongoError

logger = getLogger(__name__)


def create_index_safe(collection, keys: list, name: str, **kwargs) -> bool:
    """Create an index, resolving name/key-spec conflicts with an existing one."""
    try:
        collection.create_index(keys, name=name, **kwargs)
        return True
    except PyMongoError as e:
        if "already exists" not in str(e) and "Conflict" not in str(e):
            raise
        return _recreate_conflicting(collection, keys, name, **kwargs)


def _recreate_conflicting(collection, keys: list, name: str, **kwargs) -> bool:
    wanted = dict(keys)

    for existing_name, info in collection.index_information().items():
        if existing_name == '_id_':
            continue

        same_name = existing_name == name
        same_keys = dict(info.get('key', [])) == wanted
        if same_name != same_keys:
            logger.warning("Dropping conflicting index", extra={"index": existing_name})
            collection.drop_index(existing_name)
            collection.create_index(keys, name=name, **kwargs)
            return True

    logger.error("Failed to resolve index conflict", extra={"index": name})
    return False


def ensure_all_indexes(db: Database) -> bool:
    """Ensure indexes for all collections. Called at app startup."""
    from adapter.mongodb.user_repository import MongoUserRepository

    return MongoUserRepository(db).ensure_indexes()
