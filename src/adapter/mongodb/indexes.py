"""MongoDB index management.

Index creation that survives renamed or re-specified indexes left by
earlier deployments. Each MongoXxxRepository declares its own indexes.
"""

from logging import getLogger

from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import OperationFailure

logger = getLogger(__name__)

# Server error codes for an index that clashes with an existing one
_INDEX_CONFLICT_CODES = {85, 86}  # IndexOptionsConflict, IndexKeySpecsConflict


def create_index_safe(collection: Collection, keys: list, name: str, **kwargs) -> bool:
    """Create an index, replacing an existing index that clashes with it.

    A clash is either the same name with different keys, or the same keys
    under a different name.
    """
    try:
        collection.create_index(keys, name=name, **kwargs)
        return True
    except OperationFailure as e:
        if e.code not in _INDEX_CONFLICT_CODES and "already exists" not in str(e):
            raise

    for existing_name, info in collection.index_information().items():
        if existing_name == '_id_':
            continue
        same_name = existing_name == name
        same_keys = dict(info.get('key', [])) == dict(keys)
        if same_name != same_keys:
            logger.warning(
                "Replacing conflicting index",
                extra={"collection": collection.name, "index": existing_name, "replacement": name},
            )
            collection.drop_index(existing_name)
            collection.create_index(keys, name=name, **kwargs)
            return True

    logger.error("Could not resolve index conflict", extra={"collection": collection.name, "index": name})
    return False


def ensure_all_indexes(db: Database) -> bool:
    """Ensure indexes for all collections. Called at app startup."""
    from adapter.mongodb.user_repository import MongoUserRepository

    return MongoUserRepository(db).ensure_indexes()
