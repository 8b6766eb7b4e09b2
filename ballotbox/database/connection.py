import logging

from .. import config
from ..events import MemoryEventSink, MongoEventSink
from ..storage import JsonFileStorage, MemoryStorage

logger = logging.getLogger(__name__)


def build_storage(backend: str = None):
    backend = (backend or config.STORAGE_BACKEND).lower()

    if backend == "memory":
        return MemoryStorage()
    if backend == "json":
        return JsonFileStorage(config.DUMMY_DB_PATH)
    if backend == "mongo":
        if not config.MONGO_URI:
            raise ValueError("❌ MONGO_URI not found. Check your .env file location.")
        if not config.MONGO_DB:
            raise ValueError("❌ MONGO_DB not found. Check your .env file location.")
        from ..storage_mongo import MongoStorage

        return MongoStorage(config.MONGO_URI, config.MONGO_DB)
    raise ValueError(f"Unknown STORAGE_BACKEND: {backend!r}")


def build_event_sink(storage):
    db = getattr(storage, "db", None)
    if db is not None:
        return MongoEventSink(db[config.EVENTS_COLLECTION_NAME], db[config.COUNTERS_COLLECTION_NAME])
    return MemoryEventSink()
