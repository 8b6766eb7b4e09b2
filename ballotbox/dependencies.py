# Shared FastAPI dependencies. The storage, event sink and engine are created
# once per process on first use.
import logging
import threading

from . import config
from .crud import seed_owner_account
from .database.connection import build_event_sink, build_storage
from .engine import ElectionEngine

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_storage = None
_events = None
_engine = None


def get_storage():
    global _storage
    with _lock:
        if _storage is None:
            _storage = build_storage()
        return _storage


def get_event_sink():
    global _events
    storage = get_storage()
    with _lock:
        if _events is None:
            _events = build_event_sink(storage)
        return _events


def get_engine() -> ElectionEngine:
    global _engine
    storage = get_storage()
    events = get_event_sink()
    with _lock:
        if _engine is None:
            _engine = ElectionEngine(storage, events, owner=config.ELECTION_OWNER)
            if config.ELECTION_OWNER_PASSWORD:
                seed_owner_account(storage, _engine.owner, config.ELECTION_OWNER_PASSWORD)
            else:
                logger.warning("ELECTION_OWNER_PASSWORD is not set, the owner account cannot log in")
        return _engine
