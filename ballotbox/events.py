# ballotbox/events.py
# Notifications emitted by the election engine for external observers.
import logging
import threading
from datetime import datetime, timezone
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field

from .models.election_model import WorkflowStatus
from .storage_mongo import next_sequence

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ElectionEvent(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    event: str
    timestamp: datetime = Field(default_factory=_utcnow)


class WorkflowStatusChange(ElectionEvent):
    event: str = "WorkflowStatusChange"
    previous_status: WorkflowStatus = Field(..., alias="previousStatus")
    new_status: WorkflowStatus = Field(..., alias="newStatus")


class VoterRegistered(ElectionEvent):
    event: str = "VoterRegistered"
    voter_address: str = Field(..., alias="voterAddress")


class ProposalRegistered(ElectionEvent):
    event: str = "ProposalRegistered"
    proposal_id: int = Field(..., alias="proposalId")


class Voted(ElectionEvent):
    event: str = "Voted"
    voter: str
    proposal_id: int = Field(..., alias="proposalId")


class MemoryEventSink:
    """Append-only, ordered, in-process event log."""

    def __init__(self):
        self._events: List[Dict[str, Any]] = []
        self._lock = threading.Lock()

    def emit(self, event: ElectionEvent) -> None:
        with self._lock:
            record = event.model_dump(mode="json", by_alias=True)
            record["sequence"] = len(self._events)
            self._events.append(record)
        logger.debug(f"Event emitted: {record}")

    def list_events(self) -> List[Dict[str, Any]]:
        with self._lock:
            return [dict(e) for e in self._events]


class MongoEventSink:
    """Event log stored in the MongoDB ``logs`` collection."""

    SEQUENCE_NAME = "events"

    def __init__(self, collection, counters):
        self.collection = collection
        self.counters = counters
        self.collection.create_index("sequence", unique=True)
        self._lock = threading.Lock()

    def emit(self, event: ElectionEvent) -> None:
        with self._lock:
            record = event.model_dump(mode="json", by_alias=True)
            record["sequence"] = next_sequence(self.counters, self.SEQUENCE_NAME)
            self.collection.insert_one(record)
        logger.debug(f"Event emitted: {record['event']} #{record['sequence']}")

    def list_events(self) -> List[Dict[str, Any]]:
        events = []
        for record in self.collection.find({}, {"_id": 0}).sort("sequence", 1):
            events.append(record)
        return events
