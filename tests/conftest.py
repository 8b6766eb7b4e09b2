"""
Shared pytest configuration and fixtures for ballotbox.

Engines are built on in-memory storage and an in-memory event sink, so no
test needs MongoDB or the filesystem unless it asks for ``tmp_path``.
"""

import pytest
from fastapi.testclient import TestClient

from ballotbox.crud import seed_owner_account
from ballotbox.dependencies import get_engine, get_event_sink, get_storage
from ballotbox.engine import ElectionEngine
from ballotbox.events import MemoryEventSink
from ballotbox.main import app
from ballotbox.models.election_model import WorkflowStatus
from ballotbox.security import create_access_token
from ballotbox.storage import MemoryStorage

OWNER = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
ADDR1 = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
ADDR2 = "0x3C44CdDdB6a900fa2b585dd299e03d12FA4293BC"
OWNER_PASSWORD = "owner-password"

TRANSITIONS = {
    WorkflowStatus.REGISTERING_VOTERS: "start_proposals_registration",
    WorkflowStatus.PROPOSALS_REGISTRATION_STARTED: "end_proposals_registration",
    WorkflowStatus.PROPOSALS_REGISTRATION_ENDED: "start_voting_session",
    WorkflowStatus.VOTING_SESSION_STARTED: "end_voting_session",
    WorkflowStatus.VOTING_SESSION_ENDED: "tally_votes",
}


def advance_to(engine, status):
    """Drive ``engine`` forward as the owner until it reaches ``status``."""
    while engine.workflow_status() < status:
        getattr(engine, TRANSITIONS[engine.workflow_status()])(OWNER)


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def events():
    return MemoryEventSink()


@pytest.fixture
def engine(storage, events):
    """A freshly created election owned by OWNER."""
    return ElectionEngine(storage, events, owner=OWNER)


@pytest.fixture
def voting_engine(engine):
    """Election with ADDR1 registered as a voter, still registering voters."""
    engine.add_voter(OWNER, ADDR1)
    return engine


@pytest.fixture
def client(storage, events, engine):
    seed_owner_account(storage, OWNER, OWNER_PASSWORD)
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_event_sink] = lambda: events
    app.dependency_overrides[get_engine] = lambda: engine
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def auth_headers(address):
    return {"Authorization": f"Bearer {create_access_token({'sub': address})}"}
