# ballotbox/storage_mongo.py
import logging
from typing import Any, Dict, List, Optional

from pymongo import ASCENDING, MongoClient, ReturnDocument
from pymongo.errors import DuplicateKeyError

from .config import (
    ACCOUNTS_COLLECTION_NAME,
    COUNTERS_COLLECTION_NAME,
    ELECTIONS_COLLECTION_NAME,
    PROPOSALS_COLLECTION_NAME,
    VOTERS_COLLECTION_NAME,
)
from .models.election_model import Election, Proposal, Voter

logger = logging.getLogger(__name__)

ELECTION_DOCUMENT_ID = "election"
PROPOSALS_SEQUENCE = "proposals"


def next_sequence(counters, name: str) -> int:
    """Atomically reserve the next zero-based id of the `name` sequence."""
    doc = counters.find_one_and_update(
        {"_id": name},
        {"$inc": {"seq": 1}},
        upsert=True,
        return_document=ReturnDocument.AFTER,
    )
    return doc["seq"] - 1


class MongoStorage:
    def __init__(self, mongo_uri: str, db_name: str):
        """Initialize MongoDB connection"""
        try:
            self.client = MongoClient(mongo_uri)
            self.db = self.client[db_name]
            self.elections = self.db[ELECTIONS_COLLECTION_NAME]
            self.voters = self.db[VOTERS_COLLECTION_NAME]
            self.proposals = self.db[PROPOSALS_COLLECTION_NAME]
            self.accounts = self.db[ACCOUNTS_COLLECTION_NAME]
            self.counters = self.db[COUNTERS_COLLECTION_NAME]

            # Test connection
            self.client.server_info()
            logger.info(f"Connected to MongoDB, database: {db_name}")
        except Exception as e:
            logger.error(f"Failed to connect to MongoDB: {e}")
            raise

    # --- Election ---
    def load_election(self) -> Optional[Election]:
        doc = self.elections.find_one({"_id": ELECTION_DOCUMENT_ID}, {"_id": 0})
        return Election.model_validate(doc) if doc else None

    def save_election(self, election: Election) -> None:
        self.elections.replace_one(
            {"_id": ELECTION_DOCUMENT_ID},
            election.model_dump(mode="json"),
            upsert=True,
        )

    # --- Voters ---
    def get_voter(self, address: str) -> Optional[Voter]:
        doc = self.voters.find_one({"_id": address}, {"_id": 0})
        return Voter.model_validate(doc) if doc else None

    def save_voter(self, address: str, voter: Voter) -> None:
        self.voters.replace_one({"_id": address}, voter.model_dump(), upsert=True)

    # --- Proposals ---
    def proposal_count(self) -> int:
        return self.proposals.count_documents({})

    def get_proposal(self, proposal_id: int) -> Optional[Proposal]:
        doc = self.proposals.find_one({"_id": proposal_id}, {"_id": 0})
        return Proposal.model_validate(doc) if doc else None

    def list_proposals(self) -> List[Proposal]:
        cursor = self.proposals.find({}, {"_id": 0}).sort("_id", ASCENDING)
        return [Proposal.model_validate(doc) for doc in cursor]

    def append_proposal(self, proposal: Proposal) -> int:
        proposal_id = next_sequence(self.counters, PROPOSALS_SEQUENCE)
        document = proposal.model_dump()
        document["_id"] = proposal_id
        self.proposals.insert_one(document)
        return proposal_id

    def record_vote(self, address: str, voter: Voter, proposal_id: int) -> None:
        self.proposals.update_one({"_id": proposal_id}, {"$inc": {"vote_count": 1}})
        self.voters.replace_one({"_id": address}, voter.model_dump(), upsert=True)

    # --- Accounts ---
    def get_account(self, address: str) -> Optional[Dict[str, Any]]:
        return self.accounts.find_one({"_id": address}, {"_id": 0})

    def save_account(self, account: Dict[str, Any]) -> bool:
        document = dict(account)
        document["_id"] = account["address"]
        try:
            result = self.accounts.insert_one(document)
            logger.info(f"Account {account['address']} saved successfully")
            return result.acknowledged
        except DuplicateKeyError:
            logger.warning(f"Account {account['address']} already exists")
            return False

    def update_account(self, address: str, update_data: Dict[str, Any]) -> bool:
        result = self.accounts.update_one({"_id": address}, {"$set": update_data})
        return result.modified_count > 0

    def list_accounts(self) -> List[Dict[str, Any]]:
        return list(self.accounts.find({}, {"_id": 0}))

    def close(self):
        """Close MongoDB connection"""
        self.client.close()
        logger.info("MongoDB connection closed")
