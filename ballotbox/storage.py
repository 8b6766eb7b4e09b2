# ballotbox/storage.py
import json
import logging
import os
import tempfile
from typing import Any, Dict, List, Optional

from .errors import StorageCorrupted
from .models.election_model import Election, Proposal, Voter

logger = logging.getLogger(__name__)


def _empty_db() -> Dict[str, Any]:
    return {"election": None, "voters": {}, "proposals": [], "accounts": {}}


class MemoryStorage:
    """
    Keeps the election in process memory. Everything is lost on restart,
    which is what the tests want.
    """

    def __init__(self):
        self._election: Optional[Election] = None
        self._voters: Dict[str, Voter] = {}
        self._proposals: List[Proposal] = []
        self._accounts: Dict[str, Dict[str, Any]] = {}

    # --- Election ---
    def load_election(self) -> Optional[Election]:
        return self._election.model_copy() if self._election else None

    def save_election(self, election: Election) -> None:
        self._election = election.model_copy()

    # --- Voters ---
    def get_voter(self, address: str) -> Optional[Voter]:
        voter = self._voters.get(address)
        return voter.model_copy() if voter else None

    def save_voter(self, address: str, voter: Voter) -> None:
        self._voters[address] = voter.model_copy()

    # --- Proposals ---
    def proposal_count(self) -> int:
        return len(self._proposals)

    def get_proposal(self, proposal_id: int) -> Optional[Proposal]:
        if 0 <= proposal_id < len(self._proposals):
            return self._proposals[proposal_id].model_copy()
        return None

    def list_proposals(self) -> List[Proposal]:
        return [p.model_copy() for p in self._proposals]

    def append_proposal(self, proposal: Proposal) -> int:
        self._proposals.append(proposal.model_copy())
        return len(self._proposals) - 1

    def record_vote(self, address: str, voter: Voter, proposal_id: int) -> None:
        self._proposals[proposal_id].vote_count += 1
        self._voters[address] = voter.model_copy()

    # --- Accounts ---
    def get_account(self, address: str) -> Optional[Dict[str, Any]]:
        account = self._accounts.get(address)
        return dict(account) if account else None

    def save_account(self, account: Dict[str, Any]) -> bool:
        if account["address"] in self._accounts:
            return False
        self._accounts[account["address"]] = dict(account)
        return True

    def update_account(self, address: str, update_data: Dict[str, Any]) -> bool:
        if address not in self._accounts:
            return False
        self._accounts[address].update(update_data)
        return True

    def list_accounts(self) -> List[Dict[str, Any]]:
        return [dict(a) for a in self._accounts.values()]


class JsonFileStorage:
    """
    Stores the whole election in one JSON file. Each mutation is a single
    file write, so the records touched by one operation are written together.
    """

    def __init__(self, path: str):
        self.path = path
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        if not os.path.exists(path):
            self._write_db(_empty_db())
        logger.info(f"Using JSON storage at {path}")

    def _read_db(self) -> Dict[str, Any]:
        """
        Read the DB file safely.
        A missing or empty file is reset to an empty election. A file that
        holds unreadable data is left untouched and raises StorageCorrupted.
        """
        try:
            with open(self.path, "r") as f:
                content = f.read()
        except FileNotFoundError:
            content = ""

        if not content.strip():
            logger.warning(f"Storage file {self.path} missing or empty, resetting")
            reset_data = _empty_db()
            self._write_db(reset_data)
            return reset_data

        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            logger.error(f"Storage file {self.path} is corrupted: {e}")
            raise StorageCorrupted(f"Storage file {self.path} is corrupted: {e}")

    def _write_db(self, data: Dict[str, Any]) -> None:
        # Write a sibling temp file and swap it in, so a crash never leaves a half-written DB.
        directory = os.path.dirname(os.path.abspath(self.path))
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".ballotbox-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w") as f:
                json.dump(data, f, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    # --- Election ---
    def load_election(self) -> Optional[Election]:
        data = self._read_db().get("election")
        return Election.model_validate(data) if data else None

    def save_election(self, election: Election) -> None:
        db = self._read_db()
        db["election"] = election.model_dump(mode="json")
        self._write_db(db)

    # --- Voters ---
    def get_voter(self, address: str) -> Optional[Voter]:
        data = self._read_db()["voters"].get(address)
        return Voter.model_validate(data) if data else None

    def save_voter(self, address: str, voter: Voter) -> None:
        db = self._read_db()
        db["voters"][address] = voter.model_dump()
        self._write_db(db)

    # --- Proposals ---
    def proposal_count(self) -> int:
        return len(self._read_db()["proposals"])

    def get_proposal(self, proposal_id: int) -> Optional[Proposal]:
        proposals = self._read_db()["proposals"]
        if 0 <= proposal_id < len(proposals):
            return Proposal.model_validate(proposals[proposal_id])
        return None

    def list_proposals(self) -> List[Proposal]:
        return [Proposal.model_validate(p) for p in self._read_db()["proposals"]]

    def append_proposal(self, proposal: Proposal) -> int:
        db = self._read_db()
        db["proposals"].append(proposal.model_dump())
        self._write_db(db)
        return len(db["proposals"]) - 1

    def record_vote(self, address: str, voter: Voter, proposal_id: int) -> None:
        db = self._read_db()
        db["proposals"][proposal_id]["vote_count"] += 1
        db["voters"][address] = voter.model_dump()
        self._write_db(db)

    # --- Accounts ---
    def get_account(self, address: str) -> Optional[Dict[str, Any]]:
        return self._read_db()["accounts"].get(address)

    def save_account(self, account: Dict[str, Any]) -> bool:
        db = self._read_db()
        if account["address"] in db["accounts"]:
            logger.warning(f"Account {account['address']} already exists.")
            return False
        db["accounts"][account["address"]] = account
        self._write_db(db)
        return True

    def update_account(self, address: str, update_data: Dict[str, Any]) -> bool:
        db = self._read_db()
        if address not in db["accounts"]:
            return False
        db["accounts"][address].update(update_data)
        self._write_db(db)
        return True

    def list_accounts(self) -> List[Dict[str, Any]]:
        return list(self._read_db()["accounts"].values())
