"""
Election engine: the workflow-gated state machine of a single election.

The election moves through six phases in a fixed order. The owner drives every
phase change and manages the voter whitelist; registered voters submit
proposals while proposal registration is open and cast one vote each while the
voting session is open. Tallying picks the proposal with the most votes, the
lowest proposal ID winning a tie.

Every operation checks all of its preconditions before writing anything, and
runs under the engine lock so concurrent requests are applied one at a time.
"""

import logging
import threading
from typing import List

from .errors import (
    AlreadyRegistered,
    AlreadyVoted,
    ElectionError,
    ElectionStateMissing,
    EmptyProposal,
    InvalidPhaseTransition,
    NotAVoter,
    PhaseNotOpen,
    ProposalNotFound,
    Unauthorized,
    VotingNotOpen,
)
from .events import ProposalRegistered, Voted, VoterRegistered, WorkflowStatusChange
from .models.election_model import Election, Proposal, Voter, WorkflowStatus

logger = logging.getLogger(__name__)

GENESIS_DESCRIPTION = "GENESIS"

# Message raised when a transition is attempted from the wrong phase, keyed by
# the phase the transition requires.
TRANSITION_ERRORS = {
    WorkflowStatus.REGISTERING_VOTERS: "Registering voters phase is not open anymore",
    WorkflowStatus.PROPOSALS_REGISTRATION_STARTED: "Registering proposals has not started yet",
    WorkflowStatus.PROPOSALS_REGISTRATION_ENDED: "Registering proposals phase is not finished",
    WorkflowStatus.VOTING_SESSION_STARTED: "Voting session has not started yet",
    WorkflowStatus.VOTING_SESSION_ENDED: "Voting session has not ended yet",
}


def find_winner(proposals: List[Proposal]) -> int:
    """
    Plurality winner of ``proposals``, scanned in ID order.

    Only a strictly greater count replaces the current best, so the first
    proposal to reach the maximum wins ties. With no proposals or no votes the
    result is 0.
    """
    if not proposals:
        return 0
    best_id, best_count = 0, proposals[0].vote_count
    for proposal_id, proposal in enumerate(proposals[1:], start=1):
        if proposal.vote_count > best_count:
            best_id, best_count = proposal_id, proposal.vote_count
    return best_id


class ElectionEngine:
    def __init__(self, storage, events, owner: str):
        self.storage = storage
        self.events = events
        self._lock = threading.RLock()

        election = storage.load_election()
        if election is None:
            election = Election(owner=owner)
            storage.save_election(election)
            logger.info(f"Created election owned by {owner}")
        elif election.owner != owner:
            logger.info(f"Election already owned by {election.owner}, ignoring configured owner {owner}")
        self.owner = election.owner

    # --- Access control ---
    def _only_owner(self, caller: str) -> None:
        if caller != self.owner:
            raise Unauthorized(f"Caller {caller} is not the owner")

    def _only_voters(self, caller: str) -> Voter:
        voter = self.storage.get_voter(caller)
        if voter is None or not voter.is_registered:
            raise NotAVoter()
        return voter

    def _election(self) -> Election:
        election = self.storage.load_election()
        if election is None:
            logger.error("Election record is missing from storage")
            raise ElectionStateMissing()
        return election

    # --- Getters ---
    def workflow_status(self) -> WorkflowStatus:
        return self._election().workflow_status

    def status(self) -> Election:
        return self._election()

    def winning_proposal_id(self) -> int:
        return self._election().winning_proposal_id

    def get_voter(self, caller: str, address: str) -> Voter:
        with self._lock:
            self._only_voters(caller)
            return self.storage.get_voter(address) or Voter()

    def get_one_proposal(self, caller: str, proposal_id: int) -> Proposal:
        with self._lock:
            self._only_voters(caller)
            proposal = self.storage.get_proposal(proposal_id)
            if proposal is None:
                raise ProposalNotFound()
            return proposal

    # --- Registration ---
    def add_voter(self, caller: str, address: str) -> Voter:
        with self._lock:
            try:
                self._only_owner(caller)
                existing = self.storage.get_voter(address)
                if existing is not None and existing.is_registered:
                    raise AlreadyRegistered()
                if self.workflow_status() != WorkflowStatus.REGISTERING_VOTERS:
                    raise PhaseNotOpen("Voters registration is not open yet")
            except ElectionError as e:
                logger.warning(f"add_voter({address}) by {caller} rejected: {e.kind}: {e.message}")
                raise

            voter = Voter(is_registered=True)
            self.storage.save_voter(address, voter)
            self.events.emit(VoterRegistered(voter_address=address))
            logger.info(f"Voter registered: {address}")
            return voter

    # --- Proposal ---
    def add_proposal(self, caller: str, description: str) -> int:
        with self._lock:
            try:
                self._only_voters(caller)
                if self.workflow_status() != WorkflowStatus.PROPOSALS_REGISTRATION_STARTED:
                    raise PhaseNotOpen("Proposals are not allowed yet")
                if not description or not description.strip():
                    raise EmptyProposal()
            except ElectionError as e:
                logger.warning(f"add_proposal by {caller} rejected: {e.kind}: {e.message}")
                raise

            proposal_id = self.storage.append_proposal(Proposal(description=description))
            self.events.emit(ProposalRegistered(proposal_id=proposal_id))
            logger.info(f"Proposal {proposal_id} registered by {caller}")
            return proposal_id

    # --- Vote ---
    def set_vote(self, caller: str, proposal_id: int) -> Voter:
        with self._lock:
            try:
                voter = self._only_voters(caller)
                if self.workflow_status() != WorkflowStatus.VOTING_SESSION_STARTED:
                    raise VotingNotOpen()
                if voter.has_voted:
                    raise AlreadyVoted()
                if not 0 <= proposal_id < self.storage.proposal_count():
                    raise ProposalNotFound()
            except ElectionError as e:
                logger.warning(f"set_vote({proposal_id}) by {caller} rejected: {e.kind}: {e.message}")
                raise

            voter.has_voted = True
            voter.voted_proposal_id = proposal_id
            self.storage.record_vote(caller, voter, proposal_id)
            self.events.emit(Voted(voter=caller, proposal_id=proposal_id))
            logger.info(f"Vote cast by {caller} for proposal {proposal_id}")
            return voter

    # --- State ---
    def _advance(self, caller: str, required: WorkflowStatus) -> Election:
        """Check that ``caller`` may move the election from ``required`` to the next phase."""
        try:
            self._only_owner(caller)
            election = self._election()
            if election.workflow_status != required:
                raise InvalidPhaseTransition(TRANSITION_ERRORS[required])
        except ElectionError as e:
            logger.warning(f"Transition from {required.label} by {caller} rejected: {e.kind}: {e.message}")
            raise
        return election

    def _commit_transition(self, election: Election) -> None:
        previous = election.workflow_status
        election.workflow_status = WorkflowStatus(previous + 1)
        self.storage.save_election(election)
        self.events.emit(WorkflowStatusChange(previous_status=previous, new_status=election.workflow_status))
        logger.info(f"Workflow status changed: {previous.label} -> {election.workflow_status.label}")

    def start_proposals_registration(self, caller: str) -> WorkflowStatus:
        with self._lock:
            election = self._advance(caller, WorkflowStatus.REGISTERING_VOTERS)
            self.storage.append_proposal(Proposal(description=GENESIS_DESCRIPTION))
            self._commit_transition(election)
            return election.workflow_status

    def end_proposals_registration(self, caller: str) -> WorkflowStatus:
        with self._lock:
            election = self._advance(caller, WorkflowStatus.PROPOSALS_REGISTRATION_STARTED)
            self._commit_transition(election)
            return election.workflow_status

    def start_voting_session(self, caller: str) -> WorkflowStatus:
        with self._lock:
            election = self._advance(caller, WorkflowStatus.PROPOSALS_REGISTRATION_ENDED)
            self._commit_transition(election)
            return election.workflow_status

    def end_voting_session(self, caller: str) -> WorkflowStatus:
        with self._lock:
            election = self._advance(caller, WorkflowStatus.VOTING_SESSION_STARTED)
            self._commit_transition(election)
            return election.workflow_status

    def tally_votes(self, caller: str) -> int:
        with self._lock:
            election = self._advance(caller, WorkflowStatus.VOTING_SESSION_ENDED)
            election.winning_proposal_id = find_winner(self.storage.list_proposals())
            self._commit_transition(election)
            logger.info(f"Votes tallied, winning proposal: {election.winning_proposal_id}")
            return election.winning_proposal_id
