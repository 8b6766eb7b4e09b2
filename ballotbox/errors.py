"""
Failures raised by the election engine.

Every error is raised before the engine writes anything, so a caught
``ElectionError`` means the election state is exactly as it was before the
call. ``StorageError`` subclasses report a store that cannot be read; the
engine never writes over such a store. The API layer turns these into JSON
responses using ``kind`` and ``status_code``.
"""


class ElectionError(Exception):
    kind = "ElectionError"
    status_code = 400
    default_message = "Election operation failed"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.kind, "detail": self.message}


class Unauthorized(ElectionError):
    kind = "Unauthorized"
    status_code = 403
    default_message = "Caller is not the owner"


class NotAVoter(ElectionError):
    kind = "NotAVoter"
    status_code = 403
    default_message = "You're not a voter"


class PhaseNotOpen(ElectionError):
    kind = "PhaseNotOpen"
    status_code = 409
    default_message = "Operation is not allowed in the current phase"


class VotingNotOpen(PhaseNotOpen):
    kind = "VotingNotOpen"
    default_message = "Voting session has not started yet"


class InvalidPhaseTransition(ElectionError):
    kind = "InvalidPhaseTransition"
    status_code = 409
    default_message = "Invalid workflow status transition"


class AlreadyRegistered(ElectionError):
    kind = "AlreadyRegistered"
    status_code = 409
    default_message = "Already registered"


class EmptyProposal(ElectionError):
    kind = "EmptyProposal"
    status_code = 422
    default_message = "Proposal description cannot be empty"


class AlreadyVoted(ElectionError):
    kind = "AlreadyVoted"
    status_code = 409
    default_message = "You have already voted"


class ProposalNotFound(ElectionError):
    kind = "ProposalNotFound"
    status_code = 404
    default_message = "Proposal not found"


class StorageError(ElectionError):
    kind = "StorageError"
    status_code = 503
    default_message = "Election storage is unavailable"


class StorageCorrupted(StorageError):
    kind = "StorageCorrupted"
    default_message = "Election storage is corrupted"


class ElectionStateMissing(StorageError):
    kind = "ElectionStateMissing"
    default_message = "Election record is missing from storage"
