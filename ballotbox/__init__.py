from .engine import ElectionEngine, find_winner
from .errors import ElectionError
from .models.election_model import WorkflowStatus

__version__ = "0.1.0"

__all__ = ["ElectionEngine", "ElectionError", "WorkflowStatus", "find_winner"]
