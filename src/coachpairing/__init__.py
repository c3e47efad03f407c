"""Coach Pairing: pair coaches and coachees across repeated sessions."""

from coachpairing.pairing import PairingEngine, PairingStats, canonical_key, compute_stats
from coachpairing.participant import Participant
from coachpairing.program import CoachingProgram
from coachpairing.session import PairingRecord, PairingResult, SessionHistoryEntry
from coachpairing.storage import DataStorage

__version__ = "0.1.0"

__all__ = [
    "CoachingProgram",
    "DataStorage",
    "PairingEngine",
    "PairingRecord",
    "PairingResult",
    "PairingStats",
    "Participant",
    "SessionHistoryEntry",
    "canonical_key",
    "compute_stats",
]
