"""Pairing statistics and the pairing engine."""

from coachpairing.pairing.engine import PairingEngine
from coachpairing.pairing.stats import PairingStats, canonical_key, coach_count, compute_stats

__all__ = ["PairingEngine", "PairingStats", "canonical_key", "coach_count", "compute_stats"]
