"""Witness engine — transcript replay, assembly and verification."""

from spendwitness.engine.replayer import ReplayResult, commitment_of, replay
from spendwitness.engine.assembler import assemble_witness, compute_witness, verify_witness

__all__ = [
    "ReplayResult",
    "commitment_of",
    "replay",
    "assemble_witness",
    "compute_witness",
    "verify_witness",
]
