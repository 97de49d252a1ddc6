"""Coin record model.

A transcript line describes one issued coin. It is either the bare
commitment, or the (nullifier, nonce) pair the commitment is derived
from. Arity is checked again when the commitment is computed, so
records built in memory get the same validation as transcript lines.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CoinRecord:
    """One coin from the transcript, in source order."""
    fields: tuple[int, ...]
    line: Optional[int] = None  # 1-based source line, when read from a file

    @property
    def arity(self) -> int:
        return len(self.fields)

    def location(self) -> str:
        return f"line {self.line}" if self.line is not None else "record"

    @staticmethod
    def bare(commitment: int) -> CoinRecord:
        return CoinRecord(fields=(commitment,))

    @staticmethod
    def opened(nullifier: int, nonce: int) -> CoinRecord:
        return CoinRecord(fields=(nullifier, nonce))
