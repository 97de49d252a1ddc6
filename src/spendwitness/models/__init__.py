"""Core data models for spend witness computation."""

from spendwitness.models.coin import CoinRecord
from spendwitness.models.witness import Witness

__all__ = ["CoinRecord", "Witness"]
