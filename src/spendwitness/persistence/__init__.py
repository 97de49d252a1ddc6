"""File boundary — transcript reading and witness serialization."""

from spendwitness.persistence.transcript import load_transcript, parse_transcript
from spendwitness.persistence.witness_file import read_witness, write_witness

__all__ = ["load_transcript", "parse_transcript", "read_witness", "write_witness"]
