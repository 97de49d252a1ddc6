"""Witness file I/O.

The witness is written as a single line of compact JSON followed by a
newline. The file is only written once the witness is complete, so a
failed run never leaves a partial record behind.
"""

from __future__ import annotations

import json
from pathlib import Path

from spendwitness.errors import MalformedWitness
from spendwitness.models.witness import Witness


def write_witness(witness: Witness, path: Path) -> None:
    record = witness.to_record()
    with path.open("w", encoding="utf-8") as f:
        f.write(json.dumps(record, separators=(",", ":")) + "\n")


def read_witness(path: Path) -> Witness:
    """Load a witness file. Raises MalformedWitness on bad JSON or shape."""
    with path.open("r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            raise MalformedWitness(f"{path}: invalid JSON ({exc.msg})") from exc
    return Witness.from_record(data)
