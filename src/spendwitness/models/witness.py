"""Spend witness model and its flat record form.

The record is what a spend circuit consumes: a flat mapping of
decimal strings keyed by `digest`, `nullifier`, `nonce`,
`sibling[i]` and `direction[i]` for i in [0, depth). Level 0 is the
level adjacent to the leaf.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from spendwitness.crypto.field import parse_field_element
from spendwitness.crypto.sparse_merkle import PathStep
from spendwitness.errors import InvalidFieldElement, MalformedWitness


@dataclass(frozen=True)
class Witness:
    """Membership witness for one coin.

    The record is immutable once constructed.
    """
    digest: int
    nullifier: int
    nonce: int
    path: tuple[PathStep, ...]

    @property
    def depth(self) -> int:
        return len(self.path)

    def to_record(self) -> dict[str, str]:
        """Return the flat key/value record, all values decimal strings."""
        record = {
            "digest": str(self.digest),
            "nullifier": str(self.nullifier),
            "nonce": str(self.nonce),
        }
        for i, step in enumerate(self.path):
            record[f"sibling[{i}]"] = str(step.sibling)
            record[f"direction[{i}]"] = "1" if step.direction else "0"
        return record

    @staticmethod
    def from_record(record: dict[str, Any]) -> Witness:
        """Parse a flat record back into a Witness.

        Depth is inferred from the sibling keys. Raises MalformedWitness
        if keys are missing, extra, or hold values of the wrong shape.
        """
        if not isinstance(record, dict):
            raise MalformedWitness("Witness record must be an object")

        depth = sum(1 for k in record if k.startswith("sibling["))
        expected = {"digest", "nullifier", "nonce"}
        expected.update(f"sibling[{i}]" for i in range(depth))
        expected.update(f"direction[{i}]" for i in range(depth))

        missing = sorted(expected - record.keys())
        if missing:
            raise MalformedWitness(f"Witness record missing keys: {', '.join(missing)}")
        extra = sorted(record.keys() - expected)
        if extra:
            raise MalformedWitness(f"Witness record has unexpected keys: {', '.join(extra)}")

        steps: list[PathStep] = []
        for i in range(depth):
            direction = record[f"direction[{i}]"]
            if direction not in ("0", "1"):
                raise MalformedWitness(f"direction[{i}] must be \"0\" or \"1\", got {direction!r}")
            steps.append(
                PathStep(
                    sibling=_field(record, f"sibling[{i}]"),
                    direction=direction == "1",
                )
            )

        return Witness(
            digest=_field(record, "digest"),
            nullifier=_field(record, "nullifier"),
            nonce=_field(record, "nonce"),
            path=tuple(steps),
        )


def _field(record: dict[str, Any], key: str) -> int:
    value = record[key]
    if not isinstance(value, str):
        raise MalformedWitness(f"{key} must be a decimal string")
    try:
        return parse_field_element(value)
    except InvalidFieldElement as exc:
        raise MalformedWitness(f"{key}: {exc}") from exc
