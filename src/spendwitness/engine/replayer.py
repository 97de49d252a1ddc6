"""Transcript replay — rebuilds the accumulator and finds the coin to spend.

Records are replayed strictly in transcript order. Every commitment is
inserted, whether or not it belongs to the target, because the final
digest depends on the full ordered insertion sequence.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from spendwitness.crypto.field import HashOracle, check_field_element, field_hash2
from spendwitness.crypto.sparse_merkle import SparseMerkleTree
from spendwitness.errors import (
    DuplicateTargetMatch,
    InvalidRecordArity,
    NullifierNotFound,
)
from spendwitness.models.coin import CoinRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReplayResult:
    """Outcome of a replay: final digest plus the captured coin."""
    digest: int
    commitment: int
    nonce: int
    tree: SparseMerkleTree


def commitment_of(record: CoinRecord, hash2: HashOracle = field_hash2) -> int:
    """Return the commitment a record contributes to the accumulator."""
    if record.arity == 1:
        return check_field_element(record.fields[0])
    if record.arity == 2:
        nullifier, nonce = record.fields
        return hash2(nullifier, nonce)
    raise InvalidRecordArity(
        f"{record.location()}: expected 1 or 2 fields, got {record.arity}"
    )


def replay(
    transcript: Iterable[CoinRecord],
    target_nullifier: int,
    tree: SparseMerkleTree,
) -> ReplayResult:
    """Insert every transcript commitment into tree, capturing the target.

    The tree is owned by the caller and is returned in the result.

    Raises:
        InvalidRecordArity: a record has neither one nor two fields.
        DuplicateTargetMatch: the target nullifier appears twice.
        NullifierNotFound: no record carries the target nullifier.
    """
    hash2 = tree.hash2
    captured: Optional[tuple[int, int]] = None
    count = 0

    for record in transcript:
        commitment = commitment_of(record, hash2)

        if record.arity == 2 and record.fields[0] == target_nullifier:
            if captured is not None:
                raise DuplicateTargetMatch(
                    f"{record.location()}: nullifier {target_nullifier} "
                    "already matched an earlier record"
                )
            captured = (commitment, record.fields[1])
            logger.debug("Captured target at %s", record.location())

        tree.insert(commitment)
        count += 1

    if captured is None:
        raise NullifierNotFound(
            f"Nullifier {target_nullifier} not found in {count} transcript records"
        )

    logger.info("Replayed %d records, digest %d", count, tree.digest)
    commitment, nonce = captured
    return ReplayResult(digest=tree.digest, commitment=commitment, nonce=nonce, tree=tree)
