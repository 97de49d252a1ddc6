"""Witness assembly and offline verification."""

from __future__ import annotations

import logging
from typing import Iterable

from spendwitness.crypto.field import HashOracle, field_hash2
from spendwitness.crypto.sparse_merkle import PathStep, SparseMerkleTree, root_from_path
from spendwitness.engine.replayer import replay
from spendwitness.errors import WitnessVerificationFailed
from spendwitness.models.coin import CoinRecord
from spendwitness.models.witness import Witness

logger = logging.getLogger(__name__)


def assemble_witness(
    digest: int,
    nullifier: int,
    nonce: int,
    path: Iterable[PathStep],
) -> Witness:
    """Combine replay output and the membership path into a Witness."""
    return Witness(digest=digest, nullifier=nullifier, nonce=nonce, path=tuple(path))


def compute_witness(
    depth: int,
    transcript: Iterable[CoinRecord],
    nullifier: int,
    hash2: HashOracle = field_hash2,
) -> Witness:
    """Replay transcript into a fresh tree of the given depth and build
    the witness for the coin carrying nullifier.

    Usage:
        witness = compute_witness(20, records, nullifier=7)
        record = witness.to_record()
    """
    result = replay(transcript, nullifier, SparseMerkleTree(depth, hash2))
    path = result.tree.path(result.commitment)
    return assemble_witness(result.digest, nullifier, result.nonce, path)


def verify_witness(witness: Witness, hash2: HashOracle = field_hash2) -> int:
    """Check that the witness recombines to its digest.

    Recomputes the commitment from (nullifier, nonce), folds it with the
    path bottom-up and returns the digest. Raises WitnessVerificationFailed
    on mismatch.
    """
    commitment = hash2(witness.nullifier, witness.nonce)
    root = root_from_path(commitment, list(witness.path), hash2)
    if root != witness.digest:
        raise WitnessVerificationFailed(
            f"Path recombines to {root}, expected digest {witness.digest}"
        )
    logger.debug("Witness for nullifier %d verified at depth %d", witness.nullifier, witness.depth)
    return root
