"""Cryptographic primitives — field hash and sparse Merkle accumulator."""

from spendwitness.crypto.field import FIELD_MODULUS, field_hash2
from spendwitness.crypto.sparse_merkle import PathStep, SparseMerkleTree, root_from_path

__all__ = ["FIELD_MODULUS", "field_hash2", "PathStep", "SparseMerkleTree", "root_from_path"]
