"""Sparse Merkle tree over the scalar field.

The tree has a fixed depth D and a conceptual leaf domain of 2^D
addresses. Only nodes along inserted paths are stored; every untouched
subtree at level i hashes to a shared precomputed empty value.

Addressing and orientation:
- A value's leaf address is its low D bits (value mod 2^D).
- Level 0 is the leaf level, level D is the root.
- In a path step, direction True means the sibling is on the LEFT
  (the path node is a right child); False means the sibling is on the
  right.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from spendwitness.crypto.field import HashOracle, check_field_element, field_hash2
from spendwitness.errors import LeafMismatch

logger = logging.getLogger(__name__)

EMPTY_LEAF = 0


@dataclass(frozen=True)
class PathStep:
    """One level of a membership path."""
    sibling: int
    direction: bool  # True: sibling is the left child


class SparseMerkleTree:
    """Append-only sparse Merkle tree.

    Usage:
        tree = SparseMerkleTree(depth=20)
        tree.insert(commitment)
        root = tree.digest
        path = tree.path(commitment)
    """

    def __init__(self, depth: int, hash2: HashOracle = field_hash2) -> None:
        if depth < 0:
            raise ValueError(f"Tree depth must be non-negative, got {depth}")
        self._depth = depth
        self._hash2 = hash2
        self._empties = _empty_hashes(depth, hash2)
        self._nodes: dict[tuple[int, int], int] = {}
        self._digest = self._empties[depth]

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def hash2(self) -> HashOracle:
        return self._hash2

    @property
    def digest(self) -> int:
        """Current root hash."""
        return self._digest

    @property
    def leaf_count(self) -> int:
        """Number of occupied leaf addresses."""
        return sum(1 for level, _ in self._nodes if level == 0)

    def empty_hash(self, level: int) -> int:
        """Hash of an untouched subtree whose root sits at level."""
        return self._empties[level]

    def address_of(self, value: int) -> int:
        return value & ((1 << self._depth) - 1)

    def insert(self, value: int) -> None:
        """Store value at its leaf address and rehash the path to the root."""
        check_field_element(value)
        index = self.address_of(value)

        current = self._nodes.get((0, index))
        if current == value:
            return
        if current is not None:
            logger.warning(
                "Leaf %d overwritten: %d replaced by %d", index, current, value
            )

        self._nodes[(0, index)] = value
        node = value
        for level in range(self._depth):
            sibling = self._node(level, index ^ 1)
            if index & 1:
                node = self._hash2(sibling, node)
            else:
                node = self._hash2(node, sibling)
            index >>= 1
            self._nodes[(level + 1, index)] = node

        self._digest = node
        logger.debug("Inserted %d, digest now %d", value, node)

    def path(self, value: int) -> list[PathStep]:
        """Return the membership path for value, leaf level first.

        Raises LeafMismatch if value is not the leaf stored at its address.
        """
        index = self.address_of(value)
        stored = self._nodes.get((0, index))
        if stored is None:
            raise LeafMismatch(f"Leaf {index} is empty; {value} is not a member")
        if stored != value:
            raise LeafMismatch(
                f"Leaf {index} holds {stored}; {value} is not a member"
            )

        steps: list[PathStep] = []
        for level in range(self._depth):
            steps.append(
                PathStep(sibling=self._node(level, index ^ 1), direction=bool(index & 1))
            )
            index >>= 1
        return steps

    def __contains__(self, value: object) -> bool:
        if not isinstance(value, int):
            return False
        return self._nodes.get((0, self.address_of(value))) == value

    def _node(self, level: int, index: int) -> int:
        return self._nodes.get((level, index), self._empties[level])


def root_from_path(leaf: int, path: list[PathStep], hash2: HashOracle = field_hash2) -> int:
    """Recombine a leaf with its membership path bottom-up."""
    node = leaf
    for step in path:
        if step.direction:
            node = hash2(step.sibling, node)
        else:
            node = hash2(node, step.sibling)
    return node


def _empty_hashes(depth: int, hash2: HashOracle) -> list[int]:
    """h_0 = EMPTY_LEAF, h_{i+1} = hash2(h_i, h_i)."""
    empties = [EMPTY_LEAF]
    for _ in range(depth):
        empties.append(hash2(empties[-1], empties[-1]))
    return empties
