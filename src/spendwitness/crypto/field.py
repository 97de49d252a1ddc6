"""Field arithmetic helpers and the two-input field hash.

All values handled by the accumulator are elements of the BN254 scalar
field. The hash oracle maps two field elements to one. The same oracle
derives coin commitments from (nullifier, nonce) and combines child
nodes in the tree; there is no domain separation between the two uses,
and circuits consuming these witnesses depend on that.
"""

from __future__ import annotations

import hashlib
from typing import Callable

from spendwitness.errors import InvalidFieldElement


# BN254 scalar field modulus
FIELD_MODULUS = 21888242871839275222246405745257275088548364400416034343698204186575808495617

HashOracle = Callable[[int, int], int]


def parse_field_element(text: str) -> int:
    """Parse a decimal string into a field element.

    Raises InvalidFieldElement for anything that is not a plain
    non-negative decimal integer below FIELD_MODULUS.
    """
    token = text.strip()
    if not token.isdecimal() or not token.isascii():
        raise InvalidFieldElement(f"Not a decimal field element: {text!r}")
    value = int(token)
    check_field_element(value)
    return value


def check_field_element(value: int) -> int:
    """Return value unchanged if it lies in [0, FIELD_MODULUS)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidFieldElement(f"Field element must be an int, got {type(value).__name__}")
    if value < 0 or value >= FIELD_MODULUS:
        raise InvalidFieldElement(f"Value outside the scalar field: {value}")
    return value


def field_hash2(left: int, right: int) -> int:
    """Hash two field elements into one.

    SHA-256 over fixed-width 32-byte big-endian encodings, reduced
    modulo FIELD_MODULUS. Deterministic across runs and platforms.
    """
    h = hashlib.sha256()
    for v in (check_field_element(left), check_field_element(right)):
        h.update(v.to_bytes(32, byteorder="big", signed=False))
    return int.from_bytes(h.digest(), byteorder="big") % FIELD_MODULUS
