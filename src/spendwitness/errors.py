"""Error taxonomy for witness computation.

Every failure is fatal: the run aborts and no witness is written.
Each error kind maps to its own process exit code so callers can
tell failures apart without parsing messages.
"""

from __future__ import annotations


class WitnessError(Exception):
    """Base class for all kind-tagged witness failures."""
    kind = "witness_error"
    exit_code = 1


class UsageError(WitnessError):
    """Raised when command-line arguments or defaults are unusable."""
    kind = "usage"
    exit_code = 2


class InvalidRecordArity(WitnessError):
    """Raised when a transcript record has neither one nor two fields."""
    kind = "invalid_record_arity"
    exit_code = 3


class DuplicateTargetMatch(WitnessError):
    """Raised when the target nullifier appears more than once."""
    kind = "duplicate_target_match"
    exit_code = 4


class NullifierNotFound(WitnessError):
    """Raised when replay completes without matching the target nullifier."""
    kind = "nullifier_not_found"
    exit_code = 5


class LeafMismatch(WitnessError):
    """Raised when a path is requested for a value that is not a member."""
    kind = "leaf_mismatch"
    exit_code = 6


class InvalidFieldElement(WitnessError):
    """Raised when a value is not a decimal element of the scalar field."""
    kind = "invalid_field_element"
    exit_code = 7


class MalformedWitness(WitnessError):
    """Raised when a serialized witness record cannot be parsed."""
    kind = "malformed_witness"
    exit_code = 8


class WitnessVerificationFailed(WitnessError):
    """Raised when a witness does not recombine to its digest."""
    kind = "witness_verification_failed"
    exit_code = 9


class InvalidTranscript(WitnessError):
    """Raised when a transcript file cannot be decoded."""
    kind = "invalid_transcript"
    exit_code = 10
