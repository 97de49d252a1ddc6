"""Transcript reader — the canonical record of every issued coin.

One coin per line. A line holds either the commitment itself or two
whitespace-separated values, the nullifier and the nonce. Blank lines
are skipped. Example:

    1839475893
    1984375234 2983475298
    3489725451 9834572345
    3452345234
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator

from spendwitness.crypto.field import parse_field_element
from spendwitness.errors import InvalidFieldElement, InvalidRecordArity, InvalidTranscript
from spendwitness.models.coin import CoinRecord


def parse_transcript(lines: Iterable[str]) -> Iterator[CoinRecord]:
    """Yield coin records in order.

    Arity is checked before the values are parsed, so a line with the
    wrong number of fields is reported as such even if a field is also
    malformed.
    """
    for line_num, line in enumerate(lines, 1):
        tokens = line.split()
        if not tokens:
            continue
        if len(tokens) not in (1, 2):
            raise InvalidRecordArity(
                f"line {line_num}: expected 1 or 2 fields, got {len(tokens)}"
            )
        try:
            fields = tuple(parse_field_element(t) for t in tokens)
        except InvalidFieldElement as exc:
            raise InvalidFieldElement(f"line {line_num}: {exc}") from exc
        yield CoinRecord(fields=fields, line=line_num)


def load_transcript(path: Path) -> list[CoinRecord]:
    """Read and parse a transcript file.

    Raises InvalidTranscript if a line is not valid UTF-8.
    """
    return list(parse_transcript(_decode_lines(path.read_bytes())))


def _decode_lines(data: bytes) -> Iterator[str]:
    for line_num, raw in enumerate(data.splitlines(), 1):
        try:
            yield raw.decode("utf-8")
        except UnicodeDecodeError:
            raise InvalidTranscript(f"line {line_num}: not valid UTF-8") from None
