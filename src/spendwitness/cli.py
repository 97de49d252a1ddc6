"""spendwitness CLI — compute and check spend-circuit witnesses.

Usage:
    python -m spendwitness.cli witness 20 transcript.txt 1984375234
    python -m spendwitness.cli witness 20 transcript.txt 1984375234 -o witness.json
    python -m spendwitness.cli verify witness.json

Exit codes: 0 on success, 1 on I/O failure, 2 on usage errors, and a
distinct code per witness error kind (see spendwitness.errors).
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from spendwitness.config import Settings, load_settings, parse_depth
from spendwitness.crypto.field import parse_field_element
from spendwitness.engine.assembler import compute_witness, verify_witness
from spendwitness.errors import UsageError, WitnessError
from spendwitness.persistence.transcript import load_transcript
from spendwitness.persistence.witness_file import read_witness, write_witness

logger = logging.getLogger(__name__)

EXIT_IO_ERROR = 1
EXIT_USAGE = 2


def cmd_witness(args: argparse.Namespace, settings: Settings) -> int:
    if args.depth == "-":
        if settings.depth is None:
            raise UsageError("Depth given as '-' but SPENDWITNESS_DEPTH is not set")
        depth = settings.depth
    else:
        try:
            depth = parse_depth(args.depth)
        except ValueError as exc:
            raise UsageError(str(exc)) from exc

    nullifier = parse_field_element(args.nullifier)
    output = args.output if args.output is not None else settings.output

    transcript = load_transcript(args.transcript)
    logger.info("Loaded %d records from %s", len(transcript), args.transcript)

    witness = compute_witness(depth, transcript, nullifier)
    write_witness(witness, output)
    print(f"Wrote witness for nullifier {nullifier} to {output}")
    return 0


def cmd_verify(args: argparse.Namespace, settings: Settings) -> int:
    witness = read_witness(args.witness)
    digest = verify_witness(witness)
    print(f"OK {digest}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spendwitness",
        description="Compute membership witnesses for a coin spend circuit",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (default: SPENDWITNESS_LOG_LEVEL or WARNING)",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        help="Path to a .env file (default: ./.env)",
    )
    sub = parser.add_subparsers(dest="command")

    # witness
    p_wit = sub.add_parser("witness", help="Replay a transcript and write a spend witness")
    p_wit.add_argument(
        "depth",
        help="Number of non-root layers in the tree ('-' uses SPENDWITNESS_DEPTH)",
    )
    p_wit.add_argument("transcript", type=Path, help="Transcript file, one coin per line")
    p_wit.add_argument("nullifier", help="Nullifier of the coin to spend (decimal)")
    p_wit.add_argument(
        "-o", "--output",
        type=Path,
        help="Witness file to create (default: SPENDWITNESS_OUTPUT or input.json)",
    )

    # verify
    p_ver = sub.add_parser("verify", help="Check that a witness recombines to its digest")
    p_ver.add_argument("witness", type=Path, help="Witness file")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        settings = load_settings(args.env_file)
    except ValueError as exc:
        print(f"error[config]: {exc}", file=sys.stderr)
        return EXIT_USAGE

    logging.basicConfig(
        level=args.log_level or settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    commands = {
        "witness": cmd_witness,
        "verify": cmd_verify,
    }

    handler = commands.get(args.command)
    if handler is None:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return EXIT_USAGE

    try:
        return handler(args, settings)
    except WitnessError as exc:
        print(f"error[{exc.kind}]: {exc}", file=sys.stderr)
        return exc.exit_code
    except OSError as exc:
        print(f"error[io]: {exc}", file=sys.stderr)
        return EXIT_IO_ERROR


if __name__ == "__main__":
    raise SystemExit(main())
