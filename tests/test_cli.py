"""Tests for the spendwitness CLI — proves dispatch and exit codes."""

import json
from pathlib import Path

import pytest

from spendwitness.cli import build_parser, main
from spendwitness.crypto.field import field_hash2
from spendwitness.errors import (
    DuplicateTargetMatch,
    InvalidFieldElement,
    InvalidRecordArity,
    InvalidTranscript,
    LeafMismatch,
    MalformedWitness,
    NullifierNotFound,
    WitnessVerificationFailed,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch) -> None:
    for key in ("SPENDWITNESS_OUTPUT", "SPENDWITNESS_LOG_LEVEL", "SPENDWITNESS_DEPTH"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def env_file(tmp_path: Path) -> Path:
    return tmp_path / "none.env"


@pytest.fixture
def transcript(tmp_path: Path) -> Path:
    path = tmp_path / "transcript.txt"
    path.write_text(
        "1839475893\n"
        "1984375234 2983475298\n"
        "3489725451 9834572345\n"
        "3452345234\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def single(tmp_path: Path) -> Path:
    path = tmp_path / "single.txt"
    path.write_text("7 9\n", encoding="utf-8")
    return path


def _run(env_file: Path, *args: str) -> int:
    return main(["--env-file", str(env_file), *args])


class TestCLIParsing:
    def test_witness_command(self) -> None:
        args = build_parser().parse_args(["witness", "20", "t.txt", "7", "-o", "w.json"])
        assert args.command == "witness"
        assert args.depth == "20"
        assert args.transcript == Path("t.txt")
        assert args.nullifier == "7"
        assert args.output == Path("w.json")

    def test_output_defaults_to_none(self) -> None:
        args = build_parser().parse_args(["witness", "20", "t.txt", "7"])
        assert args.output is None

    def test_verify_command(self) -> None:
        args = build_parser().parse_args(["verify", "w.json"])
        assert args.command == "verify"
        assert args.witness == Path("w.json")


class TestCLIExecution:
    def test_no_command_shows_help(self, capsys) -> None:
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out

    def test_witness_then_verify(self, tmp_path: Path, transcript: Path, env_file: Path, capsys) -> None:
        out = tmp_path / "witness.json"
        assert _run(env_file, "witness", "20", str(transcript), "3489725451", "-o", str(out)) == 0

        record = json.loads(out.read_text(encoding="utf-8"))
        assert record["nullifier"] == "3489725451"
        assert record["nonce"] == "9834572345"
        assert "sibling[19]" in record
        assert "direction[19]" in record

        assert _run(env_file, "verify", str(out)) == 0
        assert f"OK {record['digest']}" in capsys.readouterr().out

    def test_default_output_from_settings(self, tmp_path: Path, single: Path) -> None:
        out = tmp_path / "configured.json"
        env_file = tmp_path / ".env"
        env_file.write_text(f"SPENDWITNESS_OUTPUT={out}\nSPENDWITNESS_DEPTH=4\n", encoding="utf-8")
        assert _run(env_file, "witness", "-", str(single), "7") == 0
        record = json.loads(out.read_text(encoding="utf-8"))
        assert "sibling[3]" in record
        assert "sibling[4]" not in record

    def test_default_output_name(self, tmp_path: Path, single: Path, env_file: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        assert _run(env_file, "witness", "3", str(single), "7") == 0
        assert (tmp_path / "input.json").exists()

    def test_nullifier_not_found(self, tmp_path: Path, transcript: Path, env_file: Path, capsys) -> None:
        out = tmp_path / "witness.json"
        code = _run(env_file, "witness", "20", str(transcript), "1839475893", "-o", str(out))
        assert code == NullifierNotFound.exit_code
        assert "error[nullifier_not_found]" in capsys.readouterr().err
        assert not out.exists()

    def test_duplicate_target(self, tmp_path: Path, env_file: Path) -> None:
        path = tmp_path / "dup.txt"
        path.write_text("7 9\n7 10\n", encoding="utf-8")
        out = tmp_path / "witness.json"
        code = _run(env_file, "witness", "4", str(path), "7", "-o", str(out))
        assert code == DuplicateTargetMatch.exit_code
        assert not out.exists()

    def test_bad_arity(self, tmp_path: Path, env_file: Path) -> None:
        path = tmp_path / "bad.txt"
        path.write_text("7 9\n1 2 3\n", encoding="utf-8")
        code = _run(env_file, "witness", "4", str(path), "7", "-o", str(tmp_path / "w.json"))
        assert code == InvalidRecordArity.exit_code

    def test_target_displaced(self, tmp_path: Path, env_file: Path, capsys) -> None:
        path = tmp_path / "displaced.txt"
        path.write_text(f"7 9\n{field_hash2(7, 9) % 4 + 4}\n", encoding="utf-8")
        out = tmp_path / "witness.json"
        code = _run(env_file, "witness", "2", str(path), "7", "-o", str(out))
        assert code == LeafMismatch.exit_code
        assert "error[leaf_mismatch]" in capsys.readouterr().err
        assert not out.exists()

    def test_transcript_not_utf8(self, tmp_path: Path, env_file: Path, capsys) -> None:
        path = tmp_path / "binary.txt"
        path.write_bytes(b"7 9\n\xff\xfe\n")
        out = tmp_path / "witness.json"
        code = _run(env_file, "witness", "4", str(path), "7", "-o", str(out))
        assert code == InvalidTranscript.exit_code
        assert "error[invalid_transcript]: line 2" in capsys.readouterr().err
        assert not out.exists()

    def test_bad_nullifier(self, transcript: Path, env_file: Path, tmp_path: Path) -> None:
        code = _run(env_file, "witness", "4", str(transcript), "abc", "-o", str(tmp_path / "w.json"))
        assert code == InvalidFieldElement.exit_code

    def test_bad_depth(self, transcript: Path, env_file: Path, tmp_path: Path, capsys) -> None:
        code = _run(env_file, "witness", "-3", str(transcript), "7", "-o", str(tmp_path / "w.json"))
        assert code == 2
        assert "error[usage]" in capsys.readouterr().err

    def test_missing_transcript(self, tmp_path: Path, env_file: Path) -> None:
        code = _run(env_file, "witness", "4", str(tmp_path / "nope.txt"), "7", "-o", str(tmp_path / "w.json"))
        assert code == 1

    def test_verify_tampered(self, tmp_path: Path, transcript: Path, env_file: Path) -> None:
        out = tmp_path / "witness.json"
        assert _run(env_file, "witness", "20", str(transcript), "1984375234", "-o", str(out)) == 0
        record = json.loads(out.read_text(encoding="utf-8"))
        record["direction[0]"] = "1" if record["direction[0]"] == "0" else "0"
        out.write_text(json.dumps(record), encoding="utf-8")
        assert _run(env_file, "verify", str(out)) == WitnessVerificationFailed.exit_code

    def test_verify_malformed(self, tmp_path: Path, env_file: Path) -> None:
        out = tmp_path / "witness.json"
        out.write_text(json.dumps({"digest": "1"}), encoding="utf-8")
        assert _run(env_file, "verify", str(out)) == MalformedWitness.exit_code

    def test_verify_direct_commitment(self, tmp_path: Path, env_file: Path) -> None:
        # Depth 0: the digest is the commitment itself.
        out = tmp_path / "witness.json"
        digest = field_hash2(7, 9)
        out.write_text(json.dumps({"digest": str(digest), "nullifier": "7", "nonce": "9"}), encoding="utf-8")
        assert _run(env_file, "verify", str(out)) == 0
