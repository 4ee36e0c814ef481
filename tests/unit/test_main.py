# tests/unit/test_main.py — v2
"""Tests for main.py — CLI entry point."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from sympass.main import _build_parser, main


def _prompt(*answers: str):
    it = iter(answers)
    return lambda _prompt_text: next(it)


# ---------------------------------------------------------------------------
# Parser tests
# ---------------------------------------------------------------------------

class TestBuildParser:
    def test_version_flag(self):
        parser = _build_parser()
        with pytest.raises(SystemExit) as exc_info:
            parser.parse_args(["--version"])
        assert exc_info.value.code == 0

    def test_defaults(self):
        args = _build_parser().parse_intermixed_args(["encrypt", "file.txt"])
        assert args.command == "encrypt"
        assert args.input == "file.txt"
        assert args.keep == "true"
        assert args.randomize is False
        assert args.recursive is False
        assert args.output is None
        assert args.debug is False

    def test_flags_before_input(self):
        args = _build_parser().parse_intermixed_args(
            ["decrypt", "-k", "false", "-r", "-o", "../out/", "enc/"]
        )
        assert args.command == "decrypt"
        assert args.input == "enc/"
        assert args.keep == "false"
        assert args.recursive is True
        assert args.output == "../out/"

    def test_randomize(self):
        args = _build_parser().parse_intermixed_args(["encrypt", "-z", "dir/"])
        assert args.randomize is True

    def test_illegal_option_exits_1(self):
        with pytest.raises(SystemExit) as exc_info:
            _build_parser().parse_intermixed_args(["encrypt", "-q", "file"])
        assert exc_info.value.code == 1


# ---------------------------------------------------------------------------
# main()
# ---------------------------------------------------------------------------

class TestMainExitCodes:
    def test_no_arguments_shows_help(self, capsys):
        assert main([]) == 0
        assert "GPG Symmetric Password Helper" in capsys.readouterr().out

    def test_help_anywhere(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["encrypt", "-z", "-h"])
        assert exc_info.value.code == 0
        assert "COMMAND" in capsys.readouterr().out

    def test_invalid_command(self, tmp_path: Path, capsys):
        assert main(["shred", str(tmp_path)]) == 1
        assert "Invalid command [shred]" in capsys.readouterr().err

    def test_missing_input(self):
        assert main(["encrypt"]) == 2

    def test_invalid_input(self, tmp_path: Path):
        assert main(["encrypt", str(tmp_path / "ghost")]) == 3

    def test_directory_to_file(self, sample_tree: Path):
        assert main(["encrypt", "-o", "single.gpg", str(sample_tree)]) == 4

    def test_password_mismatch(self, sample_tree: Path, fake_gateway):
        code = main(
            ["encrypt", str(sample_tree / "a.txt")],
            gateway=fake_gateway, prompt=_prompt("one", "two"),
        )
        assert code == 5
        assert fake_gateway.calls == []

    def test_invalid_keep_value(self, sample_tree: Path):
        assert main(["decrypt", "-k", "maybe", str(sample_tree)]) == 1

    def test_interrupted(self, sample_tree: Path, fake_gateway):
        def interrupt(_prompt_text: str) -> str:
            raise KeyboardInterrupt

        assert main(["encrypt", str(sample_tree)], gateway=fake_gateway, prompt=interrupt) == 130

    def test_invalid_configuration(self, sample_tree: Path, monkeypatch, capsys):
        monkeypatch.setenv("SYMPASS_ENCRYPTED_SUFFIX", "gpg")
        assert main(["encrypt", str(sample_tree)]) == 1
        assert "Invalid configuration" in capsys.readouterr().err


class TestMainDebug:
    def test_debug_dump_skips_password(self, sample_tree: Path, capsys):
        def no_prompt(_prompt_text: str) -> str:
            raise AssertionError("password must not be asked")

        code = main(["encrypt", "-d", "-r", "-o", "out/", str(sample_tree)], prompt=no_prompt)
        out = capsys.readouterr().out
        assert code == 0
        assert "COMMAND   encrypt" in out
        assert "-r true" in out
        assert "output_dir out" in out


class TestMainRuns:
    def test_encrypt_prints_output_paths(self, sample_tree: Path, tmp_path: Path, fake_gateway, capsys):
        out = tmp_path / "enc"
        code = main(
            ["encrypt", "-o", f"{out}/", str(sample_tree)],
            gateway=fake_gateway, prompt=_prompt("pw", "pw"),
        )
        printed = capsys.readouterr().out.split()
        assert code == 0
        assert sorted(Path(p).name for p in printed) == ["a.txt.gpg", "b.txt.gpg"]

    def test_default_output_is_cwd(self, sample_tree: Path, tmp_path: Path, fake_gateway, monkeypatch, capsys):
        work = tmp_path / "work"
        work.mkdir()
        monkeypatch.chdir(work)
        code = main(
            ["encrypt", str(sample_tree / "a.txt")],
            gateway=fake_gateway, prompt=_prompt("pw", "pw"),
        )
        assert code == 0
        assert (work / "a.txt.gpg").is_file()
        assert capsys.readouterr().out.strip() == "./a.txt.gpg"

    def test_failure_reported_and_exit_1(self, sample_tree: Path, tmp_path: Path, failing_gateway, capsys):
        gw = failing_gateway("a.txt", "b.txt")
        code = main(
            ["encrypt", "-o", f"{tmp_path / 'enc'}/", str(sample_tree)],
            gateway=gw, prompt=_prompt("pw", "pw"),
        )
        captured = capsys.readouterr()
        assert code == 1
        assert "Error: Failed to encrypt [" in captured.err
        assert "simulated failure" in captured.err
        assert len([c for c in gw.calls if c[0] == "encrypt"]) == 1

    def test_decrypt_to_stdout_sink(self, sample_tree: Path, tmp_path: Path, fake_gateway):
        enc = tmp_path / "enc"
        main(["encrypt", "-o", f"{enc}/", str(sample_tree / "a.txt")],
             gateway=fake_gateway, prompt=_prompt("pw", "pw"))
        sink = io.BytesIO()
        code = main(
            ["decrypt", "-k", "false", str(enc / "a.txt.gpg")],
            gateway=fake_gateway, prompt=_prompt("pw", "pw"), sink=sink,
        )
        assert code == 0
        assert sink.getvalue() == b"alpha"

    def test_wrong_password_fails_decrypt(self, sample_tree: Path, tmp_path: Path, fake_gateway, capsys):
        enc = tmp_path / "enc"
        main(["encrypt", "-o", f"{enc}/", str(sample_tree / "a.txt")],
             gateway=fake_gateway, prompt=_prompt("right", "right"))
        code = main(
            ["decrypt", "-o", f"{tmp_path / 'dec'}/", str(enc / "a.txt.gpg")],
            gateway=fake_gateway, prompt=_prompt("wrong", "wrong"),
        )
        assert code == 1
        assert "Bad session key" in capsys.readouterr().err
