# =============================================================================
# test_cli.py - sprig-lex Command-Line Tests
# =============================================================================
# Tests for the sprig-lex tool, run through click's CliRunner in an
# isolated filesystem.
# =============================================================================

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from sprig import __version__
from sprig.cli.errors import ExitCode
from sprig.cli.sprig_lex import main


@pytest.fixture
def runner(monkeypatch):
    monkeypatch.delenv("SPRIG_LONE_CR", raising=False)
    monkeypatch.delenv("SPRIG_INT_BITS", raising=False)
    return CliRunner()


class TestTextOutput:
    """Test the default text listing."""

    def test_tokenize_file(self, runner):
        with runner.isolated_filesystem():
            Path("main.sp").write_text("let x = 1\n")
            result = runner.invoke(main, ["main.sp"])

            assert result.exit_code == 0, result.output
            lines = result.output.splitlines()
            assert lines[0].split() == ["1:1", "LET", "'let'"]
            assert lines[1].split() == ["1:5", "IDENTIFIER", "'x'"]
            assert lines[3].split() == ["1:9", "INT_LITERAL", "1"]
            assert lines[4].split() == ["1:10", "EOL", "'\\n'"]
            assert lines[5].split() == ["2:1", "EOF"]

    def test_no_eol(self, runner):
        with runner.isolated_filesystem():
            Path("main.sp").write_text("a\nb\n")
            result = runner.invoke(main, ["--no-eol", "main.sp"])

            assert result.exit_code == 0
            assert "EOL" not in result.output
            assert "EOF" in result.output

    def test_multiple_files_have_headers(self, runner):
        with runner.isolated_filesystem():
            Path("a.sp").write_text("a")
            Path("b.sp").write_text("b")
            result = runner.invoke(main, ["a.sp", "b.sp"])

            assert result.exit_code == 0
            assert "==> a.sp <==" in result.output
            assert "==> b.sp <==" in result.output

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestJsonOutput:
    """Test the JSON listing."""

    def test_json(self, runner):
        with runner.isolated_filesystem():
            Path("main.sp").write_text("let x = -2.5")
            result = runner.invoke(main, ["--format", "json", "main.sp"])

            assert result.exit_code == 0, result.output
            document = json.loads(result.output)
            assert document[0]["file"] == "main.sp"
            tokens = document[0]["tokens"]
            assert tokens[3] == {
                "kind": "FLOAT_LITERAL",
                "lexeme": "-2.5",
                "line": 1,
                "column": 9,
                "value": -2.5,
            }
            assert tokens[-1]["kind"] == "EOF"
            assert "value" not in tokens[0]

    def test_crlf_is_preserved(self, runner):
        """Files are read without newline translation."""
        with runner.isolated_filesystem():
            Path("crlf.sp").write_bytes(b"a\r\nb")
            result = runner.invoke(main, ["-f", "json", "crlf.sp"])

            assert result.exit_code == 0
            tokens = json.loads(result.output)[0]["tokens"]
            assert tokens[1] == {"kind": "EOL", "lexeme": "\r\n", "line": 1, "column": 2}
            assert tokens[2]["line"] == 2


class TestErrors:
    """Test error reporting and exit codes."""

    def test_lexical_error(self, runner):
        with runner.isolated_filesystem():
            Path("bad.sp").write_text("let x = $\n")
            result = runner.invoke(main, ["bad.sp"])

            assert result.exit_code == ExitCode.BUILD_ERROR
            assert "bad.sp:1:9: error: unrecognized character '$'" in result.output
            assert "1 error" in result.output

    def test_errors_collected_across_files(self, runner):
        with runner.isolated_filesystem():
            Path("good.sp").write_text("ok")
            Path("bad1.sp").write_text("1.")
            Path("bad2.sp").write_text('"open')
            result = runner.invoke(main, ["bad1.sp", "good.sp", "bad2.sp"])

            assert result.exit_code == ExitCode.BUILD_ERROR
            assert "==> good.sp <==" in result.output
            assert "bad1.sp:1:1: error: trailing-dot decimals not allowed" in result.output
            assert "bad2.sp:1:1: error: unterminated string" in result.output
            assert "2 errors" in result.output

    def test_strict_cr(self, runner):
        with runner.isolated_filesystem():
            Path("cr.sp").write_bytes(b"a\rb")
            assert runner.invoke(main, ["cr.sp"]).exit_code == 0

            result = runner.invoke(main, ["--strict-cr", "cr.sp"])
            assert result.exit_code == ExitCode.BUILD_ERROR
            assert "stray carriage return" in result.output

    def test_int_bits(self, runner):
        with runner.isolated_filesystem():
            Path("n.sp").write_text("200")
            result = runner.invoke(main, ["--int-bits", "8", "n.sp"])

            assert result.exit_code == ExitCode.BUILD_ERROR
            assert "out of range" in result.output

    def test_int_bits_from_environment(self, runner):
        with runner.isolated_filesystem():
            Path("n.sp").write_text("200")
            result = runner.invoke(main, ["n.sp"], env={"SPRIG_INT_BITS": "8"})

            assert result.exit_code == ExitCode.BUILD_ERROR

    def test_bad_environment(self, runner):
        with runner.isolated_filesystem():
            Path("n.sp").write_text("1")
            result = runner.invoke(main, ["n.sp"], env={"SPRIG_INT_BITS": "abc"})

            assert result.exit_code == ExitCode.INVALID_ARGS
            assert "Configuration error" in result.output

    def test_missing_file(self, runner):
        result = runner.invoke(main, ["does-not-exist.sp"])
        assert result.exit_code == 2

    def test_invalid_utf8(self, runner):
        with runner.isolated_filesystem():
            Path("bin.sp").write_bytes(b"\xff\xfe")
            result = runner.invoke(main, ["bin.sp"])

            assert result.exit_code == ExitCode.INVALID_ARGS
