#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for the markweave command-line entry point.

The CLI reads a file (or stdin), parses it and prints the tree. These tests
drive ``main`` with argument lists and inspect the captured output and exit
codes.
"""

import io
import json
import logging

import pytest

from markweave import __version__
from markweave.cli import create_parser, main


@pytest.mark.unit
@pytest.mark.cli
class TestCLIOutput:
    """Test tree and JSON output."""

    def test_tree_output(self, markdown_file, capsys, restore_root_logging):
        """Test the default indented outline."""
        path = markdown_file("# Title\n\nSome *text*")

        assert main([str(path)]) == 0

        out = capsys.readouterr().out
        assert out.splitlines() == [
            "Document",
            "  Header(level=1)",
            "    Text('Title')",
            "  Paragraph",
            "    Text('Some ')",
            "    Italic",
            "      Text('text')",
        ]

    def test_json_output(self, markdown_file, capsys, restore_root_logging):
        """Test versioned JSON output."""
        path = markdown_file("| a |\n|---|\n| 1 |")

        assert main([str(path), "--format", "json"]) == 0

        payload = json.loads(capsys.readouterr().out)
        assert payload["schema_version"] == 1
        assert payload["node_type"] == "Document"
        table = payload["children"][0]
        assert table["node_type"] == "Table"
        assert table["column_count"] == 1

    def test_json_with_source_lines(self, markdown_file, capsys, restore_root_logging):
        """Test that --include-source adds line numbers."""
        path = markdown_file("\n\n# Late title")

        assert main([str(path), "--format", "json", "--include-source"]) == 0

        header = json.loads(capsys.readouterr().out)["children"][0]
        assert header["source_location"]["line"] == 3

    def test_inline_mode_from_stdin(self, monkeypatch, capsys, restore_root_logging):
        """Test --inline with input from standard input."""
        monkeypatch.setattr("sys.stdin", io.StringIO("# not a header, **bold**"))

        assert main(["-", "--inline", "--format", "json"]) == 0

        payload = json.loads(capsys.readouterr().out)
        assert payload["schema_version"] == 1
        assert [node["node_type"] for node in payload["nodes"]] == ["Text", "Bold"]
        assert payload["nodes"][0]["content"] == "# not a header, "

    def test_extension_set_option(self, markdown_file, capsys, restore_root_logging):
        """Test that --extension-set changes the grammar."""
        path = markdown_file("~~gone~~")

        assert main([str(path), "--extension-set", "commonmark"]) == 0
        assert "Strikethrough" not in capsys.readouterr().out

        assert main([str(path)]) == 0
        assert "Strikethrough" in capsys.readouterr().out

    def test_no_default_syntaxes(self, markdown_file, capsys, restore_root_logging):
        """Test that disabling defaults leaves paragraphs only."""
        path = markdown_file("# Title")

        assert main([str(path), "--no-default-syntaxes", "--extension-set", "none"]) == 0

        out = capsys.readouterr().out
        assert "Header" not in out
        assert "Text('# Title')" in out

    def test_rich_output(self, markdown_file, capsys, restore_root_logging):
        """Test that rich output contains the node names."""
        path = markdown_file("- item")

        assert main([str(path), "--rich"]) == 0

        out = capsys.readouterr().out
        assert "UnorderedList" in out
        assert "ListParagraph" in out

    def test_validate_flag(self, markdown_file, capsys, restore_root_logging):
        """Test that --validate accepts a well-formed parse."""
        path = markdown_file("> quote\n\n1. one")
        assert main([str(path), "--validate"]) == 0
        assert "OrderedList(start=1)" in capsys.readouterr().out


@pytest.mark.unit
@pytest.mark.cli
class TestCLIErrors:
    """Test exit codes for failures."""

    def test_missing_file(self, tmp_path, capsys, restore_root_logging):
        """Test that an unreadable path exits with code 3."""
        assert main([str(tmp_path / "missing.md")]) == 3
        assert "cannot read" in capsys.readouterr().err

    def test_undecodable_file(self, tmp_path, capsys, restore_root_logging):
        """Test that invalid UTF-8 exits with code 3."""
        path = tmp_path / "binary.md"
        path.write_bytes(b"\xff\xfe\xfa")

        assert main([str(path)]) == 3

    def test_nesting_error(self, markdown_file, capsys, restore_root_logging):
        """Test that a parse error exits with code 1."""
        path = markdown_file("> > > deep")

        code = main([str(path), "--max-nesting-depth", "1", "--nesting-policy", "error"])

        assert code == 1
        assert "Maximum nesting depth exceeded" in capsys.readouterr().err

    def test_depth_over_limit(self, markdown_file, capsys, restore_root_logging):
        """Test that an out-of-range option value exits with code 1."""
        path = markdown_file("x")
        assert main([str(path), "--max-nesting-depth", "101"]) == 1
        assert "max_nesting_depth" in capsys.readouterr().err

    @pytest.mark.parametrize(
        "args",
        [
            ["--format", "xml"],
            ["--max-nesting-depth", "0"],
            ["--max-nesting-depth", "many"],
            ["--extension-set", "unknown"],
            ["--nesting-policy", "ignore"],
        ],
    )
    def test_usage_errors(self, args, capsys):
        """Test that invalid arguments exit with code 2."""
        with pytest.raises(SystemExit) as exc_info:
            main(args)
        assert exc_info.value.code == 2

    def test_version(self, capsys):
        """Test --version."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])

        assert exc_info.value.code == 0
        assert f"markweave {__version__}" in capsys.readouterr().out


@pytest.mark.unit
@pytest.mark.cli
class TestCLIEnvironment:
    """Test option defaults taken from MARKWEAVE_* variables."""

    def test_env_extension_set(self, monkeypatch):
        """Test a choice option read from the environment."""
        monkeypatch.setenv("MARKWEAVE_EXTENSION_SET", "commonmark")
        assert create_parser().parse_args([]).extension_set == "commonmark"

    def test_cli_overrides_env(self, monkeypatch):
        """Test that arguments win over the environment."""
        monkeypatch.setenv("MARKWEAVE_FORMAT", "json")
        assert create_parser().parse_args(["--format", "tree"]).format == "tree"

    def test_invalid_env_value_ignored(self, monkeypatch, caplog):
        """Test that a bad environment value falls back to the default."""
        monkeypatch.setenv("MARKWEAVE_NESTING_POLICY", "sometimes")

        with caplog.at_level(logging.WARNING):
            args = create_parser().parse_args([])

        assert args.nesting_policy == "truncate"
        assert "MARKWEAVE_NESTING_POLICY" in caplog.text

    def test_env_boolean_flags(self, monkeypatch):
        """Test positive and negative boolean flags from the environment."""
        monkeypatch.setenv("MARKWEAVE_RICH", "yes")
        monkeypatch.setenv("MARKWEAVE_DEFAULT_SYNTAXES", "false")

        args = create_parser().parse_args([])

        assert args.rich is True
        assert args.default_syntaxes is False

    def test_env_nesting_depth(self, monkeypatch):
        """Test an integer option from the environment."""
        monkeypatch.setenv("MARKWEAVE_MAX_NESTING_DEPTH", "7")
        assert create_parser().parse_args([]).max_nesting_depth == 7

    def test_env_changes_parse(self, markdown_file, monkeypatch, capsys, restore_root_logging):
        """Test that environment defaults reach the parser."""
        monkeypatch.setenv("MARKWEAVE_EXTENSION_SET", "none")
        path = markdown_file("| a |\n|---|\n| 1 |")

        assert main([str(path)]) == 0
        assert "Table" not in capsys.readouterr().out


@pytest.mark.unit
@pytest.mark.cli
class TestCLILogging:
    """Test the logging options."""

    def test_log_level_case_insensitive(self):
        """Test that level names are upper-cased."""
        assert create_parser().parse_args(["--log-level", "debug"]).log_level == "DEBUG"

    def test_trace_sets_debug(self, markdown_file, restore_root_logging):
        """Test that --trace switches the root logger to DEBUG."""
        path = markdown_file("text")

        assert main([str(path), "--trace"]) == 0
        assert logging.getLogger().level == logging.DEBUG

    def test_log_file(self, markdown_file, tmp_path, restore_root_logging):
        """Test that debug records are teed to a log file."""
        path = markdown_file("# Title")
        log_path = tmp_path / "parse.log"

        assert main([str(path), "--log-level", "DEBUG", "--log-file", str(log_path)]) == 0

        for handler in logging.getLogger().handlers:
            handler.flush()
        content = log_path.read_text(encoding="utf-8")
        assert "Block phase produced" in content

    def test_warnings_reach_stderr(self, markdown_file, capsys, restore_root_logging):
        """Test that truncation warnings are printed at the default level."""
        path = markdown_file("> > > deep")

        assert main([str(path), "--max-nesting-depth", "1"]) == 0
        assert "WARNING: Nesting depth 2 exceeds limit 1" in capsys.readouterr().err
