"""
Tests for the CLI commands.

Uses Python's unittest module.
Tests argument parsing, command output and output formatting.
"""

from __future__ import annotations

import io
import json
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path

from hdfcompat.cli import (
    cmd_export,
    cmd_info,
    cmd_nist_parse,
    cmd_nist_tree,
    cmd_summary,
    create_parser,
    format_as_csv,
    set_output_mode,
)


def results_document() -> dict:
    """Build a small exec document."""
    return {
        "profiles": [
            {
                "name": "baseline",
                "controls": [
                    {
                        "id": "V-1",
                        "impact": 0.7,
                        "tags": {"nist": ["AC-2 (1)"]},
                        "results": [
                            {"status": "failed", "code_desc": "a", "message": "b"}
                        ],
                    },
                    {
                        "id": "V-2",
                        "impact": 0.5,
                        "tags": {"nist": ["SI-4"]},
                        "results": [{"status": "passed", "code_desc": "c"}],
                    },
                ],
            }
        ]
    }


class TestArgumentParser(unittest.TestCase):
    """Tests for CLI argument parsing."""

    def setUp(self) -> None:
        """Set up parser for tests."""
        self.parser = create_parser()

    def test_version_argument(self) -> None:
        """Test --version argument."""
        with redirect_stdout(io.StringIO()):
            with self.assertRaises(SystemExit) as cm:
                self.parser.parse_args(["--version"])

        self.assertEqual(cm.exception.code, 0)

    def test_no_command_defaults(self) -> None:
        """Test defaults without a command."""
        args = self.parser.parse_args([])

        self.assertIsNone(args.command)
        self.assertEqual(args.verbose, 0)
        self.assertFalse(args.quiet)

    def test_summary_command(self) -> None:
        """Test parsing the summary command."""
        args = self.parser.parse_args(
            ["summary", "results.json", "--format", "csv", "--family", "ac"]
        )

        self.assertEqual(args.command, "summary")
        self.assertEqual(args.file, "results.json")
        self.assertEqual(args.format, "csv")
        self.assertEqual(args.family, "ac")

    def test_summary_invalid_format(self) -> None:
        """Test that unknown formats are rejected."""
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                self.parser.parse_args(["summary", "r.json", "--format", "xml"])

    def test_export_command(self) -> None:
        """Test parsing the export command."""
        args = self.parser.parse_args(
            ["export", "r.json", "--output", "/tmp/out", "--compress"]
        )

        self.assertEqual(args.output, "/tmp/out")
        self.assertTrue(args.compress)

    def test_nist_parse_command(self) -> None:
        """Test parsing nist parse with several tags."""
        args = self.parser.parse_args(["nist", "parse", "AC-2 (1)", "SI-4a.2."])

        self.assertEqual(args.nist_command, "parse")
        self.assertEqual(args.tags, ["AC-2 (1)", "SI-4a.2."])

    def test_nist_tree_command(self) -> None:
        """Test parsing nist tree options."""
        args = self.parser.parse_args(["nist", "tree", "--family", "AC", "--depth", "1"])

        self.assertEqual(args.family, "AC")
        self.assertEqual(args.depth, 1)
        self.assertIsNone(args.results)

    def test_global_flags(self) -> None:
        """Test repeated -v and --config."""
        args = self.parser.parse_args(["-vv", "--config", "/tmp/c.yaml", "info"])

        self.assertEqual(args.verbose, 2)
        self.assertEqual(args.config, "/tmp/c.yaml")


class TestPackageMetadata(unittest.TestCase):
    """Tests for package level metadata."""

    def test_version(self) -> None:
        """Test the package version and that no empty metadata is exported."""
        import hdfcompat

        self.assertEqual(hdfcompat.__version__, "0.1.0")
        self.assertFalse(hasattr(hdfcompat, "__author__"))
        self.assertFalse(hasattr(hdfcompat, "__email__"))


class TestFormatAsCsv(unittest.TestCase):
    """Tests for format_as_csv."""

    def test_format(self) -> None:
        """Test CSV formatting."""
        result = format_as_csv(["A", "B"], [[1, "x, y"]])

        self.assertEqual(result.splitlines(), ["A,B", '1,"x, y"'])


class TestCommands(unittest.TestCase):
    """Tests for command handlers."""

    def setUp(self) -> None:
        """Create a results file and a parser."""
        set_output_mode(quiet=False, verbose=0)
        self.temp_dir = tempfile.TemporaryDirectory()
        self.dir = Path(self.temp_dir.name)
        self.results = self.dir / "results.json"
        self.results.write_text(json.dumps(results_document()), encoding="utf-8")
        self.config = str(self.dir / "missing-config.yaml")
        self.parser = create_parser()

    def tearDown(self) -> None:
        """Clean up."""
        self.temp_dir.cleanup()

    def _run(self, argv: list[str]) -> tuple[int, str, str]:
        args = self.parser.parse_args(["--config", self.config, *argv])
        stdout = io.StringIO()
        stderr = io.StringIO()
        with redirect_stdout(stdout), redirect_stderr(stderr):
            code = args.func(args)
        return code, stdout.getvalue(), stderr.getvalue()

    def test_info_json(self) -> None:
        """Test info output as JSON."""
        code, out, _ = self._run(["info", "--json"])

        self.assertEqual(code, 0)
        info = json.loads(out)
        self.assertEqual(info["nist"]["families"], 19)

    def test_info_text(self) -> None:
        """Test info output as text."""
        code, out, _ = self._run(["info"])

        self.assertEqual(code, 0)
        self.assertIn("Families: 19", out)

    def test_summary_json(self) -> None:
        """Test summary output as JSON."""
        code, out, _ = self._run(["summary", str(self.results), "--format", "json"])

        self.assertEqual(code, 0)
        data = json.loads(out)
        self.assertEqual([c["status"] for c in data], ["Failed", "Passed"])
        self.assertNotIn("finding_details", data[0])

    def test_summary_family_filter(self) -> None:
        """Test filtering the summary by family."""
        code, out, _ = self._run(
            ["summary", str(self.results), "--format", "csv", "--family", "si"]
        )

        self.assertEqual(code, 0)
        lines = out.strip().splitlines()
        self.assertEqual(lines[0], "ID,Status,Severity,NIST Tags")
        self.assertEqual(lines[1], "V-2,Passed,medium,SI-4")
        self.assertEqual(len(lines), 2)

    def test_summary_table(self) -> None:
        """Test the table summary."""
        code, out, _ = self._run(["summary", str(self.results), "--format", "table"])

        self.assertEqual(code, 0)
        self.assertIn("AC-2 (1)", out)
        self.assertIn("Total", out)

    def test_export(self) -> None:
        """Test exporting to a directory."""
        out_dir = self.dir / "exports"

        code, out, _ = self._run(["export", str(self.results), "--output", str(out_dir)])

        self.assertEqual(code, 0)
        self.assertIn("Exported 2 controls", out)
        self.assertEqual(len(list(out_dir.glob("*_controls_export.json"))), 1)

    def test_nist_parse(self) -> None:
        """Test parsing tags from the command line."""
        code, out, _ = self._run(["nist", "parse", "SI-7(14)(b)", "--json"])

        self.assertEqual(code, 0)
        data = json.loads(out)
        self.assertEqual(data[0]["text"], "SI-7 (14)(b)")
        self.assertEqual(data[0]["family_name"], "System and Information Integrity")

    def test_nist_parse_failure(self) -> None:
        """Test that malformed tags give a nonzero exit code."""
        code, out, err = self._run(["nist", "parse", "AC-2", "garbage"])

        self.assertEqual(code, 1)
        self.assertIn("AC-2", out)
        self.assertIn("garbage", err)

    def test_nist_tree_depth(self) -> None:
        """Test printing one family to a limited depth."""
        code, out, _ = self._run(["nist", "tree", "--family", "ac", "--depth", "1"])

        self.assertEqual(code, 0)
        lines = out.splitlines()
        self.assertEqual(lines[0], "AC - Access Control")
        self.assertIn("  AC-2", lines)
        self.assertNotIn("    AC-2 (1)", lines)

    def test_nist_tree_with_results(self) -> None:
        """Test annotating the tree with group statuses."""
        code, out, _ = self._run(
            ["nist", "tree", "--family", "AC", "--depth", "1", "--results", str(self.results)]
        )

        self.assertEqual(code, 0)
        lines = out.splitlines()
        self.assertEqual(lines[0], "AC - Access Control [Failed]")
        self.assertIn("  AC-2 [Failed]", lines)
        self.assertIn("  AC-3 [Empty]", lines)

    def test_nist_tree_unknown_family(self) -> None:
        """Test an unknown family."""
        code, _, err = self._run(["nist", "tree", "--family", "ZZ"])

        self.assertEqual(code, 1)
        self.assertIn("ZZ", err)


if __name__ == "__main__":
    unittest.main()
