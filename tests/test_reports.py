"""
Tests for the JSON export of normalized controls.

Uses Python's unittest module.
"""

from __future__ import annotations

import gzip
import json
import tempfile
import unittest
from datetime import UTC, datetime
from pathlib import Path

from hdfcompat.compat.wrappers import ExecControl, ProfileControl
from hdfcompat.reports.json_exporter import (
    CONTROLS_EXPORT_SCHEMA,
    ExportMetadata,
    ExportResult,
    JsonExporter,
    summarize_controls,
)
from hdfcompat.schema.records import ExecControlRecord, ProfileControlRecord, Segment


def make_controls() -> list:
    """Create a small mixed set of controls."""
    return [
        ExecControl(
            ExecControlRecord(
                id="V-1",
                impact=0.7,
                tags={"nist": ["AC-2 (1)"]},
                segments=(Segment(status="failed", code_desc="x", message="y"),),
            )
        ),
        ExecControl(
            ExecControlRecord(
                id="V-2",
                impact=0.5,
                tags={"nist": ["SI-4"]},
                segments=(Segment(status="passed", code_desc="z"),),
            )
        ),
        ProfileControl(ProfileControlRecord(id="V-3", impact=0.0)),
    ]


class TestExportMetadata(unittest.TestCase):
    """Tests for ExportMetadata."""

    def test_metadata_to_dict(self) -> None:
        """Test metadata conversion."""
        timestamp = datetime(2024, 3, 1, 12, 0, tzinfo=UTC)
        metadata = ExportMetadata(
            export_type="controls",
            timestamp=timestamp,
            version="0.1.0",
            source="results.json",
        )

        result = metadata.to_dict()

        self.assertEqual(result["export_type"], "controls")
        self.assertEqual(result["timestamp"], timestamp.isoformat())
        self.assertEqual(result["source"], "results.json")
        self.assertEqual(result["format_version"], "1.0")


class TestExportResult(unittest.TestCase):
    """Tests for ExportResult."""

    def test_result_to_dict(self) -> None:
        """Test result conversion."""
        result = ExportResult(
            success=True,
            path=Path("/tmp/export.json"),
            size_bytes=100,
            record_count=3,
            export_type="controls",
            compressed=False,
        )

        data = result.to_dict()

        self.assertEqual(data["path"], "/tmp/export.json")
        self.assertIsNone(data["error"])


class TestSummarizeControls(unittest.TestCase):
    """Tests for summarize_controls."""

    def test_counts(self) -> None:
        """Test status, severity and family counts."""
        summary = summarize_controls(make_controls())

        self.assertEqual(summary["total_controls"], 3)
        self.assertEqual(summary["by_status"]["Failed"], 1)
        self.assertEqual(summary["by_status"]["Passed"], 1)
        self.assertEqual(summary["by_status"]["From Profile"], 1)
        self.assertEqual(summary["by_status"]["Not Reviewed"], 0)
        self.assertEqual(summary["by_severity"]["high"], 1)
        self.assertEqual(summary["by_severity"]["none"], 1)
        self.assertEqual(summary["by_family"]["AC"], "Failed")
        self.assertEqual(summary["by_family"]["SI"], "Passed")
        self.assertEqual(summary["by_family"]["UM"], "From Profile")
        self.assertEqual(summary["by_family"]["AU"], "Empty")

    def test_empty(self) -> None:
        """Test summarizing no controls."""
        summary = summarize_controls([])

        self.assertEqual(summary["total_controls"], 0)
        self.assertTrue(all(v == 0 for v in summary["by_status"].values()))


class TestJsonExporter(unittest.TestCase):
    """Tests for JsonExporter."""

    def setUp(self) -> None:
        """Create a temporary directory and exporter."""
        self.temp_dir = tempfile.TemporaryDirectory()
        self.output_dir = Path(self.temp_dir.name)
        self.exporter = JsonExporter(version="0.1.0")
        self.controls = make_controls()

    def tearDown(self) -> None:
        """Clean up the temporary directory."""
        self.temp_dir.cleanup()

    def test_export_controls(self) -> None:
        """Test writing an uncompressed export."""
        result = self.exporter.export_controls(
            self.controls, self.output_dir, source="results.json"
        )

        self.assertTrue(result.success)
        self.assertEqual(result.record_count, 3)
        self.assertFalse(result.compressed)
        assert result.path is not None
        self.assertTrue(result.path.name.endswith("_controls_export.json"))
        self.assertEqual(result.size_bytes, result.path.stat().st_size)

        data = json.loads(result.path.read_text(encoding="utf-8"))
        self.assertEqual(data["metadata"]["export_type"], "controls")
        self.assertEqual(data["metadata"]["source"], "results.json")
        self.assertEqual(data["summary"]["total_controls"], 3)
        self.assertEqual([c["id"] for c in data["controls"]], ["V-1", "V-2", "V-3"])
        self.assertIn("finding_details", data["controls"][0])

    def test_export_compressed(self) -> None:
        """Test writing a gzip export."""
        result = self.exporter.export_controls(
            self.controls, self.output_dir, compress=True
        )

        self.assertTrue(result.success)
        assert result.path is not None
        self.assertTrue(result.path.name.endswith(".json.gz"))
        with gzip.open(result.path, "rt", encoding="utf-8") as f:
            data = json.load(f)
        self.assertEqual(len(data["controls"]), 3)

    def test_export_without_finding_details(self) -> None:
        """Test leaving out finding details."""
        exporter = JsonExporter(include_finding_details=False)

        data = exporter.build_export(self.controls)

        self.assertNotIn("finding_details", data["controls"][0])

    def test_export_creates_directory(self) -> None:
        """Test that missing output directories are created."""
        nested = self.output_dir / "a" / "b"

        result = self.exporter.export_controls(self.controls, nested)

        self.assertTrue(result.success)
        self.assertTrue(nested.is_dir())

    def test_export_invalid_path(self) -> None:
        """Test that write failures are reported, not raised."""
        blocker = self.output_dir / "file"
        blocker.write_text("not a directory")

        result = self.exporter.export_controls(self.controls, blocker)

        self.assertFalse(result.success)
        self.assertIsNone(result.path)
        self.assertIsNotNone(result.error)

    def test_generate_filename(self) -> None:
        """Test filename generation."""
        name = self.exporter._generate_filename("controls", compress=False)

        self.assertTrue(name.endswith("_controls_export.json"))

    def test_get_schema(self) -> None:
        """Test the export schema."""
        schema = self.exporter.get_schema()

        self.assertIs(schema, CONTROLS_EXPORT_SCHEMA)
        self.assertEqual(schema["required"], ["metadata", "summary", "controls"])


if __name__ == "__main__":
    unittest.main()
