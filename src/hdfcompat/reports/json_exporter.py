"""
JSON export of normalized controls.

Exports every normalized control of a result or profile file together with
summary counts and the per-family group status, in machine-readable JSON.
All exports include metadata for traceability.
"""

from __future__ import annotations

import gzip
import json
import logging
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from hdfcompat.compat.status import ControlStatus, Severity
from hdfcompat.compat.wrappers import HDFControl
from hdfcompat.nist.grouping import summarize_by_family

logger = logging.getLogger(__name__)


CONTROLS_EXPORT_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "hdfcompat Controls Export",
    "type": "object",
    "required": ["metadata", "summary", "controls"],
    "properties": {
        "metadata": {
            "type": "object",
            "required": ["export_type", "timestamp", "version"],
        },
        "summary": {"type": "object"},
        "controls": {"type": "array"},
    },
}


@dataclass
class ExportMetadata:
    """
    Metadata included in all exports.

    Attributes:
        export_type: Type of export.
        timestamp: When the export was created.
        version: hdfcompat version that created the export.
        source: File the controls were read from, if any.
    """

    export_type: str
    timestamp: datetime
    version: str
    source: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "export_type": self.export_type,
            "timestamp": self.timestamp.isoformat(),
            "version": self.version,
            "source": self.source,
            "format_version": "1.0",
        }


@dataclass
class ExportResult:
    """
    Result of an export operation.

    Attributes:
        success: Whether the export completed successfully.
        path: Path to the exported file.
        size_bytes: Size of the exported file in bytes.
        record_count: Number of controls exported.
        export_type: Type of export performed.
        compressed: Whether the file is compressed.
        error: Error message if export failed.
    """

    success: bool
    path: Path | None
    size_bytes: int
    record_count: int
    export_type: str
    compressed: bool
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "success": self.success,
            "path": str(self.path) if self.path else None,
            "size_bytes": self.size_bytes,
            "record_count": self.record_count,
            "export_type": self.export_type,
            "compressed": self.compressed,
            "error": self.error,
        }


def summarize_controls(controls: Sequence[HDFControl]) -> dict[str, Any]:
    """
    Count controls by status and severity and roll statuses up by family.

    Every status and severity appears in the counts, with 0 where no
    control has it.
    """
    status_counts = Counter(c.status.value for c in controls)
    severity_counts = Counter(c.severity.value for c in controls)
    return {
        "total_controls": len(controls),
        "by_status": {s.value: status_counts.get(s.value, 0) for s in ControlStatus},
        "by_severity": {s.value: severity_counts.get(s.value, 0) for s in Severity},
        "by_family": {
            family: status.value
            for family, status in summarize_by_family(controls).items()
        },
    }


class JsonExporter:
    """
    Exporter for normalized controls in JSON format.

    Example:
        exporter = JsonExporter(version="0.1.0")
        controls = [wrap_control(r) for r in load_controls_file(path)]
        result = exporter.export_controls(controls, Path("./exports"))

    Attributes:
        version: hdfcompat version string.
        include_finding_details: Whether each control includes its finding text.
    """

    def __init__(
        self,
        version: str = "0.1.0",
        include_finding_details: bool = True,
    ) -> None:
        """
        Initialize the JSON exporter.

        Args:
            version: hdfcompat version string for metadata.
            include_finding_details: Include finding_details per control.
        """
        self.version = version
        self.include_finding_details = include_finding_details

    def build_export(
        self,
        controls: Sequence[HDFControl],
        source: str | None = None,
    ) -> dict[str, Any]:
        """
        Build the export document without writing it.

        Args:
            controls: Normalized controls.
            source: File the controls were read from.

        Returns:
            Export document as a dictionary.
        """
        metadata = ExportMetadata(
            export_type="controls",
            timestamp=datetime.now(UTC),
            version=self.version,
            source=source,
        )
        return {
            "metadata": metadata.to_dict(),
            "summary": summarize_controls(controls),
            "controls": [
                c.to_dict(include_finding_details=self.include_finding_details)
                for c in controls
            ],
        }

    def export_controls(
        self,
        controls: Sequence[HDFControl],
        output_dir: Path,
        source: str | None = None,
        compress: bool = False,
    ) -> ExportResult:
        """
        Export normalized controls to JSON.

        Args:
            controls: Normalized controls.
            output_dir: Directory to write export file.
            source: File the controls were read from.
            compress: Whether to gzip compress the output.

        Returns:
            ExportResult with export details.
        """
        try:
            output_dir = Path(output_dir)
            output_dir.mkdir(parents=True, exist_ok=True)

            export_data = self.build_export(controls, source)

            filename = self._generate_filename("controls", compress)
            filepath = output_dir / filename

            size_bytes = self._write_json(export_data, filepath, compress)

            logger.info(
                "Exported %d controls to %s (%d bytes)",
                len(controls),
                filepath,
                size_bytes,
            )

            return ExportResult(
                success=True,
                path=filepath,
                size_bytes=size_bytes,
                record_count=len(controls),
                export_type="controls",
                compressed=compress,
            )

        except OSError as e:
            logger.error("Failed to export controls: %s", e)
            return ExportResult(
                success=False,
                path=None,
                size_bytes=0,
                record_count=0,
                export_type="controls",
                compressed=compress,
                error=str(e),
            )

    def _generate_filename(self, export_type: str, compress: bool) -> str:
        """Generate filename with timestamp."""
        timestamp = datetime.now(UTC).strftime("%Y%m%d_%H%M%S")
        extension = ".json.gz" if compress else ".json"
        return f"{timestamp}_{export_type}_export{extension}"

    def _write_json(
        self,
        data: dict[str, Any],
        filepath: Path,
        compress: bool,
    ) -> int:
        """
        Write JSON data to file.

        Returns:
            Size of written file in bytes.
        """
        json_content = json.dumps(data, indent=2, default=str)

        if compress:
            with gzip.open(filepath, "wt", encoding="utf-8") as f:
                f.write(json_content)
        else:
            with open(filepath, "w", encoding="utf-8") as f:
                f.write(json_content)

        return filepath.stat().st_size

    def get_schema(self) -> dict[str, Any]:
        """Get the JSON schema of the controls export."""
        return CONTROLS_EXPORT_SCHEMA
