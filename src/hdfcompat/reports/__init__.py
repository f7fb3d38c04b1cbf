"""
Report generation for normalized controls.

Supported Formats:
    - JSON: Machine-readable exports with every normalized control, status
            and severity counts, and per-family group status.

Example:
    from hdfcompat.reports import JsonExporter

    exporter = JsonExporter(version="0.1.0")
    result = exporter.export_controls(controls, output_dir=Path("./exports"))
"""

from hdfcompat.reports.json_exporter import (
    CONTROLS_EXPORT_SCHEMA,
    ExportMetadata,
    ExportResult,
    JsonExporter,
    summarize_controls,
)

__all__ = [
    "JsonExporter",
    "ExportMetadata",
    "ExportResult",
    "CONTROLS_EXPORT_SCHEMA",
    "summarize_controls",
]
