"""
Typed control records and loading of raw InSpec output.
"""

from hdfcompat.schema.records import (
    NO_STATUS,
    ControlRecord,
    DocumentKind,
    ExecControlRecord,
    ProfileControlRecord,
    RecordError,
    Segment,
    UnrecognizedSchemaError,
    detect_document_kind,
    exec_control_from_dict,
    load_controls,
    load_controls_file,
    profile_control_from_dict,
    segment_from_dict,
    strip_nulls,
)

__all__ = [
    "NO_STATUS",
    "ControlRecord",
    "DocumentKind",
    "ExecControlRecord",
    "ProfileControlRecord",
    "RecordError",
    "Segment",
    "UnrecognizedSchemaError",
    "detect_document_kind",
    "exec_control_from_dict",
    "load_controls",
    "load_controls_file",
    "profile_control_from_dict",
    "segment_from_dict",
    "strip_nulls",
]
