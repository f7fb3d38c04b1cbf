"""
Schema compatibility layer for control records.

Wraps typed control records from any supported schema in a stable view
(HDFControl) with derived status, severity, message, finding details and
NIST tags.

Example:
    from hdfcompat.compat import wrap_control

    control = wrap_control(record)
    print(control.status.value, control.severity.value)
    print(control.finding_details)
"""

from hdfcompat.compat.status import (
    ControlStatus,
    SegmentStatus,
    Severity,
    derive_status,
    severity_for_impact,
)
from hdfcompat.compat.wrappers import (
    UNMAPPED_NIST_TAG,
    ExecControl,
    HDFControl,
    ProfileControl,
    UnrecognizedSchemaError,
    compute_fixed_nist_tags,
    extract_vuln_num,
    finding_details_for,
    format_message_line,
    wrap_control,
)

__all__ = [
    # Status
    "ControlStatus",
    "SegmentStatus",
    "Severity",
    "derive_status",
    "severity_for_impact",
    # Wrappers
    "HDFControl",
    "ExecControl",
    "ProfileControl",
    "UnrecognizedSchemaError",
    "UNMAPPED_NIST_TAG",
    "wrap_control",
    "compute_fixed_nist_tags",
    "extract_vuln_num",
    "finding_details_for",
    "format_message_line",
]
