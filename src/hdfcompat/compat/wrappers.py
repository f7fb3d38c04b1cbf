"""
Normalized control views over typed control records.

HDFControl is the stable interface reporting code reads: status, severity,
message, finding details, NIST tags and so on, whatever schema the control
came from. ExecControl and ProfileControl implement it for the two record
kinds; wrap_control() picks the right one for a record.

Wrapped records are immutable, so derived values that are expensive to
compute (parsed NIST tags, segment status list) are cached on first access.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from typing import Any, Protocol

from hdfcompat.compat.status import (
    ControlStatus,
    SegmentStatus,
    Severity,
    derive_status,
    severity_for_impact,
)
from hdfcompat.nist.controls import NistControl, parse_nist
from hdfcompat.schema.records import (
    ControlRecord,
    ExecControlRecord,
    ProfileControlRecord,
    Segment,
    UnrecognizedSchemaError,
)

logger = logging.getLogger(__name__)

# Tag used for controls that carry no NIST tags
UNMAPPED_NIST_TAG = "UM-1"

_UNMAPPED_CONTROL = NistControl("UM", ("1",), UNMAPPED_NIST_TAG)

NO_MESSAGE = "No message found."

_VULN_NUM_RE = re.compile(r"\d+(?:\.\d+)*")


class HDFControl(Protocol):
    """Stable view of a control, independent of its source schema."""

    @property
    def wraps(self) -> ControlRecord: ...
    @property
    def id(self) -> str: ...
    @property
    def is_profile(self) -> bool: ...
    @property
    def status(self) -> ControlStatus: ...
    @property
    def severity(self) -> Severity: ...
    @property
    def message(self) -> str: ...
    @property
    def finding_details(self) -> str: ...
    @property
    def nist_tags(self) -> list[str]: ...
    @property
    def fixed_nist_tags(self) -> tuple[NistControl, ...]: ...
    @property
    def vuln_num(self) -> str: ...
    @property
    def start_time(self) -> str | None: ...
    @property
    def status_list(self) -> tuple[str, ...] | None: ...

    def to_dict(self, include_finding_details: bool = True) -> dict[str, Any]: ...


def format_message_line(segment: Segment) -> str:
    """Render one segment as a line of a control's message."""
    if segment.status == SegmentStatus.SKIPPED:
        return f"SKIPPED -- {segment.skip_message}\n"
    elif segment.status == SegmentStatus.FAILED:
        return f"FAILED -- Test: {segment.code_desc}\nMessage: {segment.message}\n"
    elif segment.status == SegmentStatus.PASSED:
        return f"PASSED -- {segment.code_desc}\n"
    elif segment.status == SegmentStatus.ERROR:
        return f"ERROR -- Test: {segment.code_desc}\nMessage: {segment.message}\n"
    else:
        return f"Exception: {segment.exception}\n"


def finding_details_for(
    status: ControlStatus,
    message: str,
    status_list: Sequence[str] | None,
) -> str:
    """
    Build the user-facing explanation of a control's status.

    Args:
        status: The control status.
        message: The control message.
        status_list: Segment statuses, or None if the control has none.

    Returns:
        Explanation text followed by the message where relevant.
    """
    if status == ControlStatus.FAILED:
        return (
            "One or more of the automated tests failed or was inconclusive "
            f"for the control:\n\n{message}\n"
        )
    elif status == ControlStatus.PASSED:
        return f"All Automated tests passed for the control:\n\n{message}\n"
    elif status == ControlStatus.NOT_REVIEWED:
        return (
            "Automated test skipped due to known accepted condition in the "
            f"control:\n\n{message}\n"
        )
    elif status == ControlStatus.NOT_APPLICABLE:
        return f"Justification:\n\n{message}\n"
    elif status in (ControlStatus.PROFILE_ERROR, ControlStatus.NO_DATA):
        if not status_list:
            return "No describe blocks were run in this control"
        elif message:
            return f"Exception:\n\n{message}\n"
        else:
            return "No details available for this control."
    elif status == ControlStatus.FROM_PROFILE:
        return "No tests are run in a profile json."
    raise ValueError(f"Invalid control status: {status!r}")


def raw_nist_tags(record: ControlRecord) -> list[str]:
    """Get the "nist" tag values of a record, or [] if there are none."""
    fetched = record.tags.get("nist")
    if not fetched:
        return []
    if isinstance(fetched, str):
        return [fetched]
    return [str(tag) for tag in fetched]


def compute_fixed_nist_tags(raw_tags: Sequence[str]) -> tuple[NistControl, ...]:
    """
    Parse, deduplicate and sort NIST tags.

    Unparseable tags are dropped. Duplicates keep the first occurrence.
    If nothing usable remains, the result is the single unmapped control.
    """
    parsed: list[NistControl] = []
    seen: set[NistControl] = set()
    for raw in raw_tags:
        control = parse_nist(raw)
        if control is None:
            logger.debug("Dropping malformed NIST tag %r", raw)
            continue
        if control in seen:
            continue
        seen.add(control)
        parsed.append(control)

    if not parsed:
        return (_UNMAPPED_CONTROL,)

    return tuple(sorted(parsed, key=lambda c: c.sort_key()))


def extract_vuln_num(control_id: str) -> str:
    """
    Extract the numeric identifier from a control id.

    The number is the digit run touching the first "." in the id, extended
    by any further ".digits" groups, e.g. "cis-dil-benchmark-1.1.1.2" gives
    "1.1.1.2". If nothing touches the first ".", the first such number
    after it is used, so "xccdf_org.cisecurity.benchmarks_rule_1.1.1.1_Ensure"
    gives "1.1.1.1". Ids without a "." or without any such number are
    returned unchanged.
    """
    dot = control_id.find(".")
    if dot == -1:
        return control_id

    start = dot
    while start > 0 and control_id[start - 1].isdigit():
        start -= 1
    if start == dot:
        start = dot + 1

    match = _VULN_NUM_RE.match(control_id, start)
    if match is None:
        match = _VULN_NUM_RE.search(control_id, dot + 1)
    if match:
        return match.group(0)
    return control_id


class ExecControl:
    """
    Normalized view of a control from an exec document.

    Example:
        control = ExecControl(record)
        control.status            # ControlStatus.FAILED
        control.finding_details   # "One or more of the automated tests..."
    """

    def __init__(self, record: ExecControlRecord) -> None:
        self._record = record
        self._fixed_nist_tags: tuple[NistControl, ...] | None = None
        self._status_list: tuple[str, ...] | None = None

    @property
    def wraps(self) -> ExecControlRecord:
        return self._record

    @property
    def id(self) -> str:
        return self._record.id

    @property
    def is_profile(self) -> bool:
        return False

    @property
    def segments(self) -> tuple[Segment, ...]:
        return self._record.segments

    @property
    def status_list(self) -> tuple[str, ...]:
        if self._status_list is None:
            self._status_list = tuple(s.status for s in self._record.segments)
        return self._status_list

    @property
    def status(self) -> ControlStatus:
        return derive_status(
            self.status_list, self._record.impact, False, self._record.id
        )

    @property
    def severity(self) -> Severity:
        return severity_for_impact(self._record.impact)

    @property
    def message(self) -> str:
        if self._record.impact != 0:
            return "".join(format_message_line(s) for s in self._record.segments)
        return self._record.description or NO_MESSAGE

    @property
    def finding_details(self) -> str:
        return finding_details_for(self.status, self.message, self.status_list)

    @property
    def nist_tags(self) -> list[str]:
        return raw_nist_tags(self._record) or [UNMAPPED_NIST_TAG]

    @property
    def fixed_nist_tags(self) -> tuple[NistControl, ...]:
        if self._fixed_nist_tags is None:
            self._fixed_nist_tags = compute_fixed_nist_tags(raw_nist_tags(self._record))
        return self._fixed_nist_tags

    @property
    def vuln_num(self) -> str:
        return extract_vuln_num(self._record.id)

    @property
    def start_time(self) -> str | None:
        if self._record.segments:
            return self._record.segments[0].start_time
        return None

    def to_dict(self, include_finding_details: bool = True) -> dict[str, Any]:
        """Convert to dictionary."""
        return _control_to_dict(self, include_finding_details)


class ProfileControl:
    """Normalized view of a control from a profile view (never run)."""

    def __init__(self, record: ProfileControlRecord) -> None:
        self._record = record
        self._fixed_nist_tags: tuple[NistControl, ...] | None = None

    @property
    def wraps(self) -> ProfileControlRecord:
        return self._record

    @property
    def id(self) -> str:
        return self._record.id

    @property
    def is_profile(self) -> bool:
        return True

    @property
    def status_list(self) -> None:
        return None

    @property
    def status(self) -> ControlStatus:
        return derive_status(None, self._record.impact, True, self._record.id)

    @property
    def severity(self) -> Severity:
        return severity_for_impact(self._record.impact)

    @property
    def message(self) -> str:
        return self._record.description or NO_MESSAGE

    @property
    def finding_details(self) -> str:
        return finding_details_for(self.status, self.message, None)

    @property
    def nist_tags(self) -> list[str]:
        return raw_nist_tags(self._record) or [UNMAPPED_NIST_TAG]

    @property
    def fixed_nist_tags(self) -> tuple[NistControl, ...]:
        if self._fixed_nist_tags is None:
            self._fixed_nist_tags = compute_fixed_nist_tags(raw_nist_tags(self._record))
        return self._fixed_nist_tags

    @property
    def vuln_num(self) -> str:
        return extract_vuln_num(self._record.id)

    @property
    def start_time(self) -> None:
        return None

    def to_dict(self, include_finding_details: bool = True) -> dict[str, Any]:
        """Convert to dictionary."""
        return _control_to_dict(self, include_finding_details)


def _control_to_dict(control: HDFControl, include_finding_details: bool) -> dict[str, Any]:
    result: dict[str, Any] = {
        "id": control.id,
        "vuln_num": control.vuln_num,
        "status": control.status.value,
        "severity": control.severity.value,
        "impact": control.wraps.impact,
        "title": control.wraps.title,
        "message": control.message,
        "nist_tags": control.nist_tags,
        "fixed_nist_tags": [c.to_string() for c in control.fixed_nist_tags],
        "start_time": control.start_time,
        "status_list": (
            list(control.status_list) if control.status_list is not None else None
        ),
    }
    if include_finding_details:
        result["finding_details"] = control.finding_details
    return result


def wrap_control(record: ControlRecord) -> HDFControl:
    """
    Wrap a control record in its normalized view.

    Raises:
        UnrecognizedSchemaError: If record is not a known record type.
    """
    if isinstance(record, ExecControlRecord):
        return ExecControl(record)
    if isinstance(record, ProfileControlRecord):
        return ProfileControl(record)
    raise UnrecognizedSchemaError(
        f"Control did not match any expected schema: {type(record).__name__}"
    )
