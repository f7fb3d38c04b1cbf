"""
Typed control records and the boundary that builds them.

Raw InSpec output comes in two shapes:
    - Exec JSON: the result of running a profile. Controls live under
      "profiles"[*]."controls" and each has a "results" list (segments).
    - Profile JSON: a profile view that was never run. Controls live in a
      top-level "controls" list and have no results.

The document shape is decided once per document by detect_document_kind().
Every control in it is then built as the matching record type, so the
rest of the package works with the tagged ControlRecord union and never
inspects field presence to guess what a control is.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

# Status used for segments that do not report one
NO_STATUS = "no_status"


class RecordError(ValueError):
    """Raised when raw data cannot be turned into a control record."""

    pass


class UnrecognizedSchemaError(Exception):
    """Raised when a control or document matches no known schema."""

    pass


class DocumentKind(str, Enum):
    """Kind of InSpec output document."""

    EXEC = "exec"
    PROFILE = "profile"


@dataclass(frozen=True)
class Segment:
    """
    One executed assertion (describe block result) within a control.

    Attributes:
        status: "passed", "failed", "skipped", "error", or NO_STATUS.
        message: Failure or error message.
        code_desc: Description of the test that ran.
        skip_message: Reason the test was skipped.
        exception: Exception class name, if the test raised.
        backtrace: Backtrace lines, if the test raised.
        start_time: When the test started (ISO 8601 string).
        run_time: How long the test took, in seconds.
        resource: Resource the test ran against.
    """

    status: str
    message: str | None = None
    code_desc: str | None = None
    skip_message: str | None = None
    exception: str | None = None
    backtrace: tuple[str, ...] | None = None
    start_time: str | None = None
    run_time: float | None = None
    resource: str | None = None


@dataclass(frozen=True)
class ExecControlRecord:
    """A control from an exec document, carrying its segments."""

    id: str
    impact: float
    tags: Mapping[str, Any] = field(default_factory=dict)
    description: str | None = None
    title: str | None = None
    segments: tuple[Segment, ...] = ()


@dataclass(frozen=True)
class ProfileControlRecord:
    """A control from a profile view; it has never been run."""

    id: str
    impact: float
    tags: Mapping[str, Any] = field(default_factory=dict)
    description: str | None = None
    title: str | None = None


ControlRecord = ExecControlRecord | ProfileControlRecord


def strip_nulls(value: Any) -> Any:
    """
    Recursively remove None values from mappings.

    List elements are cleaned recursively but never dropped, so positions
    within result lists are preserved.
    """
    if isinstance(value, Mapping):
        return {k: strip_nulls(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [strip_nulls(v) for v in value]
    return value


def detect_document_kind(document: Mapping[str, Any]) -> DocumentKind:
    """
    Decide which kind of document this is.

    Raises:
        UnrecognizedSchemaError: If the document matches neither shape.
    """
    if isinstance(document.get("profiles"), list):
        return DocumentKind.EXEC
    if isinstance(document.get("controls"), list):
        return DocumentKind.PROFILE
    raise UnrecognizedSchemaError(
        "Document has neither a 'profiles' nor a 'controls' list"
    )


def _to_float(value: Any, name: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise RecordError(f"Field {name!r} is not a number: {value!r}") from e


def segment_from_dict(data: Mapping[str, Any]) -> Segment:
    """Build a Segment from a raw result mapping."""
    backtrace = data.get("backtrace")
    run_time = data.get("run_time")
    return Segment(
        status=str(data.get("status") or NO_STATUS),
        message=data.get("message") or None,
        code_desc=data.get("code_desc"),
        skip_message=data.get("skip_message") or None,
        exception=data.get("exception") or None,
        backtrace=tuple(backtrace) if backtrace else None,
        start_time=data.get("start_time"),
        run_time=_to_float(run_time, "run_time") if run_time is not None else None,
        resource=data.get("resource") or None,
    )


def _common_fields(data: Mapping[str, Any]) -> dict[str, Any]:
    """Extract fields shared by both record kinds."""
    if "id" not in data:
        raise RecordError("Control is missing its 'id'")
    description = data.get("desc")
    if description is None:
        description = data.get("description")
    return {
        "id": str(data["id"]),
        "impact": _to_float(data.get("impact", 0.0), "impact"),
        "tags": dict(data.get("tags") or {}),
        "description": description,
        "title": data.get("title"),
    }


def exec_control_from_dict(data: Mapping[str, Any]) -> ExecControlRecord:
    """Build an ExecControlRecord from a raw exec control mapping."""
    segments = tuple(segment_from_dict(r) for r in data.get("results") or [])
    return ExecControlRecord(segments=segments, **_common_fields(data))


def profile_control_from_dict(data: Mapping[str, Any]) -> ProfileControlRecord:
    """Build a ProfileControlRecord from a raw profile control mapping."""
    return ProfileControlRecord(**_common_fields(data))


def load_controls(document: Any) -> list[ControlRecord]:
    """
    Build control records for every control in a parsed document.

    Args:
        document: Parsed JSON document (exec or profile).

    Returns:
        Control records in document order.

    Raises:
        RecordError: If the document is not an object or a control is invalid.
        UnrecognizedSchemaError: If the document kind cannot be determined.
    """
    if not isinstance(document, Mapping):
        raise RecordError("Document must be a JSON object")

    document = strip_nulls(document)
    kind = detect_document_kind(document)

    records: list[ControlRecord] = []
    if kind == DocumentKind.EXEC:
        for profile in document["profiles"]:
            for control in profile.get("controls") or []:
                records.append(exec_control_from_dict(control))
    else:
        for control in document["controls"]:
            records.append(profile_control_from_dict(control))
    return records


def load_controls_file(path: Path | str) -> list[ControlRecord]:
    """
    Read a JSON file and build its control records.

    Raises:
        RecordError: If the file is not valid JSON.
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            document = json.load(f)
    except json.JSONDecodeError as e:
        raise RecordError(f"Invalid JSON in {path}: {e}") from e
    return load_controls(document)
