"""
Control status and severity derivation.

The status of a whole control is computed from the statuses of its
segments (the individual describe blocks that were run), its impact and
whether it came from a profile view. Rules are applied in order and the
first match wins:

    1. Profile view (never run)               -> From Profile
    2. No segments at all                     -> Profile Error
    3. Any segment errored                    -> Profile Error
    4. Impact of 0                            -> Not Applicable
    5. Any segment failed                     -> Failed
    6. Any segment passed                     -> Passed
    7. Any segment skipped (so all skipped)   -> Not Reviewed
    8. Nothing matched                        -> Profile Error (logged)

Severity buckets impact as:
    [0.0, 0.1) none, [0.1, 0.4) low, [0.4, 0.7) medium,
    [0.7, 0.9) high, [0.9, 1.0] critical
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import Enum

logger = logging.getLogger(__name__)


class ControlStatus(str, Enum):
    """Status computed for an entire control."""

    NOT_APPLICABLE = "Not Applicable"
    FROM_PROFILE = "From Profile"
    NO_DATA = "No Data"
    PROFILE_ERROR = "Profile Error"
    PASSED = "Passed"
    FAILED = "Failed"
    NOT_REVIEWED = "Not Reviewed"


class SegmentStatus(str, Enum):
    """Status of one part of a control (a single describe block)."""

    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"
    ERROR = "error"


class Severity(str, Enum):
    """Severity bucket derived from a control's impact."""

    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


def severity_for_impact(impact: float) -> Severity:
    """
    Map a numeric impact to a severity bucket.

    Args:
        impact: Impact between 0.0 and 1.0.

    Returns:
        The matching Severity. Bucket lower bounds are inclusive.
    """
    if impact < 0.1:
        return Severity.NONE
    elif impact < 0.4:
        return Severity.LOW
    elif impact < 0.7:
        return Severity.MEDIUM
    elif impact < 0.9:
        return Severity.HIGH
    else:
        return Severity.CRITICAL


def derive_status(
    status_list: Sequence[str] | None,
    impact: float,
    is_profile: bool,
    control_id: str = "",
) -> ControlStatus:
    """
    Compute the status of a control.

    Args:
        status_list: Segment statuses in order, or None if the control has
            no segments.
        impact: Control impact (0.0 - 1.0).
        is_profile: Whether the control comes from a profile view.
        control_id: Used only for logging.

    Returns:
        The ControlStatus for the control.
    """
    if is_profile:
        return ControlStatus.FROM_PROFILE
    if not status_list:
        return ControlStatus.PROFILE_ERROR
    if SegmentStatus.ERROR in status_list:
        return ControlStatus.PROFILE_ERROR
    if impact == 0:
        return ControlStatus.NOT_APPLICABLE
    if SegmentStatus.FAILED in status_list:
        return ControlStatus.FAILED
    if SegmentStatus.PASSED in status_list:
        return ControlStatus.PASSED
    if SegmentStatus.SKIPPED in status_list:
        return ControlStatus.NOT_REVIEWED

    logger.warning(
        "Control %s matched no status rule (segment statuses: %s); "
        "reporting it as %s",
        control_id or "<unknown>",
        list(status_list),
        ControlStatus.PROFILE_ERROR.value,
    )
    return ControlStatus.PROFILE_ERROR
