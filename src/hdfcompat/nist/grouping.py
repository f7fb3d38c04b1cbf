"""
Group status aggregation for sets of controls.

A group of controls (a NIST family, a node in the hierarchy, a whole
report) is summarized by its "worst" control status. Statuses have a
natural precedence within a group, lowest first:

    Empty           no controls in the group at all
    From Profile    no run context; anything else is more interesting
    Not Applicable  ran, but the result does not matter
    Not Reviewed    would have mattered, but was skipped deliberately
    No Data         unexpected lack of results, worth more scrutiny
    Passed          a test passed
    Failed          failures are what we are looking for
    Profile Error   something is broken and needs fixing

Folding with update_status() from Empty gives the same result for any
ordering of the same statuses.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import TYPE_CHECKING

from hdfcompat.compat.status import ControlStatus
from hdfcompat.nist.catalog import ALL_NIST_FAMILIES

if TYPE_CHECKING:
    from hdfcompat.compat.wrappers import HDFControl
    from hdfcompat.nist.hierarchy import NistHierarchyNode


class ControlGroupStatus(str, Enum):
    """Status of a group of controls."""

    EMPTY = "Empty"
    FROM_PROFILE = "From Profile"
    NOT_APPLICABLE = "Not Applicable"
    NOT_REVIEWED = "Not Reviewed"
    NO_DATA = "No Data"
    PASSED = "Passed"
    FAILED = "Failed"
    PROFILE_ERROR = "Profile Error"


_PRECEDENCE: dict[str, int] = {
    status.value: rank for rank, status in enumerate(ControlGroupStatus)
}


def compare_statuses(
    a: ControlGroupStatus | ControlStatus,
    b: ControlGroupStatus | ControlStatus,
) -> int:
    """
    Compare two statuses by group precedence.

    Returns:
        Negative if a ranks below b, 0 if equal, positive if a ranks above b.
    """
    return _PRECEDENCE[a.value] - _PRECEDENCE[b.value]


def update_status(
    group: ControlGroupStatus,
    status: ControlGroupStatus | ControlStatus,
) -> ControlGroupStatus:
    """Return the group status after adding a control with the given status."""
    if compare_statuses(status, group) > 0:
        return ControlGroupStatus(status.value)
    return group


def fold_statuses(
    statuses: Iterable[ControlGroupStatus | ControlStatus],
) -> ControlGroupStatus:
    """Fold statuses into a single group status, starting from Empty."""
    group = ControlGroupStatus.EMPTY
    for status in statuses:
        group = update_status(group, status)
    return group


def summarize_by_family(
    controls: Iterable[HDFControl],
) -> dict[str, ControlGroupStatus]:
    """
    Compute the group status of every NIST family.

    A control counts towards each family named in its fixed NIST tags, once
    per family. Families with no controls are Empty.

    Args:
        controls: Normalized controls.

    Returns:
        Mapping of family code to group status, in catalog family order.
    """
    summary = {family: ControlGroupStatus.EMPTY for family in ALL_NIST_FAMILIES}
    for control in controls:
        status = control.status
        for family in {tag.family for tag in control.fixed_nist_tags}:
            if family in summary:
                summary[family] = update_status(summary[family], status)
    return summary


def status_for_node(
    node: NistHierarchyNode,
    controls: Iterable[HDFControl],
) -> ControlGroupStatus:
    """
    Compute the group status of a hierarchy node.

    A control belongs to the node if any of its fixed NIST tags is the
    node's control or a descendant of it.
    """
    return fold_statuses(
        control.status
        for control in controls
        if any(node.control.contains(tag) for tag in control.fixed_nist_tags)
    )
