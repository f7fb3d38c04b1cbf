"""
NIST SP 800-53 control parsing, hierarchy and group status aggregation.

This package turns free-form NIST tags into structured controls, organizes
the static control catalog into a per-family hierarchy, and rolls control
statuses up into group statuses for reporting.

Controls:
    parse_nist() parses tags such as "AC-2 (1)" or "SI-4a.2." into
    NistControl values. NistControl supports lineage checks (contains,
    lineage) and numeric-aware lexicographic ordering (local_compare).

Hierarchy:
    get_nist_hierarchy() returns the forest built from the static catalog,
    one root per family (19 including "UM", Unmapped). It is built once,
    on first use, and shared.

Grouping:
    ControlGroupStatus, update_status() and fold_statuses() compute the
    worst status across a group of controls.
"""

from hdfcompat.nist.catalog import (
    ALL_NIST_CONTROL_NUMBERS,
    ALL_NIST_FAMILIES,
    NIST_FAMILIES,
    get_family_name,
)
from hdfcompat.nist.controls import (
    MalformedNistTagError,
    NistControl,
    parse_nist,
    parse_nist_strict,
    sort_controls,
)
from hdfcompat.nist.grouping import (
    ControlGroupStatus,
    compare_statuses,
    fold_statuses,
    status_for_node,
    summarize_by_family,
    update_status,
)
from hdfcompat.nist.hierarchy import (
    InvalidCatalogEntryError,
    NistHierarchy,
    NistHierarchyNode,
    build_nist_hierarchy,
    find_node,
    get_nist_hierarchy,
    get_statistics,
    iter_nodes,
)

__all__ = [
    # Catalog
    "NIST_FAMILIES",
    "ALL_NIST_FAMILIES",
    "ALL_NIST_CONTROL_NUMBERS",
    "get_family_name",
    # Controls
    "NistControl",
    "MalformedNistTagError",
    "parse_nist",
    "parse_nist_strict",
    "sort_controls",
    # Hierarchy
    "NistHierarchy",
    "NistHierarchyNode",
    "InvalidCatalogEntryError",
    "build_nist_hierarchy",
    "get_nist_hierarchy",
    "iter_nodes",
    "find_node",
    "get_statistics",
    # Grouping
    "ControlGroupStatus",
    "compare_statuses",
    "update_status",
    "fold_statuses",
    "summarize_by_family",
    "status_for_node",
]
