"""
NIST SP 800-53 control hierarchy.

Builds a forest with one root per control family from the static catalog.
Each node holds a NistControl and its direct children, so "AC" has "AC-2"
as a child, "AC-2" has "AC-2a." and "AC-2 (1)", and so on.

The build runs in two passes over an index of controls keyed by
NistControl.key():
    1. Register every catalog control. Ancestors that are not (yet) in the
       index get a stub control, which is replaced if the real identifier
       turns up later in the catalog.
    2. Link every control to its parent and freeze the result into
       immutable nodes, children sorted lexicographically.

Because of this, catalog order never affects the resulting tree.

The hierarchy over the static catalog is built once per process, on first
use, and shared by every caller.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass

from hdfcompat.nist.catalog import ALL_NIST_CONTROL_NUMBERS, ALL_NIST_FAMILIES
from hdfcompat.nist.controls import NistControl, parse_nist

logger = logging.getLogger(__name__)


class InvalidCatalogEntryError(Exception):
    """Raised when a catalog identifier cannot be placed in the hierarchy."""

    pass


@dataclass(frozen=True)
class NistHierarchyNode:
    """
    A node in the NIST control hierarchy.

    Attributes:
        control: The control this node represents.
        children: Direct descendants, sorted lexicographically.
    """

    control: NistControl
    children: tuple[NistHierarchyNode, ...] = ()

    @property
    def is_leaf(self) -> bool:
        """Whether this node has no children."""
        return not self.children


NistHierarchy = tuple[NistHierarchyNode, ...]


def build_nist_hierarchy(
    families: Sequence[str],
    catalog: Iterable[str],
) -> NistHierarchy:
    """
    Build a control hierarchy from a family list and an identifier catalog.

    Args:
        families: Family codes, one root is created per code in this order.
        catalog: Fully qualified control identifiers in any order.

    Returns:
        Tuple of root nodes, one per family.

    Raises:
        InvalidCatalogEntryError: If an identifier does not parse or names
            a family that is not in families.
    """
    controls: dict[str, NistControl] = {}
    for family in families:
        controls[family] = NistControl(family, (), family)

    stub_keys: set[str] = set()

    # First pass: register controls, stubbing missing ancestors
    for raw in catalog:
        control = parse_nist(raw)
        if control is None:
            raise InvalidCatalogEntryError(f"Invalid NIST control constant {raw!r}")
        if control.family not in controls:
            raise InvalidCatalogEntryError(
                f"NIST control {raw!r} belongs to unknown family {control.family!r}"
            )

        key = control.key()
        controls[key] = control
        stub_keys.discard(key)

        ancestor = control.parent()
        while ancestor is not None and ancestor.key() not in controls:
            controls[ancestor.key()] = ancestor
            stub_keys.add(ancestor.key())
            ancestor = ancestor.parent()

    # Second pass: link children to parents
    children: dict[str, list[NistControl]] = {key: [] for key in controls}
    for control in controls.values():
        parent = control.parent()
        if parent is not None:
            children[parent.key()].append(control)

    def freeze(control: NistControl) -> NistHierarchyNode:
        kids = sorted(children[control.key()], key=lambda c: c.sort_key())
        return NistHierarchyNode(
            control=control,
            children=tuple(freeze(kid) for kid in kids),
        )

    roots = tuple(freeze(controls[family]) for family in families)

    logger.debug(
        "Built NIST hierarchy: %d roots, %d nodes, %d stubs",
        len(roots),
        len(controls),
        len(stub_keys),
    )
    if stub_keys:
        logger.debug("Stub controls without catalog entry: %s", sorted(stub_keys))

    return roots


def iter_nodes(hierarchy: Iterable[NistHierarchyNode]) -> Iterator[NistHierarchyNode]:
    """Walk the hierarchy depth-first, parents before children."""
    for node in hierarchy:
        yield node
        yield from iter_nodes(node.children)


def find_node(
    control: NistControl,
    hierarchy: Iterable[NistHierarchyNode] | None = None,
) -> NistHierarchyNode | None:
    """
    Find the node for a control.

    Only branches whose control contains the target are searched.

    Args:
        control: Control to look up.
        hierarchy: Hierarchy to search. Defaults to the full hierarchy.

    Returns:
        The matching node, or None if the control is not in the hierarchy.
    """
    if hierarchy is None:
        hierarchy = get_nist_hierarchy()

    for node in hierarchy:
        depth = node.control.lineage(control)
        if depth == 0:
            return node
        if depth > 0:
            return find_node(control, node.children)
    return None


# Process-wide hierarchy over the static catalog
_FULL_HIERARCHY: NistHierarchy | None = None
_HIERARCHY_LOCK = threading.Lock()


def get_nist_hierarchy() -> NistHierarchy:
    """
    Get the full NIST hierarchy, building it on first use.

    The build happens at most once per process; concurrent first callers
    wait for it and all receive the same object.

    Returns:
        Tuple of root nodes, one per family in ALL_NIST_FAMILIES.
    """
    global _FULL_HIERARCHY
    if _FULL_HIERARCHY is None:
        with _HIERARCHY_LOCK:
            if _FULL_HIERARCHY is None:
                hierarchy = build_nist_hierarchy(
                    ALL_NIST_FAMILIES, ALL_NIST_CONTROL_NUMBERS
                )
                logger.info(
                    "NIST hierarchy ready: %d families, %d controls",
                    len(hierarchy),
                    sum(1 for _ in iter_nodes(hierarchy)),
                )
                _FULL_HIERARCHY = hierarchy
    return _FULL_HIERARCHY


def get_statistics() -> dict[str, int]:
    """
    Get statistics about the full hierarchy.

    Returns:
        Dictionary with family, node, leaf and catalog entry counts.
    """
    hierarchy = get_nist_hierarchy()
    nodes = list(iter_nodes(hierarchy))
    return {
        "families": len(hierarchy),
        "nodes": len(nodes),
        "leaves": sum(1 for n in nodes if n.is_leaf),
        "catalog_entries": len(ALL_NIST_CONTROL_NUMBERS),
    }
