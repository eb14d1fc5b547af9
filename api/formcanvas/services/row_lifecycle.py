"""
Row Lifecycle

Maintains the row-container invariants:

  * **Creation**: LEFT/RIGHT on a bare node whose sibling list holds no row
    wraps the target and the incoming node into a new row in the target's
    slot.
  * **Absorption**: when a row already exists among the relevant siblings the
    incoming node joins it. A target inside the row gets the node adjacent
    to it; a target outside the row is moved into the row together with the
    incoming node (LEFT prepends, RIGHT appends) so the list never holds two
    rows.
  * **Dissolution**: after a removal a row with one child is replaced by that
    child and an empty row disappears.

Rows never nest, and ``Settings.max_row_children`` caps their width. A
placement violating either returns None and the caller treats it as a no-op.
"""

import logging

from formcanvas.core.constants import ROW_TYPE
from formcanvas.models.contracts.canvas import CanvasNode
from formcanvas.models.enums import DropIntent
from formcanvas.services.canvas_tree import (
    NodePath,
    contains_row,
    locate,
    node_at,
    siblings_at,
    with_siblings,
)
from formcanvas.services.component_factory import create_component

logger = logging.getLogger(__name__)


def _has_room(row: CanvasNode, extra: int, max_row_children: int | None) -> bool:
    if max_row_children is None:
        return True
    return len(row.children or []) + extra <= max_row_children


def _pair(incoming: CanvasNode, target: CanvasNode, side: DropIntent) -> list[CanvasNode]:
    return [incoming, target] if side == DropIntent.LEFT else [target, incoming]


def create_row(children: list[CanvasNode]) -> CanvasNode:
    """Build a new row container around ``children``."""
    return create_component(ROW_TYPE).model_copy(update={"children": children})


def place_beside(
    nodes: list[CanvasNode],
    target_path: NodePath,
    incoming: CanvasNode,
    side: DropIntent,
    max_row_children: int | None = None,
) -> list[CanvasNode] | None:
    """
    Place ``incoming`` to the LEFT or RIGHT of the node at ``target_path``.

    Args:
        nodes: Root sibling list
        target_path: Index path of the drop target (from locate())
        incoming: New or lifted node; must not already be in ``nodes``
        side: DropIntent.LEFT or DropIntent.RIGHT
        max_row_children: Row width cap (None = unlimited)

    Returns:
        The new root list, or None when the placement is refused.
    """
    if contains_row(incoming):
        logger.debug(f"Refusing to nest row content '{incoming.id}' inside a row")
        return None

    parent_path, index = target_path[:-1], target_path[-1]
    siblings = siblings_at(nodes, parent_path)
    target = siblings[index]
    parent = node_at(nodes, parent_path) if parent_path else None

    # Target is a child of a row: insert next to it inside the row
    if parent is not None and parent.is_row:
        if not _has_room(parent, 1, max_row_children):
            logger.debug(f"Row '{parent.id}' is full; drop ignored")
            return None
        insert_at = index if side == DropIntent.LEFT else index + 1
        new_children = [*siblings[:insert_at], incoming, *siblings[insert_at:]]
        logger.debug(f"Absorbed '{incoming.id}' into row '{parent.id}' at {insert_at}")
        return with_siblings(nodes, parent_path, new_children)

    # Deeper inside a row (e.g. row > column > target): a row here would nest
    if any(node_at(nodes, target_path[:depth]).is_row for depth in range(1, len(parent_path))):
        logger.debug(f"Target '{target.id}' is nested inside a row; drop ignored")
        return None

    # Target is the row itself: extend it at the matching end
    if target.is_row:
        if not _has_room(target, 1, max_row_children):
            logger.debug(f"Row '{target.id}' is full; drop ignored")
            return None
        children = target.children or []
        new_children = [incoming, *children] if side == DropIntent.LEFT else [*children, incoming]
        return with_siblings(nodes, target_path, new_children)

    if contains_row(target):
        logger.debug(f"Target '{target.id}' holds a row; drop ignored")
        return None

    # Another row among the siblings: move the target into it (max one row)
    row_index = next((i for i, node in enumerate(siblings) if node.is_row), None)
    if row_index is not None:
        row = siblings[row_index]
        if not _has_room(row, 2, max_row_children):
            logger.debug(f"Row '{row.id}' is full; drop ignored")
            return None
        pair = _pair(incoming, target, side)
        row_children = row.children or []
        new_row = row.model_copy(
            update={"children": [*pair, *row_children] if side == DropIntent.LEFT else [*row_children, *pair]}
        )
        new_siblings = [
            new_row if i == row_index else node
            for i, node in enumerate(siblings)
            if i != index
        ]
        logger.debug(f"Moved target '{target.id}' into existing row '{row.id}'")
        return with_siblings(nodes, parent_path, new_siblings)

    # No row yet: create one in the target's slot
    row = create_row(_pair(incoming, target, side))
    new_siblings = list(siblings)
    new_siblings[index] = row
    logger.debug(f"Created row '{row.id}' around '{target.id}'")
    return with_siblings(nodes, parent_path, new_siblings)


def cleanup_row(nodes: list[CanvasNode], row_id: str | None) -> list[CanvasNode]:
    """
    Dissolve a degenerate row after a removal.

    One remaining child replaces the row, zero children remove it, two or more
    leave the tree untouched (the input list is returned as-is).
    """
    row_path = locate(nodes, row_id)
    if row_path is None:
        return nodes
    row = node_at(nodes, row_path)
    children = row.children or []
    if not row.is_row or len(children) >= 2:
        return nodes

    parent_path, index = row_path[:-1], row_path[-1]
    new_siblings = list(siblings_at(nodes, parent_path))
    if children:
        new_siblings[index] = children[0]
        logger.debug(f"Dissolved row '{row.id}' into '{children[0].id}'")
    else:
        del new_siblings[index]
        logger.debug(f"Removed empty row '{row.id}'")
    return with_siblings(nodes, parent_path, new_siblings)
