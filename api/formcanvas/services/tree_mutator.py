"""
Tree Mutator

Pure rewrites of one root sibling list, each parameterized by a DropIntent
and a target node id:

- insert_new: create a component (palette drop) and place it
- move_existing: lift a node and place it elsewhere (canvas drop)
- remove: drop a node, dissolving its row if that leaves it degenerate
- update_props / duplicate: property edits and cloning from the side panel

Every operation returns a MutationResult. Structural no-ops (missing target,
self-move, moving a node under its own descendant, full row, nested row,
a second row in one sibling list, a bare row from the palette) return the
*same* list object with ``changed=False``; they are expected and never raise.
"""

import logging
from typing import Any

from formcanvas.config import Settings, get_settings
from formcanvas.core.constants import ROW_TYPE
from formcanvas.models.contracts.canvas import CanvasNode
from formcanvas.models.enums import DropIntent
from formcanvas.services.canvas_tree import (
    contains_row,
    is_descendant,
    locate,
    node_at,
    siblings_at,
    with_siblings,
)
from formcanvas.services.component_factory import (
    clone_component,
    create_component,
    is_supported_type,
)
from formcanvas.services.models import MutationResult
from formcanvas.services.row_lifecycle import cleanup_row, place_beside

logger = logging.getLogger(__name__)


def _unchanged(nodes: list[CanvasNode]) -> MutationResult:
    return MutationResult(nodes=nodes, selected_id=None, changed=False)


def _has_row(siblings: list[CanvasNode]) -> bool:
    return any(node.is_row for node in siblings)


def coerce_intent(intent: DropIntent | str) -> DropIntent | None:
    """Accept enum members or their string values; None for anything else."""
    try:
        return DropIntent(intent)
    except ValueError:
        logger.warning(f"Unknown drop intent: {intent!r}")
        return None


# =============================================================================
# Building Blocks
# =============================================================================


def detach(
    nodes: list[CanvasNode],
    node_id: str,
    settings: Settings | None = None,
) -> tuple[list[CanvasNode], CanvasNode | None, str | None]:
    """
    Lift a node out of its sibling list without any row cleanup.

    Returns:
        (new root list, detached node, id of the row it was lifted from).
        When the node is absent the input list is returned with (None, None).
    """
    settings = settings or get_settings()
    path = locate(nodes, node_id, settings.max_tree_depth)
    if path is None:
        return nodes, None, None

    parent_path = path[:-1]
    parent = node_at(nodes, parent_path) if parent_path else None
    siblings = list(siblings_at(nodes, parent_path))
    node = siblings.pop(path[-1])
    former_row_id = parent.id if parent is not None and parent.is_row else None
    return with_siblings(nodes, parent_path, siblings), node, former_row_id


def place(
    nodes: list[CanvasNode],
    node: CanvasNode,
    target_id: str | None,
    intent: DropIntent,
    settings: Settings | None = None,
) -> list[CanvasNode] | None:
    """
    Place a node that is not yet in ``nodes`` relative to ``target_id``.

    Returns:
        The new root list, or None when the placement is refused.
    """
    settings = settings or get_settings()

    if intent == DropIntent.APPEND_TO_CANVAS_END:
        if node.is_row and _has_row(nodes):
            logger.debug(f"Canvas already holds a row; append of row '{node.id}' ignored")
            return None
        return [*nodes, node]

    path = locate(nodes, target_id, settings.max_tree_depth)
    if path is None:
        logger.debug(f"Drop target '{target_id}' not found")
        return None

    if intent.is_horizontal:
        return place_beside(nodes, path, node, intent, settings.max_row_children)

    parent_path = path[:-1]
    inside_row = any(
        node_at(nodes, parent_path[:depth]).is_row for depth in range(1, len(parent_path) + 1)
    )
    if inside_row and contains_row(node):
        logger.debug(f"Refusing to nest row content '{node.id}' inside a row")
        return None

    parent = node_at(nodes, parent_path) if parent_path else None
    if parent is not None and parent.is_row:
        cap = settings.max_row_children
        if cap is not None and len(parent.children or []) + 1 > cap:
            logger.debug(f"Row '{parent.id}' is full; drop ignored")
            return None

    siblings = siblings_at(nodes, parent_path)
    if node.is_row and _has_row(siblings):
        logger.debug(f"Target list already holds a row; drop of row '{node.id}' ignored")
        return None

    insert_at = path[-1] if intent == DropIntent.BEFORE else path[-1] + 1
    return with_siblings(
        nodes, parent_path, [*siblings[:insert_at], node, *siblings[insert_at:]]
    )


# =============================================================================
# Public Operations
# =============================================================================


def insert_new(
    nodes: list[CanvasNode],
    component_type: str,
    target_id: str | None,
    intent: DropIntent | str,
    settings: Settings | None = None,
) -> MutationResult:
    """
    Create a component and place it relative to ``target_id``.

    ``target_id`` is ignored for APPEND_TO_CANVAS_END. The new node becomes
    the selection.
    """
    settings = settings or get_settings()
    drop_intent = coerce_intent(intent)
    if drop_intent is None:
        return _unchanged(nodes)

    component_type = getattr(component_type, "value", component_type)
    if not is_supported_type(component_type):
        logger.warning(f"Ignoring drop of unsupported component type '{component_type}'")
        return _unchanged(nodes)

    # Rows only come into being around two nodes (LEFT/RIGHT drops)
    if component_type == ROW_TYPE:
        logger.debug("Ignoring drop of a bare row; rows are created by LEFT/RIGHT drops")
        return _unchanged(nodes)

    if drop_intent != DropIntent.APPEND_TO_CANVAS_END and (
        locate(nodes, target_id, settings.max_tree_depth) is None
    ):
        logger.debug(f"Drop target '{target_id}' not found; insert ignored")
        return _unchanged(nodes)

    node = create_component(component_type)
    placed = place(nodes, node, target_id, drop_intent, settings)
    if placed is None:
        return _unchanged(nodes)

    logger.info(f"Inserted component '{node.id}' (type={component_type}, intent={drop_intent.value})")
    return MutationResult(nodes=placed, selected_id=node.id)


def move_existing(
    nodes: list[CanvasNode],
    source_id: str,
    target_id: str | None,
    intent: DropIntent | str,
    settings: Settings | None = None,
) -> MutationResult:
    """
    Move an existing node relative to ``target_id``.

    1. Refuse self-moves, missing nodes and moves under the source's own subtree
    2. Lift the source (its former row is NOT dissolved yet)
    3. Place it as insert_new would
    4. Run row cleanup once on the former row
    """
    settings = settings or get_settings()
    drop_intent = coerce_intent(intent)
    if drop_intent is None or source_id == target_id:
        return _unchanged(nodes)

    source_path = locate(nodes, source_id, settings.max_tree_depth)
    if source_path is None:
        logger.debug(f"Move source '{source_id}' not found")
        return _unchanged(nodes)

    if drop_intent != DropIntent.APPEND_TO_CANVAS_END:
        if locate(nodes, target_id, settings.max_tree_depth) is None:
            logger.debug(f"Move target '{target_id}' not found")
            return _unchanged(nodes)
        if is_descendant(node_at(nodes, source_path), target_id, settings.max_tree_depth):
            logger.debug(f"Cannot move '{source_id}' under its own descendant '{target_id}'")
            return _unchanged(nodes)

    detached, node, former_row_id = detach(nodes, source_id, settings)
    placed = place(detached, node, target_id, drop_intent, settings)
    if placed is None:
        return _unchanged(nodes)

    logger.info(f"Moved component '{source_id}' ({drop_intent.value} '{target_id}')")
    return MutationResult(nodes=cleanup_row(placed, former_row_id), selected_id=source_id)


def remove(
    nodes: list[CanvasNode],
    node_id: str,
    settings: Settings | None = None,
) -> MutationResult:
    """
    Remove a node (and its subtree) from whichever sibling list holds it.

    The caller clears its selection if it pointed at ``node_id``; the id is
    guaranteed to be gone from the returned tree.
    """
    detached, node, former_row_id = detach(nodes, node_id, settings)
    if node is None:
        logger.debug(f"Remove target '{node_id}' not found")
        return _unchanged(nodes)

    logger.info(f"Removed component '{node_id}'")
    return MutationResult(nodes=cleanup_row(detached, former_row_id), selected_id=None)


def update_props(
    nodes: list[CanvasNode],
    node_id: str,
    updates: dict[str, Any],
    settings: Settings | None = None,
) -> MutationResult:
    """Shallow-merge ``updates`` into a node's props; id and type never change."""
    settings = settings or get_settings()
    path = locate(nodes, node_id, settings.max_tree_depth)
    if path is None:
        return _unchanged(nodes)

    node = node_at(nodes, path)
    updated = node.model_copy(update={"props": {**node.props, **updates}})
    siblings = list(siblings_at(nodes, path[:-1]))
    siblings[path[-1]] = updated
    return MutationResult(nodes=with_siblings(nodes, path[:-1], siblings), selected_id=node_id)


def duplicate(
    nodes: list[CanvasNode],
    node_id: str,
    settings: Settings | None = None,
) -> MutationResult:
    """
    Clone a node (fresh ids and fieldIds) right after the original.

    Rows are not duplicated: the copy would be a second row in the same
    sibling list.
    """
    settings = settings or get_settings()
    path = locate(nodes, node_id, settings.max_tree_depth)
    if path is None:
        return _unchanged(nodes)

    original = node_at(nodes, path)
    if contains_row(original, settings.max_tree_depth):
        logger.debug(f"Refusing to duplicate row content '{node_id}'")
        return _unchanged(nodes)

    clone = clone_component(original)
    placed = place(nodes, clone, node_id, DropIntent.AFTER, settings)
    if placed is None:
        return _unchanged(nodes)

    logger.info(f"Duplicated component '{node_id}' as '{clone.id}'")
    return MutationResult(nodes=placed, selected_id=clone.id)
