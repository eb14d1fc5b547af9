"""
Canvas Tree Helpers

Read-only walks over a root sibling list plus the copy-on-write primitive
used by every rewrite.

Nodes are addressed by index paths: ``(2, 0)`` is the first child of the
third root node. Searches scan each sibling list before descending into
container children, are bounded by ``Settings.max_tree_depth``, and keep a
path-local set of visited nodes so a malformed (cyclic) tree never loops.
"""

from collections.abc import Iterator

from formcanvas.config import get_settings
from formcanvas.models.contracts.canvas import CanvasNode

NodePath = tuple[int, ...]


def _depth_limit(max_depth: int | None) -> int:
    return max_depth if max_depth is not None else get_settings().max_tree_depth


# =============================================================================
# Lookup
# =============================================================================


def locate(
    nodes: list[CanvasNode],
    node_id: str | None,
    max_depth: int | None = None,
) -> NodePath | None:
    """
    Find the index path of a node.

    Siblings at one level are checked before recursing into container
    children, so the shallowest match wins.
    """
    if node_id is None:
        return None
    limit = _depth_limit(max_depth)

    def _search(siblings: list[CanvasNode], prefix: NodePath, on_path: frozenset[int]) -> NodePath | None:
        for index, node in enumerate(siblings):
            if node.id == node_id:
                return prefix + (index,)
        if len(prefix) >= limit:
            return None
        for index, node in enumerate(siblings):
            if node.children and id(node) not in on_path:
                found = _search(node.children, prefix + (index,), on_path | {id(node)})
                if found is not None:
                    return found
        return None

    return _search(nodes, (), frozenset())


def node_at(nodes: list[CanvasNode], path: NodePath) -> CanvasNode:
    """Resolve an index path produced by locate()."""
    node = nodes[path[0]]
    for index in path[1:]:
        node = (node.children or [])[index]
    return node


def siblings_at(nodes: list[CanvasNode], parent_path: NodePath) -> list[CanvasNode]:
    """The sibling list owned by ``parent_path`` (the root list for ``()``)."""
    if not parent_path:
        return nodes
    return node_at(nodes, parent_path).children or []


def with_siblings(
    nodes: list[CanvasNode],
    parent_path: NodePath,
    new_siblings: list[CanvasNode],
) -> list[CanvasNode]:
    """
    Return a new root list with the sibling list at ``parent_path`` replaced.

    Only nodes along the path are copied; every other subtree is shared with
    the input.
    """
    if not parent_path:
        return new_siblings
    index = parent_path[0]
    node = nodes[index]
    updated = node.model_copy(
        update={"children": with_siblings(node.children or [], parent_path[1:], new_siblings)}
    )
    result = list(nodes)
    result[index] = updated
    return result


def find_node(
    nodes: list[CanvasNode],
    node_id: str,
    max_depth: int | None = None,
) -> CanvasNode | None:
    path = locate(nodes, node_id, max_depth)
    return node_at(nodes, path) if path is not None else None


def ancestors(
    nodes: list[CanvasNode],
    node_id: str,
    max_depth: int | None = None,
) -> list[CanvasNode] | None:
    """Ancestors of a node from the root down, or None if it is absent."""
    path = locate(nodes, node_id, max_depth)
    if path is None:
        return None
    return [node_at(nodes, path[:depth]) for depth in range(1, len(path))]


def find_parent_row(
    nodes: list[CanvasNode],
    node_id: str,
    max_depth: int | None = None,
) -> CanvasNode | None:
    """Nearest enclosing row of a node, if any."""
    for ancestor in reversed(ancestors(nodes, node_id, max_depth) or []):
        if ancestor.is_row:
            return ancestor
    return None


def path_to_node(
    nodes: list[CanvasNode],
    node_id: str,
    max_depth: int | None = None,
) -> list[str]:
    """Ids from the root list down to the node; empty if it is absent."""
    path = locate(nodes, node_id, max_depth)
    if path is None:
        return []
    return [node_at(nodes, path[:depth]).id for depth in range(1, len(path) + 1)]


# =============================================================================
# Traversal
# =============================================================================


def iter_nodes(
    nodes: list[CanvasNode],
    max_depth: int | None = None,
) -> Iterator[CanvasNode]:
    """
    Pre-order traversal of a forest.

    A node already on the current path is not descended into again; a node
    shared by two unrelated ancestors is yielded once per occurrence.
    """
    limit = _depth_limit(max_depth)
    stack: list[tuple[CanvasNode, int, frozenset[int]]] = [
        (node, 1, frozenset()) for node in reversed(nodes)
    ]
    while stack:
        node, depth, on_path = stack.pop()
        yield node
        if not node.children or depth >= limit or id(node) in on_path:
            continue
        child_path = on_path | {id(node)}
        for child in reversed(node.children):
            if id(child) not in child_path:
                stack.append((child, depth + 1, child_path))


def is_descendant(
    ancestor: CanvasNode,
    node_id: str,
    max_depth: int | None = None,
) -> bool:
    """Check whether ``node_id`` is reachable below ``ancestor``."""
    if not ancestor.children:
        return False
    return any(node.id == node_id for node in iter_nodes(ancestor.children, max_depth))


def contains_row(node: CanvasNode, max_depth: int | None = None) -> bool:
    """Check whether a subtree is or holds a row container."""
    return node.is_row or any(n.is_row for n in iter_nodes(node.children or [], max_depth))
