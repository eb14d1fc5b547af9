"""
Validation Engine

Checks a FormDocument against the layout invariants and the per-type rule
table. Findings are returned as strings in a ValidationResult; validate()
never mutates its input, never raises, and terminates on cyclic trees.

Checks, in reporting order:
- document: at least one page, page titles, unique page ids
- cycles: path-local DFS by object identity
- per node: unique component ids, fieldId format and uniqueness, type rules
- rows: at least 2 children, no nesting, at most one per sibling list
- conditional display references to nonexistent fields
"""

import logging
import re
from collections.abc import Callable
from datetime import datetime
from typing import Any

from formcanvas.config import Settings, get_settings
from formcanvas.core.constants import (
    CHOICE_TYPES,
    MSG_CIRCULAR_REFERENCE,
    MSG_DEGENERATE_ROW,
    MSG_DUPLICATE_COMPONENT,
    MSG_DUPLICATE_FIELD,
    MSG_DUPLICATE_FIELD_ACROSS_PAGES,
    MSG_DUPLICATE_PAGE,
    MSG_FIELD_ID_FORMAT,
    MSG_MULTIPLE_ROWS,
    MSG_NESTED_ROW,
    MSG_NO_PAGES,
    MSG_NONEXISTENT_REFERENCE,
    MSG_PAGE_TITLE,
    MSG_RULE_FAILED,
    ROW_TYPE,
    TEXT_TYPES,
)
from formcanvas.models.contracts.canvas import CanvasNode, FormDocument
from formcanvas.services.canvas_tree import contains_row, iter_nodes
from formcanvas.services.models import ValidationResult

logger = logging.getLogger(__name__)

Rule = Callable[[CanvasNode], list[str]]
RuleTable = dict[str, list[Rule]]


# =============================================================================
# Prop Accessors
# =============================================================================


def _number(value: Any) -> float | None:
    """Numeric prop value, or None for anything else (bools included)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def _date(value: Any) -> datetime | None:
    if not isinstance(value, str):
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


# =============================================================================
# Type Rules
# =============================================================================


def check_options(node: CanvasNode) -> list[str]:
    """Choice kinds: non-empty options, each labelled, with unique values."""
    options = node.props.get("options")
    if not isinstance(options, list) or not options:
        return ["At least one option is required"]

    errors = []
    values: list[Any] = []
    for number, option in enumerate(options, start=1):
        option = option if isinstance(option, dict) else {}
        label = option.get("label")
        if not isinstance(label, str) or not label.strip():
            errors.append(f"Option {number} must have a label")
        value = option.get("value")
        if value is None:
            errors.append(f"Option {number} must have a value")
            continue
        if value in values:
            if "Option values must be unique" not in errors:
                errors.append("Option values must be unique")
        else:
            values.append(value)
    return errors


def check_number_range(node: CanvasNode) -> list[str]:
    errors = []
    minimum = _number(node.props.get("min"))
    maximum = _number(node.props.get("max"))
    if minimum is not None and maximum is not None and minimum >= maximum:
        errors.append("Minimum value must be less than maximum value")
    step = _number(node.props.get("step"))
    if step is not None and step <= 0:
        errors.append("Step value must be greater than 0")
    return errors


def check_date_range(node: CanvasNode) -> list[str]:
    minimum = _date(node.props.get("min"))
    maximum = _date(node.props.get("max"))
    if minimum is None or maximum is None:
        return []
    # Naive and aware datetimes do not compare
    if (minimum.tzinfo is None) != (maximum.tzinfo is None):
        return []
    if minimum >= maximum:
        return ["Minimum date must be before maximum date"]
    return []


def check_length_range(node: CanvasNode) -> list[str]:
    minimum = _number(node.props.get("minLength"))
    maximum = _number(node.props.get("maxLength"))
    if minimum is not None and maximum is not None and minimum >= maximum:
        return ["Minimum length must be less than maximum length"]
    return []


def row_capacity_rule(max_row_children: int | None) -> Rule:
    """Build the row width rule for a given cap (None disables it)."""

    def check_row_capacity(node: CanvasNode) -> list[str]:
        if max_row_children is None or len(node.children or []) <= max_row_children:
            return []
        return [f"Row layout can contain maximum {max_row_children} components"]

    return check_row_capacity


def default_rules(settings: Settings | None = None) -> RuleTable:
    """The default ``type -> [rule]`` table."""
    settings = settings or get_settings()
    rules: RuleTable = {component_type: [check_options] for component_type in CHOICE_TYPES}
    rules.update({component_type: [check_length_range] for component_type in TEXT_TYPES})
    rules["number_input"] = [check_number_range]
    rules["date_picker"] = [check_date_range]
    rules[ROW_TYPE] = [row_capacity_rule(settings.max_row_children)]
    return rules


# =============================================================================
# Structural Checks
# =============================================================================


def has_cycle(nodes: list[CanvasNode], max_depth: int) -> bool:
    """
    Detect a node reachable from itself.

    The visited set is path-local: the same node object under two unrelated
    ancestors is shared structure, not a cycle.
    """

    def _visit(node: CanvasNode, on_path: frozenset[int], depth: int) -> bool:
        if id(node) in on_path:
            return True
        if depth >= max_depth or not node.children:
            return False
        child_path = on_path | {id(node)}
        return any(_visit(child, child_path, depth + 1) for child in node.children)

    return any(_visit(node, frozenset(), 1) for node in nodes)


def _check_rows(siblings: list[CanvasNode], max_depth: int) -> list[str]:
    """Row shape checks for one sibling list and the rows directly in it."""
    errors = []
    rows = [node for node in siblings if node.is_row]
    if len(rows) > 1:
        errors.append(MSG_MULTIPLE_ROWS)
    for row in rows:
        children = row.children or []
        if len(children) < 2:
            errors.append(MSG_DEGENERATE_ROW)
        if any(contains_row(child, max_depth) for child in children):
            errors.append(MSG_NESTED_ROW)
    return errors


def _run_rules(node: CanvasNode, rules: RuleTable) -> list[str]:
    errors = []
    for rule in rules.get(node.type, []):
        try:
            errors.extend(rule(node))
        except Exception as e:
            logger.warning(
                f"Validation rule {getattr(rule, '__name__', rule)!r} failed on '{node.id}': {e}",
                exc_info=True,
            )
            errors.append(MSG_RULE_FAILED.format(component_id=node.id))
    return errors


def _validate_trees(
    trees: list[list[CanvasNode]],
    rules: RuleTable,
    settings: Settings,
) -> list[str]:
    """Tree-level checks over one root sibling list per page."""
    errors = []
    limit = settings.max_tree_depth
    pattern = re.compile(settings.field_id_pattern)

    if any(has_cycle(nodes, limit) for nodes in trees):
        errors.append(MSG_CIRCULAR_REFERENCE)

    component_ids: set[str] = set()
    field_pages: dict[str, int] = {}
    references: list[str] = []

    for page_index, nodes in enumerate(trees):
        errors.extend(_check_rows(nodes, limit))
        for node in iter_nodes(nodes, limit):
            if node.id in component_ids:
                errors.append(MSG_DUPLICATE_COMPONENT.format(component_id=node.id))
            component_ids.add(node.id)

            field_id = node.field_id
            if "fieldId" in node.props and (field_id is None or not pattern.match(field_id)):
                errors.append(MSG_FIELD_ID_FORMAT)
            if field_id is not None:
                if field_id not in field_pages:
                    field_pages[field_id] = page_index
                elif field_pages[field_id] != page_index:
                    errors.append(MSG_DUPLICATE_FIELD_ACROSS_PAGES.format(field_id=field_id))
                else:
                    errors.append(MSG_DUPLICATE_FIELD.format(field_id=field_id))

            if node.conditional_field is not None:
                references.append(node.conditional_field)

            if node.children:
                errors.extend(_check_rows(node.children, limit))

            errors.extend(_run_rules(node, rules))

    for field_id in references:
        if field_id not in field_pages:
            errors.append(MSG_NONEXISTENT_REFERENCE.format(field_id=field_id))

    return errors


# =============================================================================
# Public API
# =============================================================================


def validate(
    document: FormDocument,
    rules: RuleTable | None = None,
    settings: Settings | None = None,
) -> ValidationResult:
    """
    Validate a whole document.

    Args:
        document: The form to check
        rules: Per-type rule table (defaults to default_rules())
        settings: Engine settings (defaults to get_settings())

    Returns:
        ValidationResult; identical messages are reported once, in the order
        they were first found.
    """
    settings = settings or get_settings()
    rules = default_rules(settings) if rules is None else rules

    errors = []
    if not document.pages:
        errors.append(MSG_NO_PAGES)

    page_ids: set[str] = set()
    for number, page in enumerate(document.pages, start=1):
        if not page.title.strip():
            errors.append(MSG_PAGE_TITLE.format(number=number))
        if page.id in page_ids:
            errors.append(MSG_DUPLICATE_PAGE.format(page_id=page.id))
        page_ids.add(page.id)

    errors.extend(_validate_trees([page.components for page in document.pages], rules, settings))
    return _result(errors)


def validate_nodes(
    nodes: list[CanvasNode],
    rules: RuleTable | None = None,
    settings: Settings | None = None,
) -> ValidationResult:
    """Validate a single root sibling list (no page-level checks)."""
    settings = settings or get_settings()
    rules = default_rules(settings) if rules is None else rules
    return _result(_validate_trees([nodes], rules, settings))


def _result(errors: list[str]) -> ValidationResult:
    unique = list(dict.fromkeys(errors))
    if unique:
        logger.debug(f"Validation found {len(unique)} error(s)")
    return ValidationResult(valid=not unique, errors=unique)
