"""
Component Factory

Creates new canvas nodes (id, type, default props) for palette drops and
clones existing subtrees for duplication. Used by TreeMutator; the classifier
never touches it.
"""

import copy
import logging
import re
from typing import Any
from uuid import uuid4

from formcanvas.core.constants import CHOICE_TYPES, CONTAINER_TYPES
from formcanvas.core.exceptions import UnsupportedComponentTypeError
from formcanvas.models.contracts.canvas import CanvasNode
from formcanvas.models.enums import ComponentType

logger = logging.getLogger(__name__)


SUPPORTED_TYPES = frozenset(t.value for t in ComponentType)

# Kinds that collect a value and therefore get a fieldId
DATA_TYPES = frozenset(
    [
        "text_input",
        "email_input",
        "number_input",
        "textarea",
        "select",
        "multi_select",
        "radio_group",
        "checkbox",
        "date_picker",
        "file_upload",
        "signature",
    ]
)

DEFAULT_LABELS: dict[str, str] = {
    "text_input": "Text Input",
    "email_input": "Email Address",
    "number_input": "Number",
    "textarea": "Text Area",
    "select": "Select Option",
    "multi_select": "Multi-Select",
    "radio_group": "Radio Group",
    "checkbox": "Checkbox",
    "date_picker": "Date Picker",
    "file_upload": "File Upload",
    "signature": "Digital Signature",
    "heading": "Heading",
    "paragraph": "Paragraph",
    "button": "Button",
    "divider": "Divider",
    "section_divider": "Section Divider",
    "row": "Row Layout",
    "column": "Column Layout",
}

DEFAULT_PLACEHOLDERS: dict[str, str] = {
    "text_input": "Enter text here...",
    "email_input": "Enter email address...",
    "number_input": "Enter number...",
    "textarea": "Enter text here...",
    "select": "Choose an option...",
    "multi_select": "Choose options...",
    "date_picker": "Select date...",
    "file_upload": "Click to upload files...",
    "signature": "Sign here...",
}


def is_supported_type(component_type: str) -> bool:
    """Check whether the factory can build this kind."""
    return component_type in SUPPORTED_TYPES


def generate_id(component_type: str) -> str:
    """Generate a node id; also valid as a fieldId (letters, digits, underscores)."""
    prefix = re.sub(r"[^A-Za-z0-9_]", "_", component_type) or "component"
    return f"{prefix}_{uuid4().hex[:8]}"


def _default_options() -> list[dict[str, str]]:
    return [
        {"label": "Option 1", "value": "option1"},
        {"label": "Option 2", "value": "option2"},
        {"label": "Option 3", "value": "option3"},
    ]


def _default_props(component_type: str) -> dict[str, Any]:
    props: dict[str, Any] = {"label": DEFAULT_LABELS[component_type]}

    if component_type in DATA_TYPES:
        props["fieldId"] = generate_id(component_type)
        props["required"] = False
        if component_type in DEFAULT_PLACEHOLDERS:
            props["placeholder"] = DEFAULT_PLACEHOLDERS[component_type]

    if component_type in CHOICE_TYPES:
        props["options"] = _default_options()
    elif component_type == "textarea":
        props["rows"] = 4
    elif component_type == "file_upload":
        props["accept"] = "*/*"
        props["multiple"] = False
    elif component_type == "heading":
        props["level"] = 2
    elif component_type == "paragraph":
        props["text"] = "Enter paragraph text here..."
    elif component_type == "button":
        props["variant"] = "primary"

    return props


def create_component(component_type: str | ComponentType) -> CanvasNode:
    """
    Create a new node for the requested kind.

    Raises:
        UnsupportedComponentTypeError: If the kind is not in the catalog.
    """
    component_type = getattr(component_type, "value", component_type)
    if not is_supported_type(component_type):
        raise UnsupportedComponentTypeError(component_type)

    node = CanvasNode(
        id=generate_id(component_type),
        type=component_type,
        children=[] if component_type in CONTAINER_TYPES else None,
        props=_default_props(component_type),
    )
    logger.debug(f"Created component '{node.id}' (type={component_type})")
    return node


def clone_component(node: CanvasNode, _on_path: frozenset[int] = frozenset()) -> CanvasNode:
    """
    Deep-copy a subtree with fresh ids and fieldIds.

    The top-level clone's label gets a " (Copy)" suffix. Children already on
    the current path are skipped so a cyclic input still terminates.
    """
    on_path = _on_path | {id(node)}
    props = copy.deepcopy(node.props)
    if node.field_id is not None:
        props["fieldId"] = generate_id(node.type)
    if not _on_path and isinstance(props.get("label"), str):
        props["label"] = f"{props['label']} (Copy)"

    children = None
    if node.children is not None:
        children = [
            clone_component(child, on_path)
            for child in node.children
            if id(child) not in on_path
        ]

    return CanvasNode(
        id=generate_id(node.type),
        type=node.type,
        children=children,
        props=props,
    )
