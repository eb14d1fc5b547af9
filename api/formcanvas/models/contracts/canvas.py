"""
Canvas Contract Models

Core types for the form canvas:
- CanvasNode, the single recursive structural entity (leaf widget or container)
- FormPage / FormDocument, the multi-page framing around root sibling lists
- Point / Rect, the resolved drop geometry supplied by the host
- DropRequest, the payload of CanvasEngine.apply_drop()

Props are an opaque payload; only a handful of keys are read, always through
the narrow accessors below so malformed widget data never raises.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from formcanvas.core.constants import CONTAINER_TYPES, ROW_TYPE
from formcanvas.models.enums import DragSource


# -----------------------------------------------------------------------------
# Canvas Node
# -----------------------------------------------------------------------------


class CanvasNode(BaseModel):
    """
    A node in the form's component tree.

    ``children`` is present (possibly empty) only for container kinds and is
    ``None`` for leaves. The engine never mutates a node in place; edits go
    through ``model_copy(update=...)`` so untouched subtrees are shared.
    """

    id: str = Field(description="Unique component identifier (document-wide)")
    type: str = Field(description="Component type string")
    children: list[CanvasNode] | None = Field(
        default=None, description="Child components (containers only)"
    )
    props: dict[str, Any] = Field(
        default_factory=dict, description="Widget-specific props (opaque to the engine)"
    )

    @property
    def is_container(self) -> bool:
        return self.children is not None or self.type in CONTAINER_TYPES

    @property
    def is_row(self) -> bool:
        return self.type == ROW_TYPE

    @property
    def field_id(self) -> str | None:
        """The node's fieldId, or None when absent or not a string."""
        value = self.props.get("fieldId")
        return value if isinstance(value, str) else None

    @property
    def conditional_field(self) -> str | None:
        """Field referenced by ``conditionalDisplay.showWhen.field``, if any."""
        display = self.props.get("conditionalDisplay")
        if not isinstance(display, dict):
            return None
        show_when = display.get("showWhen")
        if not isinstance(show_when, dict):
            return None
        field = show_when.get("field")
        return field if isinstance(field, str) else None


# -----------------------------------------------------------------------------
# Pages & Document
# -----------------------------------------------------------------------------


class FormPage(BaseModel):
    """A page holding one root sibling list."""

    id: str = Field(description="Page identifier")
    title: str = Field(default="", description="Page title shown in the wizard")
    components: list[CanvasNode] = Field(
        default_factory=list, description="Root sibling list of the page"
    )


class FormDocument(BaseModel):
    """The whole form: an ordered sequence of pages."""

    pages: list[FormPage] = Field(default_factory=list, description="Ordered pages")
    active_page_id: str | None = Field(
        default=None, description="Page receiving APPEND_TO_CANVAS_END drops"
    )

    def active_page_index(self) -> int | None:
        """Index of the active page, falling back to the first page."""
        if not self.pages:
            return None
        for index, page in enumerate(self.pages):
            if page.id == self.active_page_id:
                return index
        return 0

    def with_page_components(self, index: int, components: list[CanvasNode]) -> FormDocument:
        """Return a copy of the document with one page's root list replaced."""
        pages = list(self.pages)
        pages[index] = pages[index].model_copy(update={"components": components})
        return self.model_copy(update={"pages": pages})


# -----------------------------------------------------------------------------
# Drop Geometry
# -----------------------------------------------------------------------------


class Point(BaseModel):
    """Pointer coordinates in the host's client space."""

    model_config = ConfigDict(extra="forbid")

    x: float
    y: float


class Rect(BaseModel):
    """Bounding box of the drop target."""

    model_config = ConfigDict(extra="forbid")

    top: float
    left: float
    width: float
    height: float


class DropRequest(BaseModel):
    """A resolved drop gesture handed to CanvasEngine.apply_drop()."""

    model_config = ConfigDict(extra="forbid")

    pointer: Point
    target_rect: Rect | None = Field(
        default=None, description="Target bounding box (unused over the canvas gap)"
    )
    drag_source: DragSource
    is_empty_canvas_gap: bool = Field(
        default=False, description="Pointer is over the canvas background, not a node"
    )
    target_id: str | None = Field(default=None, description="Node under the pointer")
    component_type: str | None = Field(
        default=None, description="Kind to create (palette drags)"
    )
    source_id: str | None = Field(
        default=None, description="Node being moved (canvas drags)"
    )

    @model_validator(mode="after")
    def validate_payload(self):
        """Ensure the payload matches the drag source"""
        if self.drag_source == DragSource.PALETTE and not self.component_type:
            raise ValueError("component_type required for palette drags")
        if self.drag_source == DragSource.CANVAS and not self.source_id:
            raise ValueError("source_id required for canvas drags")
        if not self.is_empty_canvas_gap and self.target_rect is None:
            raise ValueError("target_rect required unless dropping on the canvas gap")
        return self


CanvasNode.model_rebuild()
