"""
FormCanvas Models

Pydantic contracts (host-facing data):
    from formcanvas.models import CanvasNode, FormDocument
    from formcanvas.models.contracts.canvas import CanvasNode  # Granular access

Enums:
    from formcanvas.models import DropIntent
    from formcanvas.models.enums import DropIntent
"""

# Pydantic contracts - from contracts/
from formcanvas.models.contracts import *  # noqa: F401, F403

# Enums
from formcanvas.models.enums import (
    ComponentType,
    DragSource,
    DropIntent,
)

__all__ = [
    "CanvasNode",
    "ComponentType",
    "DragSource",
    "DropIntent",
    "DropRequest",
    "FormDocument",
    "FormPage",
    "Point",
    "Rect",
]
