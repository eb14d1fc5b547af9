"""
Pydantic contracts exchanged with the host application.
"""

from formcanvas.models.contracts.canvas import (
    CanvasNode,
    DropRequest,
    FormDocument,
    FormPage,
    Point,
    Rect,
)

__all__ = [
    "CanvasNode",
    "DropRequest",
    "FormDocument",
    "FormPage",
    "Point",
    "Rect",
]
