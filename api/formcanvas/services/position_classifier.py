"""
Position Classifier

Maps a pointer position over a drop target to a discrete DropIntent:

    +-------+-----------+-------+
    |       |  BEFORE   |       |
    | LEFT  +-----------+ RIGHT |
    |       |  AFTER    |       |
    +-------+-----------+-------+
      35%       30%        35%

Horizontal bands are tested first. Pure geometry: the classifier knows
nothing about the tree.
"""

import logging
import math

from formcanvas.config import Settings, get_settings
from formcanvas.models.contracts.canvas import Point, Rect
from formcanvas.models.enums import DragSource, DropIntent

logger = logging.getLogger(__name__)


def _fraction(offset: float, extent: float) -> float:
    """Normalize an offset along one axis; degenerate extents map to the centre."""
    if not math.isfinite(extent) or extent <= 0:
        return 0.5
    return offset / extent


def classify(
    pointer: Point,
    target_rect: Rect | None,
    drag_source: DragSource | str = DragSource.PALETTE,
    is_empty_canvas_gap: bool = False,
    settings: Settings | None = None,
) -> DropIntent:
    """
    Classify a drop.

    Args:
        pointer: Pointer position in the same space as ``target_rect``
        target_rect: Bounding box of the node under the pointer
        drag_source: "palette" or "canvas"; does not change the result
        is_empty_canvas_gap: Pointer is over the canvas background
        settings: Threshold overrides (defaults to get_settings())

    Returns:
        The DropIntent. Always returns; never raises.
    """
    if is_empty_canvas_gap or target_rect is None:
        return DropIntent.APPEND_TO_CANVAS_END

    settings = settings or get_settings()

    x_percent = _fraction(pointer.x - target_rect.left, target_rect.width)
    y_percent = _fraction(pointer.y - target_rect.top, target_rect.height)

    if x_percent < settings.drop_left_threshold:
        intent = DropIntent.LEFT
    elif x_percent > settings.drop_right_threshold:
        intent = DropIntent.RIGHT
    elif y_percent < settings.drop_vertical_split:
        intent = DropIntent.BEFORE
    else:
        intent = DropIntent.AFTER

    logger.debug(
        f"Classified {getattr(drag_source, 'value', drag_source)} drop at "
        f"({x_percent:.2f}, {y_percent:.2f}) as {intent.value}"
    )
    return intent
