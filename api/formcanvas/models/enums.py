"""
Enumeration types used across the engine.
"""

from enum import Enum


class DropIntent(str, Enum):
    """Classified meaning of a drag-and-drop gesture"""
    BEFORE = "BEFORE"
    AFTER = "AFTER"
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    APPEND_TO_CANVAS_END = "APPEND_TO_CANVAS_END"

    @property
    def is_horizontal(self) -> bool:
        return self in (DropIntent.LEFT, DropIntent.RIGHT)


class DragSource(str, Enum):
    """Where a drag started"""
    PALETTE = "palette"
    CANVAS = "canvas"


class ComponentType(str, Enum):
    """Component kinds offered by the palette"""
    TEXT_INPUT = "text_input"
    EMAIL_INPUT = "email_input"
    NUMBER_INPUT = "number_input"
    TEXTAREA = "textarea"
    SELECT = "select"
    MULTI_SELECT = "multi_select"
    RADIO_GROUP = "radio_group"
    CHECKBOX = "checkbox"
    DATE_PICKER = "date_picker"
    FILE_UPLOAD = "file_upload"
    SIGNATURE = "signature"
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    BUTTON = "button"
    DIVIDER = "divider"
    SECTION_DIVIDER = "section_divider"
    ROW = "row"
    COLUMN = "column"
