"""
Engine Constants

Reserved component kinds and the validation messages surfaced to hosts.
"""

# Structural container with creation/absorption/dissolution rules
ROW_TYPE = "row"

# Generic vertical container (no lifecycle rules)
COLUMN_TYPE = "column"

CONTAINER_TYPES = frozenset([ROW_TYPE, COLUMN_TYPE])

# Kinds with per-type validation rules
CHOICE_TYPES = frozenset(["select", "multi_select", "radio_group"])
TEXT_TYPES = frozenset(["text_input", "email_input", "textarea"])

# Validation messages (hosts match on these strings)
MSG_CIRCULAR_REFERENCE = "Circular reference detected in layout components"
MSG_DUPLICATE_FIELD_ACROSS_PAGES = "Duplicate field ID across pages: {field_id}"
MSG_DUPLICATE_FIELD = "Duplicate field ID: {field_id}"
MSG_FIELD_ID_FORMAT = "Field ID must contain only letters, numbers, and underscores"
MSG_NONEXISTENT_REFERENCE = "Conditional logic references nonexistent field: {field_id}"
MSG_NO_PAGES = "Form must have at least one page"
MSG_PAGE_TITLE = "Page {number} must have a title"
MSG_DUPLICATE_PAGE = "Duplicate page ID: {page_id}"
MSG_DUPLICATE_COMPONENT = "Duplicate component ID: {component_id}"
MSG_RULE_FAILED = "Validation rule failed for component {component_id}"
MSG_DEGENERATE_ROW = "Row layout must contain at least 2 components"
MSG_MULTIPLE_ROWS = "Only one row layout is allowed per container"
MSG_NESTED_ROW = "Row layouts cannot be nested"
