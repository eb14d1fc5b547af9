"""
Core Exceptions

Custom exceptions for the canvas layout engine.

Structural no-ops and validation findings are never raised; these exceptions
only guard programming errors at the factory seam.
"""


class UnsupportedComponentTypeError(ValueError):
    """
    Raised when a component is requested for a kind outside the catalog.

    TreeMutator checks ``is_supported_type()`` before calling the factory, so
    drops from the host never surface this exception.

    Usage:
        node = create_component("text_input")
        # Raises UnsupportedComponentTypeError for "carousel"
    """

    def __init__(self, component_type: str):
        self.component_type = component_type
        self.message = f"Unsupported component type: {component_type}"
        super().__init__(self.message)
