"""Result types returned by the canvas services."""

from dataclasses import dataclass, field

from formcanvas.models.contracts.canvas import CanvasNode, FormDocument
from formcanvas.models.enums import DropIntent


@dataclass
class MutationResult:
    """Result of a tree rewrite on one root sibling list."""

    nodes: list[CanvasNode]  # Same list object as the input when nothing changed
    selected_id: str | None = None  # Node the UI should select next
    changed: bool = True


@dataclass
class DocumentResult:
    """Result of a tree rewrite on a whole document."""

    document: FormDocument
    selected_id: str | None = None
    changed: bool = True


@dataclass
class ValidationResult:
    """Outcome of ValidationEngine.validate(); errors are data, never raised."""

    valid: bool
    errors: list[str] = field(default_factory=list)


@dataclass
class DropOutcome:
    """Result of CanvasEngine.apply_drop()."""

    document: FormDocument
    intent: DropIntent
    selected_id: str | None
    changed: bool
    valid: bool
    errors: list[str] = field(default_factory=list)
