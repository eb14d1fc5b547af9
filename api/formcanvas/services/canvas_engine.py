"""
Canvas Engine

Facade over the classifier, mutator and validator for a multi-page
FormDocument. The engine is stateless between calls: it holds only its
settings and validation rule table, and the host threads the document
through every operation.

Usage:
    engine = CanvasEngine()
    outcome = engine.apply_drop(document, request)
    if outcome.changed:
        document = outcome.document
"""

import logging
from typing import Any

from formcanvas.config import Settings, get_settings
from formcanvas.models.contracts.canvas import (
    CanvasNode,
    DropRequest,
    FormDocument,
    Point,
    Rect,
)
from formcanvas.models.enums import DragSource, DropIntent
from formcanvas.services import canvas_tree, tree_mutator
from formcanvas.services.models import DocumentResult, DropOutcome, MutationResult, ValidationResult
from formcanvas.services.position_classifier import classify
from formcanvas.services.row_lifecycle import cleanup_row
from formcanvas.services.validation_engine import RuleTable, default_rules, validate

logger = logging.getLogger(__name__)


class CanvasEngine:
    """Applies drops and edits to a FormDocument and validates the result."""

    def __init__(self, settings: Settings | None = None, rules: RuleTable | None = None):
        self.settings = settings or get_settings()
        self.rules = rules if rules is not None else default_rules(self.settings)

    # =========================================================================
    # Lookup
    # =========================================================================

    def _page_of(self, document: FormDocument, node_id: str | None) -> int | None:
        for index, page in enumerate(document.pages):
            if canvas_tree.locate(page.components, node_id, self.settings.max_tree_depth) is not None:
                return index
        return None

    def find_node(self, document: FormDocument, node_id: str) -> CanvasNode | None:
        """Find a node on any page."""
        page_index = self._page_of(document, node_id)
        if page_index is None:
            return None
        return canvas_tree.find_node(
            document.pages[page_index].components, node_id, self.settings.max_tree_depth
        )

    def find_parent_row(self, document: FormDocument, node_id: str) -> CanvasNode | None:
        """Nearest row enclosing a node, or None."""
        page_index = self._page_of(document, node_id)
        if page_index is None:
            return None
        return canvas_tree.find_parent_row(
            document.pages[page_index].components, node_id, self.settings.max_tree_depth
        )

    def path_to_node(self, document: FormDocument, node_id: str) -> list[str]:
        """Ids from the page root down to the node (inclusive); empty if absent."""
        page_index = self._page_of(document, node_id)
        if page_index is None:
            return []
        return canvas_tree.path_to_node(
            document.pages[page_index].components, node_id, self.settings.max_tree_depth
        )

    # =========================================================================
    # Classification & Validation
    # =========================================================================

    def classify_drop(
        self,
        pointer: Point,
        target_rect: Rect | None,
        drag_source: DragSource | str = DragSource.PALETTE,
        is_empty_canvas_gap: bool = False,
    ) -> DropIntent:
        return classify(pointer, target_rect, drag_source, is_empty_canvas_gap, self.settings)

    def validate(self, document: FormDocument) -> ValidationResult:
        return validate(document, self.rules, self.settings)

    # =========================================================================
    # Mutations
    # =========================================================================

    def _target_page(self, document: FormDocument, target_id: str | None, intent: DropIntent) -> int | None:
        if intent == DropIntent.APPEND_TO_CANVAS_END:
            return document.active_page_index()
        return self._page_of(document, target_id)

    def _apply(self, document: FormDocument, page_index: int, result: MutationResult) -> DocumentResult:
        if not result.changed:
            return DocumentResult(document=document, selected_id=None, changed=False)
        return DocumentResult(
            document=document.with_page_components(page_index, result.nodes),
            selected_id=result.selected_id,
        )

    def insert_new(
        self,
        document: FormDocument,
        component_type: str,
        target_id: str | None,
        intent: DropIntent | str,
    ) -> DocumentResult:
        """Create a component; APPEND_TO_CANVAS_END lands on the active page."""
        drop_intent = tree_mutator.coerce_intent(intent)
        page_index = None if drop_intent is None else self._target_page(document, target_id, drop_intent)
        if page_index is None:
            logger.debug(f"No page for insert at '{target_id}' ({intent})")
            return DocumentResult(document=document, selected_id=None, changed=False)

        result = tree_mutator.insert_new(
            document.pages[page_index].components, component_type, target_id, drop_intent, self.settings
        )
        return self._apply(document, page_index, result)

    def move_existing(
        self,
        document: FormDocument,
        source_id: str,
        target_id: str | None,
        intent: DropIntent | str,
    ) -> DocumentResult:
        """
        Move a node, possibly to another page.

        Within a page this is TreeMutator.move_existing. Across pages the
        source is detached from its page, placed on the target page and its
        former row cleaned up afterwards.
        """
        unchanged = DocumentResult(document=document, selected_id=None, changed=False)
        drop_intent = tree_mutator.coerce_intent(intent)
        if drop_intent is None or source_id == target_id:
            return unchanged

        source_page = self._page_of(document, source_id)
        target_page = self._target_page(document, target_id, drop_intent)
        if source_page is None or target_page is None:
            logger.debug(f"Move of '{source_id}' to '{target_id}' has no page; ignored")
            return unchanged

        if source_page == target_page:
            result = tree_mutator.move_existing(
                document.pages[source_page].components, source_id, target_id, drop_intent, self.settings
            )
            return self._apply(document, source_page, result)

        detached, node, former_row_id = tree_mutator.detach(
            document.pages[source_page].components, source_id, self.settings
        )
        placed = tree_mutator.place(
            document.pages[target_page].components, node, target_id, drop_intent, self.settings
        )
        if placed is None:
            return unchanged

        updated = document.with_page_components(source_page, cleanup_row(detached, former_row_id))
        updated = updated.with_page_components(target_page, placed)
        logger.info(
            f"Moved component '{source_id}' from page '{document.pages[source_page].id}' "
            f"to page '{document.pages[target_page].id}'"
        )
        return DocumentResult(document=updated, selected_id=source_id)

    def remove(self, document: FormDocument, node_id: str) -> DocumentResult:
        page_index = self._page_of(document, node_id)
        if page_index is None:
            return DocumentResult(document=document, selected_id=None, changed=False)
        result = tree_mutator.remove(document.pages[page_index].components, node_id, self.settings)
        return self._apply(document, page_index, result)

    def update_props(self, document: FormDocument, node_id: str, updates: dict[str, Any]) -> DocumentResult:
        page_index = self._page_of(document, node_id)
        if page_index is None:
            return DocumentResult(document=document, selected_id=None, changed=False)
        result = tree_mutator.update_props(
            document.pages[page_index].components, node_id, updates, self.settings
        )
        return self._apply(document, page_index, result)

    def duplicate(self, document: FormDocument, node_id: str) -> DocumentResult:
        page_index = self._page_of(document, node_id)
        if page_index is None:
            return DocumentResult(document=document, selected_id=None, changed=False)
        result = tree_mutator.duplicate(document.pages[page_index].components, node_id, self.settings)
        return self._apply(document, page_index, result)

    # =========================================================================
    # Drop Pipeline
    # =========================================================================

    def apply_drop(self, document: FormDocument, request: DropRequest) -> DropOutcome:
        """
        Classify a drop, apply the palette or canvas branch, then validate.

        The returned document is the input document when the drop was a
        structural no-op; validation always runs on the returned document.
        """
        intent = self.classify_drop(
            request.pointer,
            request.target_rect,
            request.drag_source,
            request.is_empty_canvas_gap,
        )

        if request.drag_source == DragSource.PALETTE:
            result = self.insert_new(document, request.component_type, request.target_id, intent)
        else:
            result = self.move_existing(document, request.source_id, request.target_id, intent)

        validation = self.validate(result.document)
        if not validation.valid:
            logger.debug(f"Drop left {len(validation.errors)} validation error(s)")

        return DropOutcome(
            document=result.document,
            intent=intent,
            selected_id=result.selected_id,
            changed=result.changed,
            valid=validation.valid,
            errors=validation.errors,
        )
