"""
Contract tests for canvas models
Tests Pydantic validation rules and the JSON round trip of documents
"""

import pytest
from pydantic import ValidationError

from formcanvas.models import CanvasNode, DropRequest, FormDocument, Point, Rect
from formcanvas.models.enums import DragSource, DropIntent
from tests.helpers.factories import make_document, make_field, make_node, make_page, make_row


class TestCanvasNode:
    def test_leaf_defaults(self):
        node = CanvasNode(id="a", type="text_input")
        assert node.children is None
        assert node.props == {}
        assert not node.is_container

    def test_container_flags(self):
        row = make_row("r")
        assert row.is_row
        assert row.is_container
        assert CanvasNode(id="c", type="column").is_container

    def test_missing_required_fields(self):
        with pytest.raises(ValidationError) as exc_info:
            CanvasNode(type="text_input")

        errors = exc_info.value.errors()
        assert any(e["loc"] == ("id",) and e["type"] == "missing" for e in errors)

    def test_field_id_accessor(self):
        assert make_field("a", "email").field_id == "email"
        assert make_node("a", fieldId=7).field_id is None
        assert make_node("a").field_id is None

    def test_conditional_field_accessor(self):
        node = make_node("a", conditionalDisplay={"showWhen": {"field": "country"}})
        assert node.conditional_field == "country"
        assert make_node("a", conditionalDisplay={"showWhen": {"field": 3}}).conditional_field is None
        assert make_node("a", conditionalDisplay=[]).conditional_field is None


class TestFormDocument:
    def test_json_round_trip(self):
        """id, type, children and props (including fieldId) survive"""
        doc = make_document(
            make_page("p1", make_field("a", label="A"), make_row("r", make_field("x"), make_node("h", "heading"))),
            make_page("p2", make_field("b", options=[{"label": "One", "value": 1}])),
        )
        payload = doc.model_dump(mode="json", exclude_none=True)

        assert "children" not in payload["pages"][0]["components"][0]
        assert FormDocument.model_validate(payload) == doc

    def test_active_page_index(self):
        assert FormDocument().active_page_index() is None
        doc = make_document(make_page("p1"), make_page("p2"), active_page_id="p2")
        assert doc.active_page_index() == 1
        assert doc.model_copy(update={"active_page_id": None}).active_page_index() == 0

    def test_with_page_components(self):
        doc = make_document(make_page("p1", make_node("a")), make_page("p2"))
        updated = doc.with_page_components(1, [make_node("z")])

        assert updated.pages[1].components[0].id == "z"
        assert updated.pages[0] is doc.pages[0]
        assert doc.pages[1].components == []


class TestDropRequest:
    def test_palette_requires_component_type(self):
        with pytest.raises(ValidationError, match="component_type required"):
            DropRequest(pointer=Point(x=0, y=0), drag_source=DragSource.PALETTE, is_empty_canvas_gap=True)

    def test_canvas_requires_source_id(self):
        with pytest.raises(ValidationError, match="source_id required"):
            DropRequest(pointer=Point(x=0, y=0), drag_source="canvas", is_empty_canvas_gap=True)

    def test_rect_required_off_gap(self):
        with pytest.raises(ValidationError, match="target_rect required"):
            DropRequest(pointer=Point(x=0, y=0), drag_source="palette", component_type="heading")

    def test_extra_fields_forbidden(self):
        with pytest.raises(ValidationError):
            Rect(top=0, left=0, width=1, height=1, depth=3)

    def test_valid_request(self):
        request = DropRequest.model_validate(
            {
                "pointer": {"x": 5, "y": 5},
                "target_rect": {"top": 0, "left": 0, "width": 10, "height": 10},
                "drag_source": "canvas",
                "target_id": "a",
                "source_id": "b",
            }
        )
        assert request.drag_source == DragSource.CANVAS
        assert request.target_rect.width == 10


class TestEnums:
    def test_drop_intent_orientation(self):
        assert DropIntent.LEFT.is_horizontal
        assert DropIntent.RIGHT.is_horizontal
        assert not DropIntent.BEFORE.is_horizontal
        assert not DropIntent.APPEND_TO_CANVAS_END.is_horizontal
