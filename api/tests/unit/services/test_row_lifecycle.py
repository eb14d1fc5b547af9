"""Unit tests for row creation, absorption and dissolution."""

from formcanvas.models.enums import DropIntent
from formcanvas.services.canvas_tree import locate
from formcanvas.services.row_lifecycle import cleanup_row, create_row, place_beside
from tests.helpers.factories import ids, make_column, make_node, make_row


def place(tree, target_id, incoming, side, max_row_children=None):
    return place_beside(tree, locate(tree, target_id), incoming, side, max_row_children)


class TestRowCreation:
    def test_left_wraps_incoming_first(self):
        tree = [make_node("a"), make_node("b")]
        result = place(tree, "b", make_node("new"), DropIntent.LEFT)

        assert result[0].id == "a"
        assert result[1].type == "row"
        assert ids(result[1].children) == ["new", "b"]

    def test_right_wraps_target_first(self):
        tree = [make_node("a")]
        result = place(tree, "a", make_node("new"), DropIntent.RIGHT)

        assert len(result) == 1
        assert ids(result[0].children) == ["a", "new"]

    def test_row_created_inside_column(self):
        tree = [make_column("col", make_node("a"))]
        result = place(tree, "a", make_node("new"), DropIntent.LEFT)

        assert result[0].children[0].type == "row"
        assert ids(result[0].children[0].children) == ["new", "a"]

    def test_create_row_helper(self):
        row = create_row([make_node("x"), make_node("y")])
        assert row.type == "row"
        assert row.id.startswith("row_")
        assert ids(row.children) == ["x", "y"]


class TestRowAbsorption:
    def test_target_inside_row_inserts_adjacent(self):
        tree = [make_row("r", make_node("x"), make_node("y"))]

        left = place(tree, "y", make_node("n"), DropIntent.LEFT)
        right = place(tree, "x", make_node("n"), DropIntent.RIGHT)

        assert ids(left[0].children) == ["x", "n", "y"]
        assert ids(right[0].children) == ["x", "n", "y"]
        assert left[0].id == "r"

    def test_target_outside_row_moves_into_existing_row(self):
        """The list never gains a second row"""
        tree = [make_row("r", make_node("x"), make_node("y")), make_node("t")]

        left = place(tree, "t", make_node("n"), DropIntent.LEFT)
        right = place(tree, "t", make_node("n"), DropIntent.RIGHT)

        assert ids(left) == ["r"]
        assert ids(left[0].children) == ["n", "t", "x", "y"]
        assert ids(right[0].children) == ["x", "y", "t", "n"]

    def test_target_is_the_row(self):
        tree = [make_row("r", make_node("x"), make_node("y"))]

        left = place(tree, "r", make_node("n"), DropIntent.LEFT)
        right = place(tree, "r", make_node("n"), DropIntent.RIGHT)

        assert ids(left[0].children) == ["n", "x", "y"]
        assert ids(right[0].children) == ["x", "y", "n"]

    def test_input_tree_untouched(self):
        tree = [make_row("r", make_node("x"), make_node("y"))]
        place(tree, "y", make_node("n"), DropIntent.LEFT)
        assert ids(tree[0].children) == ["x", "y"]


class TestRowRefusals:
    def test_full_row_refuses(self):
        tree = [make_row("r", make_node("a"), make_node("b"))]
        assert place(tree, "a", make_node("n"), DropIntent.LEFT, max_row_children=2) is None

    def test_moving_into_row_needs_room_for_two(self):
        tree = [make_row("r", make_node("a"), make_node("b"), make_node("c")), make_node("t")]
        assert place(tree, "t", make_node("n"), DropIntent.LEFT, max_row_children=4) is None
        assert place(tree, "t", make_node("n"), DropIntent.LEFT, max_row_children=5) is not None

    def test_row_content_never_nests(self):
        tree = [make_node("a")]
        assert place(tree, "a", make_row("r2", make_node("x"), make_node("y")), DropIntent.LEFT) is None
        assert place(tree, "a", make_column("c", make_row("r2")), DropIntent.RIGHT) is None

    def test_target_deep_inside_row_refuses(self):
        tree = [make_row("r", make_column("col", make_node("deep")), make_node("b"))]
        assert place(tree, "deep", make_node("n"), DropIntent.LEFT) is None

    def test_target_holding_a_row_refuses(self):
        tree = [make_column("col", make_row("r", make_node("x"), make_node("y")))]
        assert place(tree, "col", make_node("n"), DropIntent.RIGHT) is None


class TestRowDissolution:
    def test_single_child_replaces_row(self):
        """Scenario: row(x) collapses to x"""
        tree = [make_node("a"), make_row("r", make_node("x"))]
        result = cleanup_row(tree, "r")
        assert ids(result) == ["a", "x"]

    def test_empty_row_is_removed(self):
        tree = [make_node("a"), make_row("r")]
        assert ids(cleanup_row(tree, "r")) == ["a"]

    def test_healthy_row_is_untouched(self):
        tree = [make_row("r", make_node("x"), make_node("y"))]
        assert cleanup_row(tree, "r") is tree

    def test_nested_row_dissolves_in_place(self):
        tree = [make_column("col", make_node("a"), make_row("r", make_node("x")))]
        result = cleanup_row(tree, "r")
        assert ids(result[0].children) == ["a", "x"]

    def test_missing_or_non_row_is_noop(self):
        tree = [make_column("col", make_node("a"))]
        assert cleanup_row(tree, None) is tree
        assert cleanup_row(tree, "missing") is tree
        assert cleanup_row(tree, "col") is tree
