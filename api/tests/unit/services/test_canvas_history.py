"""Unit tests for the bounded undo/redo history."""

from formcanvas.config import Settings
from formcanvas.services.canvas_history import CanvasHistory
from tests.helpers.factories import make_document, make_node, make_page


def snapshot(n: int):
    return make_document(make_page("p1", make_node(f"n{n}")))


class TestCanvasHistory:
    def test_empty_history(self, settings):
        history = CanvasHistory(settings=settings)

        assert history.current is None
        assert not history.can_undo
        assert not history.can_redo
        assert history.undo() is None
        assert history.redo() is None

    def test_undo_and_redo(self, settings):
        first, second, third = snapshot(1), snapshot(2), snapshot(3)
        history = CanvasHistory(first, settings=settings)
        history.record(second)
        history.record(third)

        assert history.undo() is second
        assert history.undo() is first
        assert not history.can_undo
        assert history.redo() is second
        assert history.current is second
        assert history.can_redo

    def test_record_truncates_redo_tail(self, settings):
        history = CanvasHistory(snapshot(1), settings=settings)
        history.record(snapshot(2))
        history.undo()
        history.record(snapshot(3))

        assert not history.can_redo
        assert history.redo() is None

    def test_recording_current_snapshot_is_skipped(self, settings):
        doc = snapshot(1)
        history = CanvasHistory(doc, settings=settings)
        history.record(doc)
        assert len(history) == 1

    def test_oldest_snapshot_evicted(self):
        """The buffer holds history_limit snapshots"""
        history = CanvasHistory(settings=Settings(environment="testing", history_limit=3, _env_file=None))
        docs = [snapshot(i) for i in range(5)]
        for doc in docs:
            history.record(doc)

        assert len(history) == 3
        assert history.undo() is docs[3]
        assert history.undo() is docs[2]
        assert history.undo() is None

    def test_default_limit(self, settings):
        assert CanvasHistory(settings=settings).limit == 50

    def test_clear(self, settings):
        history = CanvasHistory(snapshot(1), settings=settings)
        history.record(snapshot(2))
        history.clear()
        assert history.current is None
        assert not history.can_undo
