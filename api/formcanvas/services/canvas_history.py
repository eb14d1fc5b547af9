"""
Canvas History

Bounded linear undo/redo over whole-document snapshots. Documents are never
mutated in place by the engine, so a snapshot is just a reference.
"""

import logging
from collections import deque

from formcanvas.config import Settings, get_settings
from formcanvas.models.contracts.canvas import FormDocument

logger = logging.getLogger(__name__)


class CanvasHistory:
    """
    Ring buffer of document snapshots.

    The newest entry is the current document. Recording after an undo drops
    the redo tail; once ``limit`` snapshots are held the oldest is evicted.
    """

    def __init__(self, initial: FormDocument | None = None, settings: Settings | None = None):
        settings = settings or get_settings()
        self.limit = settings.history_limit
        self._past: deque[FormDocument] = deque(maxlen=self.limit)
        self._future: list[FormDocument] = []
        if initial is not None:
            self._past.append(initial)

    @property
    def current(self) -> FormDocument | None:
        return self._past[-1] if self._past else None

    @property
    def can_undo(self) -> bool:
        return len(self._past) > 1

    @property
    def can_redo(self) -> bool:
        return bool(self._future)

    def record(self, document: FormDocument) -> None:
        """Push a new snapshot; a snapshot identical to the current one is skipped."""
        if self._past and self._past[-1] is document:
            return
        self._past.append(document)
        self._future.clear()

    def undo(self) -> FormDocument | None:
        """Step back; returns the now-current snapshot or None."""
        if not self.can_undo:
            return None
        self._future.append(self._past.pop())
        logger.debug(f"Undo ({len(self._past)} snapshot(s) left)")
        return self._past[-1]

    def redo(self) -> FormDocument | None:
        """Step forward; returns the now-current snapshot or None."""
        if not self._future:
            return None
        self._past.append(self._future.pop())
        return self._past[-1]

    def clear(self) -> None:
        self._past.clear()
        self._future.clear()

    def __len__(self) -> int:
        return len(self._past)
