"""Image overlay controller: at most one enlarged image open at a time."""

import logging
from dataclasses import dataclass
from enum import Enum

from showcase.layout import has_enlargeable_image
from showcase.models import Record

logger = logging.getLogger(__name__)


class OverlayTarget(str, Enum):
    SCRIM = "scrim"
    IMAGE = "image"


@dataclass(frozen=True)
class OverlayState:
    """``closed`` when ``record`` is None, ``open(record)`` otherwise."""
    record: Record | None = None

    @property
    def is_open(self) -> bool:
        return self.record is not None


CLOSED = OverlayState()


class OverlayController:
    """Two-state machine: closed, or open on exactly one record.

    Holds a reference to the displayed record and nothing else.
    """

    def __init__(self) -> None:
        self._state = CLOSED

    @property
    def state(self) -> OverlayState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state.is_open

    @property
    def record(self) -> Record | None:
        return self._state.record

    def open(self, record: Record) -> None:
        """User activated the image of ``record``. Replaces any open overlay."""
        if not has_enlargeable_image(record):
            raise ValueError(f"Record {record.title!r} has no enlargeable image")
        if self._state.record is not None and self._state.record is not record:
            logger.debug("Overlay switches from %r to %r", self._state.record.title, record.title)
        self._state = OverlayState(record=record)

    def close(self) -> None:
        self._state = CLOSED

    def click(self, target: OverlayTarget) -> None:
        """Clicks on the scrim close; clicks on the enlarged image stay inside it."""
        if target is OverlayTarget.SCRIM:
            self.close()

    def navigate_away(self) -> None:
        self.close()
