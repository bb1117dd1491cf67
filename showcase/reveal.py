"""Reveal scheduling: staggered entrance timing and once-only visibility triggers.

Every visual unit gets a stagger index within its rendering context and a
delay of ``base_delay + index * step`` for its kind. Eager units fire when the
view mounts. Lazy units fire the first time the viewport reports them visible
and are then deregistered, so scrolling away and back never replays them.
A lazy unit that is never seen stays pending.

Child units (an image inside a card, the bullets and chips of a card) do not
watch the viewport themselves: they fire with their parent.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from showcase.config import RevealConfig, Timing

logger = logging.getLogger(__name__)


class UnitKind(str, Enum):
    HERO = "hero"
    SECTION = "section"
    CARD = "card"
    MEDIA = "media"
    BULLET = "bullet"
    CHIP = "chip"


class Regime(str, Enum):
    EAGER = "eager"
    LAZY = "lazy"


class RevealPhase(str, Enum):
    PENDING = "pending"
    FIRED = "fired"
    DETACHED = "detached"


DEFAULT_REGIME: dict[UnitKind, Regime] = {
    UnitKind.HERO: Regime.EAGER,
    UnitKind.SECTION: Regime.EAGER,
    UnitKind.CARD: Regime.LAZY,
    UnitKind.MEDIA: Regime.LAZY,
    UnitKind.BULLET: Regime.LAZY,
    UnitKind.CHIP: Regime.LAZY,
}


def timing_for(config: RevealConfig, kind: UnitKind) -> Timing:
    return getattr(config, kind.value)


def stagger_delay(timing: Timing, index: int) -> float:
    """Delay in seconds for the unit at ``index`` within its context."""
    if index < 0:
        raise ValueError(f"Stagger index must be >= 0, got {index}")
    return round(timing.base_delay + index * timing.step, 4)


@dataclass
class RevealUnit:
    unit_id: str
    kind: UnitKind
    index: int
    delay: float
    duration: float
    regime: Regime
    parent: str | None = None
    phase: RevealPhase = RevealPhase.PENDING


@dataclass(frozen=True)
class RevealEvent:
    """A unit's entrance animation starting at ``start`` (trigger time + delay)."""
    unit_id: str
    kind: UnitKind
    index: int
    start: float


class Viewport:
    """Scrollable window that signals when observed units intersect it.

    Geometry is in document pixels. ``margin`` shrinks the window on the top
    and bottom edges, so a unit has to be that far inside before it counts.
    Units that were never placed are never visible.
    """

    def __init__(self, height: float, margin: float = 0.0) -> None:
        self.height = height
        self.margin = margin
        self.scroll_top = 0.0
        self._boxes: dict[str, tuple[float, float]] = {}
        self._observers: dict[str, Callable[[], None]] = {}

    def place(self, unit_id: str, top: float, height: float) -> None:
        self._boxes[unit_id] = (top, height)

    def is_visible(self, unit_id: str) -> bool:
        box = self._boxes.get(unit_id)
        if box is None:
            return False
        top, height = box
        window_top = self.scroll_top + self.margin
        window_bottom = self.scroll_top + self.height - self.margin
        return top < window_bottom and top + height > window_top

    def observe(self, unit_id: str, callback: Callable[[], None]) -> None:
        """Register ``callback``; it is invoked at once if the unit is already visible."""
        self._observers[unit_id] = callback
        if self.is_visible(unit_id):
            callback()

    def unobserve(self, unit_id: str) -> None:
        self._observers.pop(unit_id, None)

    def is_observed(self, unit_id: str) -> bool:
        return unit_id in self._observers

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    @property
    def document_height(self) -> float:
        return max((top + h for top, h in self._boxes.values()), default=0.0)

    def scroll_to(self, y: float) -> None:
        self.scroll_top = max(0.0, y)
        self._emit()

    def _emit(self) -> None:
        # Callbacks may unobserve while we iterate.
        for unit_id, callback in list(self._observers.items()):
            if unit_id in self._observers and self.is_visible(unit_id):
                callback()


@dataclass
class RevealScheduler:
    """Reveal timeline for one mounted view. Not shared between views."""

    config: RevealConfig
    viewport: Viewport | None = None
    clock: Callable[[], float] = time.monotonic
    events: list[RevealEvent] = field(default_factory=list, init=False)
    _units: dict[str, RevealUnit] = field(default_factory=dict, init=False, repr=False)
    _children: dict[str, list[str]] = field(default_factory=dict, init=False, repr=False)
    _mounted: bool = field(default=False, init=False)
    _unmounted: bool = field(default=False, init=False)

    def register(
        self,
        unit_id: str,
        kind: UnitKind,
        index: int,
        regime: Regime | None = None,
        parent: str | None = None,
    ) -> RevealUnit:
        if self._unmounted:
            raise RuntimeError("Cannot register units on an unmounted view")
        if unit_id in self._units:
            raise ValueError(f"Unit registered twice: {unit_id!r}")

        if parent is not None:
            parent_unit = self._units.get(parent)
            if parent_unit is None:
                raise ValueError(f"Unknown parent unit {parent!r} for {unit_id!r}")
            regime = parent_unit.regime
        elif regime is None:
            regime = DEFAULT_REGIME[kind]

        timing = timing_for(self.config, kind)
        unit = RevealUnit(
            unit_id=unit_id,
            kind=kind,
            index=index,
            delay=stagger_delay(timing, index),
            duration=timing.duration,
            regime=regime,
            parent=parent,
        )
        self._units[unit_id] = unit
        if parent is not None:
            self._children.setdefault(parent, []).append(unit_id)
            parent_unit = self._units[parent]
            if parent_unit.phase is RevealPhase.FIRED:
                self._fire(unit, self.clock())
        elif self._mounted:
            self._activate(unit)
        return unit

    def unit(self, unit_id: str) -> RevealUnit:
        return self._units[unit_id]

    @property
    def units(self) -> list[RevealUnit]:
        return list(self._units.values())

    @property
    def pending(self) -> list[RevealUnit]:
        return [u for u in self._units.values() if u.phase is RevealPhase.PENDING]

    @property
    def mounted(self) -> bool:
        return self._mounted

    def mount(self) -> None:
        """First paint: fire eager units and subscribe lazy ones."""
        if self._mounted or self._unmounted:
            return
        self._mounted = True
        for unit in list(self._units.values()):
            if unit.parent is None:
                self._activate(unit)

    def unmount(self) -> None:
        """Drop every pending subscription; pending units become detached."""
        if self._unmounted:
            return
        for unit in self._units.values():
            if unit.phase is RevealPhase.PENDING:
                if self.viewport is not None and unit.parent is None:
                    self.viewport.unobserve(unit.unit_id)
                unit.phase = RevealPhase.DETACHED
        self._mounted = False
        self._unmounted = True
        logger.debug("Unmounted view with %d unit(s), %d revealed", len(self._units), len(self.events))

    def notify_visible(self, unit_id: str) -> None:
        """Visibility signal for a lazy top-level unit. Ignored unless mounted."""
        unit = self._units.get(unit_id)
        if unit is None:
            raise ValueError(f"Unknown unit {unit_id!r}")
        if not self._mounted or unit.phase is not RevealPhase.PENDING:
            return
        self._fire(unit, self.clock())

    def _activate(self, unit: RevealUnit) -> None:
        if unit.regime is Regime.EAGER:
            self._fire(unit, self.clock())
        elif self.viewport is not None:
            self.viewport.observe(unit.unit_id, lambda uid=unit.unit_id: self.notify_visible(uid))

    def _fire(self, unit: RevealUnit, triggered_at: float) -> None:
        if unit.phase is not RevealPhase.PENDING:
            return
        unit.phase = RevealPhase.FIRED
        if unit.parent is None and self.viewport is not None:
            self.viewport.unobserve(unit.unit_id)
        self.events.append(RevealEvent(
            unit_id=unit.unit_id,
            kind=unit.kind,
            index=unit.index,
            start=round(triggered_at + unit.delay, 4),
        ))
        for child_id in self._children.get(unit.unit_id, []):
            self._fire(self._units[child_id], triggered_at)
