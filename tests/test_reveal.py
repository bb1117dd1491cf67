"""Tests for reveal scheduling: stagger delays, eager/lazy regimes, once semantics."""

import pytest
from pydantic import ValidationError

from showcase.config import RevealConfig, Timing
from showcase.reveal import (
    Regime,
    RevealPhase,
    RevealScheduler,
    UnitKind,
    Viewport,
    stagger_delay,
    timing_for,
)


class FakeClock:
    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture()
def clock():
    return FakeClock(10.0)


@pytest.fixture()
def viewport():
    """800px window shrunk by 80px top and bottom."""
    return Viewport(height=800, margin=80)


def _scheduler(viewport, clock, config=None):
    return RevealScheduler(config or RevealConfig(), viewport, clock)


class TestStaggerDelay:
    def test_base_plus_index_times_step(self):
        assert stagger_delay(Timing(base_delay=0.1, step=0.02), 3) == pytest.approx(0.16)

    def test_first_unit_gets_base_delay(self):
        assert stagger_delay(Timing(base_delay=0.15, step=0.1), 0) == pytest.approx(0.15)

    def test_negative_index_rejected(self):
        with pytest.raises(ValueError):
            stagger_delay(Timing(), -1)

    def test_negative_step_rejected(self):
        with pytest.raises(ValidationError):
            Timing(step=-0.1)

    @pytest.mark.parametrize("kind", list(UnitKind))
    def test_monotonic_in_index(self, kind):
        timing = timing_for(RevealConfig(), kind)
        delays = [stagger_delay(timing, i) for i in range(20)]
        assert delays == sorted(delays)

    def test_steps_shrink_from_coarse_to_fine(self):
        config = RevealConfig()
        steps = [config.section.step, config.card.step, config.bullet.step, config.chip.step]
        assert steps == sorted(steps, reverse=True)
        assert config.card.step == pytest.approx(0.1)
        assert config.chip.step == pytest.approx(0.02)


class TestEagerRegime:
    def test_fires_on_mount(self, viewport, clock):
        s = _scheduler(viewport, clock)
        s.register("hero-title", UnitKind.HERO, 0)
        s.register("hero-description", UnitKind.HERO, 1)
        assert s.events == []

        s.mount()
        assert [(e.unit_id, e.start) for e in s.events] == [
            ("hero-title", pytest.approx(10.0)),
            ("hero-description", pytest.approx(10.1)),
        ]

    def test_mount_twice_fires_once(self, viewport, clock):
        s = _scheduler(viewport, clock)
        s.register("hero-title", UnitKind.HERO, 0)
        s.mount()
        s.mount()
        assert len(s.events) == 1

    def test_registered_after_mount_fires_immediately(self, viewport, clock):
        s = _scheduler(viewport, clock)
        s.mount()
        s.register("section-work", UnitKind.SECTION, 0)
        assert s.unit("section-work").phase is RevealPhase.FIRED

    def test_eager_without_viewport(self, clock):
        s = RevealScheduler(RevealConfig(), None, clock)
        s.register("hero-title", UnitKind.HERO, 0)
        s.mount()
        assert len(s.events) == 1


class TestLazyRegime:
    def test_fires_when_scrolled_into_view(self, viewport, clock):
        viewport.place("card-0", top=1000, height=200)
        s = _scheduler(viewport, clock)
        s.register("card-0", UnitKind.CARD, 0)
        s.mount()
        assert s.events == []
        assert viewport.is_observed("card-0")

        clock.now = 12.0
        viewport.scroll_to(400)
        assert [(e.unit_id, e.start) for e in s.events] == [("card-0", pytest.approx(12.0))]

    def test_margin_must_be_crossed(self, viewport, clock):
        # Window at scroll 0 is 80..720; a card starting at 730 is not yet inside.
        viewport.place("card-0", top=730, height=200)
        s = _scheduler(viewport, clock)
        s.register("card-0", UnitKind.CARD, 0)
        s.mount()
        assert s.events == []
        viewport.scroll_to(20)
        assert len(s.events) == 1

    def test_visible_at_mount_fires_at_once(self, viewport, clock):
        viewport.place("card-0", top=100, height=200)
        s = _scheduler(viewport, clock)
        s.register("card-0", UnitKind.CARD, 0)
        s.mount()
        assert len(s.events) == 1

    def test_scrolling_away_and_back_does_not_replay(self, viewport, clock):
        viewport.place("card-0", top=1000, height=200)
        s = _scheduler(viewport, clock)
        s.register("card-0", UnitKind.CARD, 0)
        s.mount()

        viewport.scroll_to(400)
        viewport.scroll_to(0)
        viewport.scroll_to(400)
        viewport.scroll_to(2000)
        viewport.scroll_to(400)
        assert len(s.events) == 1
        assert not viewport.is_observed("card-0")

    def test_signal_twice_reveals_once(self, viewport, clock):
        s = _scheduler(viewport, clock)
        s.register("card-0", UnitKind.CARD, 0)
        s.mount()
        s.notify_visible("card-0")
        s.notify_visible("card-0")
        assert len(s.events) == 1

    def test_signal_before_mount_ignored(self, viewport, clock):
        s = _scheduler(viewport, clock)
        s.register("card-0", UnitKind.CARD, 0)
        s.notify_visible("card-0")
        assert s.events == []
        assert s.unit("card-0").phase is RevealPhase.PENDING

    def test_signal_for_unknown_unit_rejected(self, viewport, clock):
        s = _scheduler(viewport, clock)
        s.mount()
        with pytest.raises(ValueError, match="'card-9'"):
            s.notify_visible("card-9")

    def test_never_visible_stays_pending(self, viewport, clock):
        viewport.place("card-0", top=5000, height=200)
        s = _scheduler(viewport, clock)
        s.register("card-0", UnitKind.CARD, 0)
        s.register("card-unplaced", UnitKind.CARD, 1)
        s.mount()
        viewport.scroll_to(100)
        assert s.events == []
        assert {u.unit_id for u in s.pending} == {"card-0", "card-unplaced"}

    def test_sibling_start_times_non_decreasing(self, viewport, clock):
        for i in range(4):
            viewport.place(f"card-{i}", top=100 + i * 50, height=40)
        s = _scheduler(viewport, clock)
        for i in range(4):
            s.register(f"card-{i}", UnitKind.CARD, i)
        s.mount()
        starts = [e.start for e in s.events]
        assert len(starts) == 4
        assert starts == sorted(starts)

    def test_explicit_regime_overrides_default(self, viewport, clock):
        s = _scheduler(viewport, clock)
        s.register("card-0", UnitKind.CARD, 0, regime=Regime.EAGER)
        s.mount()
        assert len(s.events) == 1


class TestChildUnits:
    def test_children_fire_with_parent(self, viewport, clock):
        viewport.place("card-2", top=1000, height=300)
        s = _scheduler(viewport, clock)
        s.register("card-2", UnitKind.CARD, 2)
        s.register("card-2-media", UnitKind.MEDIA, 2, parent="card-2")
        s.register("card-2-chip-0", UnitKind.CHIP, 0, parent="card-2")
        s.register("card-2-chip-1", UnitKind.CHIP, 1, parent="card-2")
        s.mount()
        assert s.events == []

        viewport.scroll_to(500)
        starts = {e.unit_id: e.start for e in s.events}
        assert starts == {
            "card-2": pytest.approx(10.2),
            "card-2-media": pytest.approx(10.35),
            "card-2-chip-0": pytest.approx(10.1),
            "card-2-chip-1": pytest.approx(10.12),
        }

    def test_children_do_not_observe(self, viewport, clock):
        s = _scheduler(viewport, clock)
        s.register("card-0", UnitKind.CARD, 0)
        s.register("card-0-chip-0", UnitKind.CHIP, 0, parent="card-0")
        s.mount()
        assert viewport.observer_count == 1

    def test_child_inherits_parent_regime(self, viewport, clock):
        s = _scheduler(viewport, clock)
        s.register("hero", UnitKind.HERO, 0)
        child = s.register("hero-chip", UnitKind.CHIP, 0, parent="hero")
        assert child.regime is Regime.EAGER

    def test_unknown_parent_rejected(self, viewport, clock):
        s = _scheduler(viewport, clock)
        with pytest.raises(ValueError, match="Unknown parent"):
            s.register("chip", UnitKind.CHIP, 0, parent="missing")


class TestUnmount:
    def test_unmount_deregisters_pending_observers(self, viewport, clock):
        viewport.place("card-0", top=1000, height=200)
        viewport.place("card-1", top=3000, height=200)
        s = _scheduler(viewport, clock)
        s.register("card-0", UnitKind.CARD, 0)
        s.register("card-1", UnitKind.CARD, 1)
        s.mount()
        assert viewport.observer_count == 2

        s.unmount()
        assert viewport.observer_count == 0
        assert s.unit("card-0").phase is RevealPhase.DETACHED

        viewport.scroll_to(1000)
        viewport.scroll_to(3000)
        assert s.events == []

    def test_fired_units_stay_fired(self, viewport, clock):
        s = _scheduler(viewport, clock)
        s.register("hero-title", UnitKind.HERO, 0)
        s.mount()
        s.unmount()
        assert s.unit("hero-title").phase is RevealPhase.FIRED

    def test_register_after_unmount_rejected(self, viewport, clock):
        s = _scheduler(viewport, clock)
        s.mount()
        s.unmount()
        with pytest.raises(RuntimeError):
            s.register("late", UnitKind.CARD, 0)

    def test_duplicate_unit_rejected(self, viewport, clock):
        s = _scheduler(viewport, clock)
        s.register("card-0", UnitKind.CARD, 0)
        with pytest.raises(ValueError, match="twice"):
            s.register("card-0", UnitKind.CARD, 1)
