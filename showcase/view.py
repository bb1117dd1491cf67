"""A mounted page view: one reveal scheduler and one overlay controller, scoped together."""

import logging
from collections.abc import Callable

from showcase.config import RevealConfig
from showcase.models import Layout
from showcase.overlay import OverlayController
from showcase.present import PresentedItem, PresentedPage
from showcase.reveal import RevealScheduler, UnitKind, Viewport

logger = logging.getLogger(__name__)

HERO_UNITS = ("hero-title", "hero-description")

# Rough block heights (px) used to lay a page out on a simulated viewport.
HERO_HEIGHT = 240.0
SECTION_HEADER_HEIGHT = 56.0
SECTION_GAP = 40.0
CARD_GAP = 20.0
CARD_BASE_HEIGHT = 180.0
FEATURED_HEIGHT = 340.0
LINE_HEIGHT = 24.0


class MountedView:
    """Page view from mount to navigation away.

    Registers every presented unit with its own scheduler. Navigating away
    closes the overlay and unmounts the scheduler, which deregisters any
    visibility subscription that has not fired yet.
    """

    def __init__(
        self,
        page: PresentedPage,
        reveal: RevealConfig,
        viewport: Viewport | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self.page = page
        if clock is None:
            self.scheduler = RevealScheduler(reveal, viewport)
        else:
            self.scheduler = RevealScheduler(reveal, viewport, clock)
        self.overlay = OverlayController()
        self._register_units()

    def _register_units(self) -> None:
        s = self.scheduler
        for i, unit_id in enumerate(HERO_UNITS):
            s.register(unit_id, UnitKind.HERO, i)

        for section in self.page.sections:
            s.register(section.unit_id, UnitKind.SECTION, section.index)
            for item in section.items:
                card = item.unit_id
                s.register(card, UnitKind.CARD, item.index)
                if item.enlargeable:
                    s.register(f"{card}-media", UnitKind.MEDIA, item.index, parent=card)
                for slot in item.bullets:
                    s.register(f"{card}-bullet-{slot.index}", UnitKind.BULLET, slot.index, parent=card)
                for slot in item.chips:
                    s.register(f"{card}-chip-{slot.index}", UnitKind.CHIP, slot.index, parent=card)

    def mount(self) -> None:
        self.scheduler.mount()

    def activate_image(self, item: PresentedItem) -> None:
        self.overlay.open(item.record)

    def navigate_away(self) -> None:
        self.overlay.navigate_away()
        self.scheduler.unmount()


def _card_height(item: PresentedItem) -> float:
    if item.layout is Layout.FEATURED:
        return FEATURED_HEIGHT
    chip_rows = (len(item.chips) + 3) // 4
    return CARD_BASE_HEIGHT + LINE_HEIGHT * (len(item.bullets) + chip_rows)


def estimate_geometry(page: PresentedPage) -> dict[str, tuple[float, float]]:
    """Approximate (top, height) for each card, mirroring the page's grid.

    Timeline and featured cards take a full row; standard cards pair up in
    two columns.
    """
    boxes: dict[str, tuple[float, float]] = {}
    y = HERO_HEIGHT
    for section in page.sections:
        y += SECTION_HEADER_HEIGHT
        if section.empty is not None:
            y += LINE_HEIGHT + CARD_GAP
        column = 0
        row_height = 0.0
        for item in section.items:
            height = _card_height(item)
            if item.layout is Layout.STANDARD:
                boxes[item.unit_id] = (y, height)
                row_height = max(row_height, height)
                column += 1
                if column == 2:
                    y += row_height + CARD_GAP
                    column, row_height = 0, 0.0
                continue
            if column:
                y += row_height + CARD_GAP
                column, row_height = 0, 0.0
            boxes[item.unit_id] = (y, height)
            y += height + CARD_GAP
        if column:
            y += row_height + CARD_GAP
        y += SECTION_GAP
    return boxes


def simulate_scroll(
    page: PresentedPage,
    reveal: RevealConfig,
    viewport_height: float = 800.0,
    scroll_step: float = 200.0,
) -> MountedView:
    """Mount ``page`` on a simulated viewport and scroll to the bottom.

    Uses a step clock: time advances one second per scroll step, so event
    start times show which scroll position revealed them.
    """
    if scroll_step <= 0:
        raise ValueError("scroll_step must be positive")

    ticks = [0.0]
    viewport = Viewport(viewport_height, margin=reveal.margin)
    for unit_id, (top, height) in estimate_geometry(page).items():
        viewport.place(unit_id, top, height)

    view = MountedView(page, reveal, viewport=viewport, clock=lambda: ticks[0])
    view.mount()

    y = 0.0
    bottom = max(0.0, viewport.document_height - viewport_height)
    while y < bottom:
        y = min(y + scroll_step, bottom)
        ticks[0] += 1.0
        viewport.scroll_to(y)
    logger.debug(
        "Simulated %s page: %d events, %d unit(s) never revealed",
        page.kind, len(view.scheduler.events), len(view.scheduler.pending),
    )
    return view
