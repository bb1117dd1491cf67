"""Resolve grouped records into presentation blocks for the page renderer.

Each item carries its group, layout, accent, stagger index and the delays
for everything staggered inside its card.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from showcase.config import RevealConfig, Timing
from showcase.grouping import NoEntries, Section, group_journey, group_portfolio
from showcase.layout import Accent, accent_for, has_enlargeable_image, select_layout
from showcase.models import JourneyEntry, Layout, PortfolioEntry, Record, SectionSpec
from showcase.reveal import stagger_delay


@dataclass(frozen=True)
class StaggerSlot:
    text: str
    index: int
    delay: float


@dataclass(frozen=True)
class PresentedItem:
    record: Record
    group: str
    layout: Layout
    accent: Accent
    index: int
    delay: float
    duration: float
    media_delay: float | None
    bullets: tuple[StaggerSlot, ...]
    chips: tuple[StaggerSlot, ...]

    @property
    def unit_id(self) -> str:
        return f"card-{self.group}-{self.index}"

    @property
    def enlargeable(self) -> bool:
        return self.media_delay is not None


@dataclass(frozen=True)
class PresentedSection:
    tag: str
    label: str
    index: int
    delay: float
    items: tuple[PresentedItem, ...]
    empty: NoEntries | None = None

    @property
    def unit_id(self) -> str:
        return f"section-{self.tag}"


@dataclass(frozen=True)
class PresentedPage:
    kind: str
    sections: tuple[PresentedSection, ...]
    empty: NoEntries | None = None


def _slots(texts: Sequence[str], timing: Timing) -> tuple[StaggerSlot, ...]:
    return tuple(
        StaggerSlot(text=t, index=i, delay=stagger_delay(timing, i))
        for i, t in enumerate(texts)
    )


def present_item(record: Record, group: str, index: int, reveal: RevealConfig) -> PresentedItem:
    highlights = record.highlights if isinstance(record, JourneyEntry) else ()
    return PresentedItem(
        record=record,
        group=group,
        layout=select_layout(record),
        accent=accent_for(record),
        index=index,
        delay=stagger_delay(reveal.card, index),
        duration=reveal.card.duration,
        media_delay=stagger_delay(reveal.media, index) if has_enlargeable_image(record) else None,
        bullets=_slots(highlights, reveal.bullet),
        chips=_slots(record.technologies, reveal.chip),
    )


def _present_sections(sections: Sequence[Section], reveal: RevealConfig) -> tuple[PresentedSection, ...]:
    return tuple(
        PresentedSection(
            tag=section.tag,
            label=section.label,
            index=si,
            delay=stagger_delay(reveal.section, si),
            items=tuple(
                present_item(record, section.tag, i, reveal)
                for i, record in enumerate(section.records)
            ),
            empty=section.empty,
        )
        for si, section in enumerate(sections)
    )


def present_portfolio(
    records: Sequence[PortfolioEntry],
    sections: Sequence[SectionSpec],
    reveal: RevealConfig,
) -> PresentedPage:
    grouped = group_portfolio(records, sections)
    return PresentedPage(kind="portfolio", sections=_present_sections(grouped, reveal))


def present_journey(
    records: Sequence[JourneyEntry],
    sections: Sequence[SectionSpec],
    reveal: RevealConfig,
) -> PresentedPage:
    grouping = group_journey(records, sections)
    return PresentedPage(
        kind="journey",
        sections=_present_sections(grouping.sections, reveal),
        empty=grouping.empty,
    )
