"""Grouping engine: partitions a flat record collection into declared sections."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from showcase.models import Record, SectionSpec

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=Record)

NO_ENTRIES_MESSAGE = "No entries found"


@dataclass(frozen=True)
class NoEntries:
    """Shown in place of a journey list that has nothing to show."""

    message: str = NO_ENTRIES_MESSAGE


NO_ENTRIES = NoEntries()


@dataclass(frozen=True)
class Section(Generic[R]):
    """One declared section and the records that fell into it, in input order."""

    tag: str
    label: str
    records: tuple[R, ...]

    def __len__(self) -> int:
        return len(self.records)

    @property
    def empty(self) -> NoEntries | None:
        return NO_ENTRIES if not self.records else None


@dataclass(frozen=True)
class JourneyGrouping:
    """Every declared journey section, or none at all for an empty collection."""

    sections: tuple[Section, ...]

    @property
    def empty(self) -> NoEntries | None:
        return NO_ENTRIES if not self.sections else None


def _check_specs(sections: Sequence[SectionSpec]) -> None:
    seen: set[str] = set()
    for spec in sections:
        if spec.tag in seen:
            raise ValueError(f"Section tag declared twice: {spec.tag!r}")
        seen.add(spec.tag)


def group_records(records: Sequence[R], sections: Sequence[SectionSpec]) -> list[Section[R]]:
    """Group records under the declared sections.

    Section order follows ``sections``; record order within a section follows
    ``records``. Sections with no records are omitted; ``group_journey`` puts
    them back with a sentinel. Records whose tag is not
    declared are dropped.
    """
    _check_specs(sections)

    grouped: list[Section[R]] = []
    for spec in sections:
        matched = tuple(r for r in records if r.tag == spec.tag)
        if matched:
            grouped.append(Section(tag=spec.tag, label=spec.label, records=matched))

    declared = {spec.tag for spec in sections}
    dropped = [r for r in records if r.tag not in declared]
    if dropped:
        logger.debug(
            "Dropped %d record(s) with undeclared tags: %s",
            len(dropped), sorted({r.tag for r in dropped}),
        )
    return grouped


def group_portfolio(records: Sequence[R], sections: Sequence[SectionSpec]) -> list[Section[R]]:
    """Portfolio sections: empty sections are left out, no placeholder."""
    return group_records(records, sections)


def group_journey(records: Sequence[R], sections: Sequence[SectionSpec]) -> JourneyGrouping:
    """Journey sections.

    Every declared section is kept; one with no records carries the sentinel
    in its ``.empty`` instead of being omitted. An empty collection yields no
    sections and the grouping's own ``.empty`` carries the sentinel.
    """
    _check_specs(sections)
    if not records:
        return JourneyGrouping(sections=())

    grouped = {section.tag: section for section in group_records(records, sections)}
    return JourneyGrouping(sections=tuple(
        grouped.get(spec.tag, Section(tag=spec.tag, label=spec.label, records=()))
        for spec in sections
    ))
