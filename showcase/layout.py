"""Layout selection and accent colors per record variant."""

from dataclasses import dataclass
from enum import Enum

from showcase.models import JourneyEntry, JourneyType, Layout, PortfolioEntry, PortfolioType, Record


@dataclass(frozen=True)
class Accent:
    label: str
    badge: str   # css classes for the type pill
    border: str  # css class for the left accent border


JOURNEY_ACCENTS: dict[JourneyType, Accent] = {
    JourneyType.WORK: Accent("Work", "badge-teal", "border-teal"),
    JourneyType.EDUCATION: Accent("Education", "badge-purple", "border-purple"),
}

PORTFOLIO_ACCENTS: dict[PortfolioType, Accent] = {
    PortfolioType.PUBLICATION: Accent("Publication", "badge-rose", "border-rose"),
    PortfolioType.PROJECT: Accent("Project", "badge-blue", "border-blue"),
    PortfolioType.AWARD: Accent("Award", "badge-amber", "border-amber"),
}


def _require_total(mapping: dict, variants: type[Enum]) -> None:
    missing = [v.value for v in variants if v not in mapping]
    if missing:
        raise RuntimeError(f"No accent declared for {variants.__name__} variant(s): {missing}")


_require_total(JOURNEY_ACCENTS, JourneyType)
_require_total(PORTFOLIO_ACCENTS, PortfolioType)


def select_layout(record: Record) -> Layout:
    """Featured iff a portfolio record says so; journey entries are always timeline cards."""
    if isinstance(record, PortfolioEntry):
        return Layout.FEATURED if record.featured else Layout.STANDARD
    if isinstance(record, JourneyEntry):
        return Layout.TIMELINE
    raise TypeError(f"No layout for record type {type(record).__name__}")


def accent_for(record: Record) -> Accent:
    if isinstance(record, PortfolioEntry):
        return PORTFOLIO_ACCENTS[record.type]
    if isinstance(record, JourneyEntry):
        return JOURNEY_ACCENTS[record.type]
    raise TypeError(f"No accent for record type {type(record).__name__}")


def has_enlargeable_image(record: Record) -> bool:
    """Only featured cards offer the click-to-enlarge overlay."""
    return select_layout(record) is Layout.FEATURED and bool(record.image)
