"""Record store: loads the static journey and portfolio collections from YAML."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from showcase.config import Config, UnknownTagPolicy
from showcase.errors import StoreError
from showcase.models import JourneyEntry, JourneyType, PortfolioEntry, PortfolioType, Record

logger = logging.getLogger(__name__)


def _read_entries(path: Path) -> list[Any]:
    """Return the raw entry list from a collection file.

    The file holds either a bare list or a mapping with an ``entries`` list.
    A missing file is an empty collection.
    """
    if not path.exists():
        logger.info("No collection at %s, treating as empty", path)
        return []

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise StoreError(f"{path}: invalid YAML: {e}") from e

    if raw is None:
        return []
    if isinstance(raw, dict):
        if "entries" not in raw:
            raise StoreError(f"{path}: expected an 'entries' key, found {sorted(map(str, raw))}")
        raw = raw["entries"] or []
    if not isinstance(raw, list):
        raise StoreError(f"{path}: expected a list of entries")
    return raw


def _load_collection(
    path: Path,
    model: type[Record],
    variants: type[Enum],
    unknown_tags: UnknownTagPolicy,
) -> list[Record]:
    known = {v.value for v in variants}
    records: list[Record] = []

    for i, raw in enumerate(_read_entries(path)):
        if not isinstance(raw, dict):
            raise StoreError(f"{path}: entry {i} is not a mapping")

        tag = raw.get("type")
        if not isinstance(tag, str) or tag not in known:
            if unknown_tags == UnknownTagPolicy.ERROR:
                raise StoreError(
                    f"{path}: entry {i} ({raw.get('title', '?')!r}) has unknown type {tag!r}; "
                    f"expected one of {sorted(known)}"
                )
            logger.warning(
                "Dropping entry %d (%r) in %s: unknown type %r",
                i, raw.get("title", "?"), path.name, tag,
            )
            continue

        try:
            records.append(model.model_validate(raw))
        except ValidationError as e:
            raise StoreError(f"{path}: entry {i} ({raw.get('title', '?')!r}): {e}") from e

    logger.debug("Loaded %d %s records from %s", len(records), model.__name__, path)
    return records


def load_journey(
    path: Path,
    unknown_tags: UnknownTagPolicy = UnknownTagPolicy.DROP,
) -> list[JourneyEntry]:
    """Load work/education entries in authoring order."""
    return _load_collection(path, JourneyEntry, JourneyType, unknown_tags)


def load_portfolio(
    path: Path,
    unknown_tags: UnknownTagPolicy = UnknownTagPolicy.DROP,
) -> list[PortfolioEntry]:
    """Load publication/project/award entries in authoring order."""
    return _load_collection(path, PortfolioEntry, PortfolioType, unknown_tags)


@dataclass(frozen=True)
class RecordStore:
    """Both collections, loaded once and read-only afterwards."""

    journey: tuple[JourneyEntry, ...] = field(default_factory=tuple)
    portfolio: tuple[PortfolioEntry, ...] = field(default_factory=tuple)

    @classmethod
    def from_config(
        cls,
        config: Config,
        unknown_tags: UnknownTagPolicy | None = None,
    ) -> "RecordStore":
        policy = unknown_tags or config.data.unknown_tags
        journey = load_journey(config.resolved_journey_path, policy)
        portfolio = load_portfolio(config.resolved_portfolio_path, policy)
        logger.info(
            "Record store loaded: %d journey entries, %d portfolio entries",
            len(journey), len(portfolio),
        )
        return cls(journey=tuple(journey), portfolio=tuple(portfolio))
