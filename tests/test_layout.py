"""Tests for layout selection and accent mapping."""

import pytest

from showcase.layout import (
    JOURNEY_ACCENTS,
    PORTFOLIO_ACCENTS,
    _require_total,
    accent_for,
    has_enlargeable_image,
    select_layout,
)
from showcase.models import JourneyType, Layout, PortfolioType


class TestSelectLayout:
    def test_featured_flag(self, make_portfolio):
        assert select_layout(make_portfolio("publication", "P", featured=True)) is Layout.FEATURED

    def test_not_featured_without_image(self, make_portfolio):
        item = make_portfolio("project", "P", featured=False)
        assert item.image is None
        assert select_layout(item) is Layout.STANDARD

    def test_image_does_not_make_featured(self, make_portfolio):
        item = make_portfolio("award", "P", image="/img/x.png", description="x" * 2000)
        assert select_layout(item) is Layout.STANDARD

    def test_journey_is_always_timeline(self, make_journey):
        assert select_layout(make_journey("work", "W", image="/img/w.png")) is Layout.TIMELINE
        assert select_layout(make_journey("education", "E")) is Layout.TIMELINE

    def test_pure(self, portfolio_records):
        first = [select_layout(r) for r in portfolio_records]
        reversed_run = [select_layout(r) for r in reversed(portfolio_records)]
        assert first == list(reversed(reversed_run))
        assert first == [select_layout(r) for r in portfolio_records]


class TestAccents:
    def test_every_journey_variant_mapped(self):
        assert set(JOURNEY_ACCENTS) == set(JourneyType)

    def test_every_portfolio_variant_mapped(self):
        assert set(PORTFOLIO_ACCENTS) == set(PortfolioType)

    def test_work_and_education_differ(self, make_journey):
        work = accent_for(make_journey("work", "W"))
        edu = accent_for(make_journey("education", "E"))
        assert work.border != edu.border
        assert (work.label, edu.label) == ("Work", "Education")

    def test_portfolio_accent_by_type(self, make_portfolio):
        assert accent_for(make_portfolio("award", "A")).label == "Award"

    def test_partial_mapping_is_a_defect(self):
        with pytest.raises(RuntimeError, match="education"):
            _require_total({JourneyType.WORK: JOURNEY_ACCENTS[JourneyType.WORK]}, JourneyType)


class TestEnlargeableImage:
    def test_featured_with_image(self, make_portfolio):
        assert has_enlargeable_image(make_portfolio("publication", "P", featured=True, image="/c.png"))

    def test_featured_without_image(self, make_portfolio):
        assert not has_enlargeable_image(make_portfolio("publication", "P", featured=True))

    def test_standard_with_image(self, make_portfolio):
        assert not has_enlargeable_image(make_portfolio("project", "P", image="/c.png"))

    def test_journey_logo(self, make_journey):
        assert not has_enlargeable_image(make_journey("work", "W", image="/logo.png"))
