"""Shared test fixtures for showcase tests."""

from pathlib import Path

import pytest
import yaml

from showcase.config import Config, DataConfig, RevealConfig
from showcase.models import JourneyEntry, PortfolioEntry


def _journey(tag: str, title: str, **fields) -> JourneyEntry:
    fields.setdefault("organization", f"{title} Org")
    fields.setdefault("date", "2024")
    fields.setdefault("description", f"About {title}")
    return JourneyEntry(type=tag, title=title, **fields)


def _portfolio(tag: str, title: str, **fields) -> PortfolioEntry:
    fields.setdefault("organization", f"{title} Org")
    fields.setdefault("date", "2024")
    fields.setdefault("description", f"About {title}")
    return PortfolioEntry(type=tag, title=title, **fields)


@pytest.fixture()
def make_journey():
    return _journey


@pytest.fixture()
def make_portfolio():
    return _portfolio


@pytest.fixture()
def reveal_config():
    return RevealConfig()


@pytest.fixture()
def journey_records():
    """Work, education, work; the interleaved authoring order matters."""
    return [
        _journey("work", "A", highlights=["shipped x", "shipped y"], technologies=["Python", "SQL"]),
        _journey("education", "B"),
        _journey("work", "C", image="/img/c.png", collaborators=["Ada", "Linus"]),
    ]


@pytest.fixture()
def portfolio_records():
    """Authored out of section order on purpose."""
    return [
        _portfolio("award", "Hackathon", badge="1st Place"),
        _portfolio(
            "publication", "Paper", subtitle="On things", image="/img/cert.png",
            link="https://example.org", featured=True, technologies=["LLM", "Stats"],
        ),
        _portfolio("project", "Pronesis", link="https://pronesis.pro"),
        _portfolio("award", "Olympiad", badge="Top 12"),
    ]


@pytest.fixture()
def write_yaml(tmp_path):
    """Write ``data`` as YAML under tmp_path and return the path."""
    def _write(name: str, data) -> Path:
        path = tmp_path / name
        path.write_text(yaml.safe_dump(data, sort_keys=False, allow_unicode=True), encoding="utf-8")
        return path
    return _write


@pytest.fixture()
def site_config(tmp_path, write_yaml):
    """Config pointing at small journey/portfolio files in tmp_path."""
    journey = write_yaml("journey.yaml", [
        {"type": "work", "title": "Data Scientist", "organization": "Artefact",
         "date": "May 2024 – Present", "description": "Data products.",
         "highlights": ["Built a scoring model"], "technologies": ["Python", "SQL"],
         "logo": "/static/artefact.png", "link": "https://www.artefact.com/"},
        {"type": "education", "title": "Engineering Degree", "organization": "ENSIAS",
         "date": "2021 – 2024", "description": "Computer science."},
    ])
    portfolio = write_yaml("portfolio.yaml", [
        {"type": "project", "title": "Pronesis", "organization": "Co-founded",
         "date": "2024", "description": "Career platform.", "link": "https://pronesis.pro"},
        {"type": "publication", "title": "ICSMAI'25 Paper", "organization": "Springer",
         "date": "Oct 2025", "description": "Paper.", "image": "/static/cert.png",
         "featured": True},
    ])
    return Config(data=DataConfig(
        journey_path=str(journey),
        portfolio_path=str(portfolio),
        output_dir=str(tmp_path / "site"),
    ))
