"""Configuration loading for showcase."""

from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from showcase.errors import ConfigError
from showcase.models import SectionSpec


class UnknownTagPolicy(str, Enum):
    DROP = "drop"
    ERROR = "error"


class SiteConfig(BaseModel):
    title: str = "My Portfolio"
    description: str = "Publications, projects, and the path that led to them"
    site_url: str = "https://example.com"
    social_banner: str = "/static/images/twitter-card.png"
    locale: str = "en_US"
    socials: dict[str, str] = Field(default_factory=dict)


class DataConfig(BaseModel):
    journey_path: str = "data/journey.yaml"
    portfolio_path: str = "data/portfolio.yaml"
    output_dir: str = "site"
    unknown_tags: UnknownTagPolicy = UnknownTagPolicy.DROP


class SectionsConfig(BaseModel):
    journey: list[SectionSpec] = Field(default_factory=lambda: [
        SectionSpec(tag="work", label="Work Experience"),
        SectionSpec(tag="education", label="Education"),
    ])
    portfolio: list[SectionSpec] = Field(default_factory=lambda: [
        SectionSpec(tag="publication", label="Publications"),
        SectionSpec(tag="project", label="Projects"),
        SectionSpec(tag="award", label="Awards"),
    ])


class Timing(BaseModel):
    """Stagger constants for one kind of visual unit (seconds)."""
    base_delay: float = Field(default=0.0, ge=0.0)
    step: float = Field(default=0.1, ge=0.0)
    duration: float = Field(default=0.4, gt=0.0)


class RevealConfig(BaseModel):
    hero: Timing = Field(default_factory=lambda: Timing(base_delay=0.0, step=0.1, duration=0.5))
    section: Timing = Field(default_factory=lambda: Timing(base_delay=0.0, step=0.15, duration=0.4))
    card: Timing = Field(default_factory=lambda: Timing(base_delay=0.0, step=0.1, duration=0.4))
    media: Timing = Field(default_factory=lambda: Timing(base_delay=0.15, step=0.1, duration=0.4))
    bullet: Timing = Field(default_factory=lambda: Timing(base_delay=0.1, step=0.05, duration=0.3))
    chip: Timing = Field(default_factory=lambda: Timing(base_delay=0.1, step=0.02, duration=0.2))
    margin: float = 80.0  # px the viewport is shrunk by before a lazy unit counts as visible


class Config(BaseModel):
    site: SiteConfig = Field(default_factory=SiteConfig)
    data: DataConfig = Field(default_factory=DataConfig)
    sections: SectionsConfig = Field(default_factory=SectionsConfig)
    reveal: RevealConfig = Field(default_factory=RevealConfig)

    @property
    def resolved_journey_path(self) -> Path:
        return _resolve(self.data.journey_path)

    @property
    def resolved_portfolio_path(self) -> Path:
        return _resolve(self.data.portfolio_path)

    @property
    def resolved_output_dir(self) -> Path:
        return _resolve(self.data.output_dir)


def _project_root() -> Path:
    """Return the showcase project root directory."""
    return Path(__file__).parent.parent


def _resolve(path: str) -> Path:
    p = Path(path).expanduser()
    if p.is_absolute():
        return p
    return _project_root() / p


def load_config(config_path: Path | None = None) -> Config:
    """Load config from YAML file. Falls back to defaults if file missing."""
    if config_path is None:
        config_path = _project_root() / "config.yaml"

    if not config_path.exists():
        return Config()

    try:
        raw: dict[str, Any] = yaml.safe_load(config_path.read_text()) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"{config_path}: invalid YAML: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"{config_path}: top level must be a mapping")

    try:
        return Config(**raw)
    except ValidationError as e:
        raise ConfigError(f"{config_path}: {e}") from e
