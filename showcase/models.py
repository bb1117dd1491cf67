"""Pydantic models for showcase records."""

from enum import Enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class JourneyType(str, Enum):
    WORK = "work"
    EDUCATION = "education"


class PortfolioType(str, Enum):
    PUBLICATION = "publication"
    PROJECT = "project"
    AWARD = "award"


class Layout(str, Enum):
    FEATURED = "featured"
    STANDARD = "standard"
    TIMELINE = "timeline"


# --- Record models (what comes out of the store) ---


class Record(BaseModel):
    """Fields shared by every record variant.

    Records are frozen once loaded. Sequence fields are tuples so the
    authoring order cannot be rearranged after load.
    """
    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    type: str
    title: str
    organization: str
    date: str  # free-form, never parsed
    description: str
    location: str | None = None
    link: str | None = None
    image: str | None = Field(default=None, validation_alias=AliasChoices("image", "logo"))
    technologies: tuple[str, ...] = ()

    @property
    def tag(self) -> str:
        """Grouping key: the plain string value of the variant tag."""
        return self.type.value if isinstance(self.type, Enum) else self.type


class JourneyEntry(Record):
    """A work or education entry on the journey timeline."""
    type: JourneyType
    highlights: tuple[str, ...] = ()
    collaborators: tuple[str, ...] = ()


class PortfolioEntry(Record):
    """A publication, project or award card."""
    type: PortfolioType
    subtitle: str | None = None
    badge: str | None = None
    featured: bool = False


AnyRecord = JourneyEntry | PortfolioEntry


class SectionSpec(BaseModel):
    """Declared section: records whose tag equals ``tag`` are shown under ``label``."""
    model_config = ConfigDict(frozen=True)

    tag: str
    label: str
