"""
Pydantic schemas for the autobiography aggregate.

One AutobiographyData instance holds everything a user has authored:
personal facts, six narrative sections, a timeline of life events,
presentation customizations, the writing style and the editable story.

Instances are frozen. Every named update operation returns a new aggregate
and leaves the receiver untouched, so a failed save or generation can never
leave a half-written copy behind.
"""

from datetime import datetime
from enum import Enum
from typing import Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from autobiography.errors import ValidationError


# Fixed order used by the form steps and by the generation prompt
SECTION_KEYS = (
    "childhood_memories",
    "education_journey",
    "career_achievements",
    "family_relationships",
    "life_challenges",
    "dreams_beliefs",
)


class WritingStyle(str, Enum):
    EMOTIONAL = "emotional"
    PROFESSIONAL = "professional"
    SIMPLE = "simple"
    POETIC = "poetic"


class FontFamily(str, Enum):
    SERIF = "serif"
    SANS = "sans"
    MONO = "mono"


# =============================================================================
# VALUE GROUPS
# =============================================================================

class PersonalInfo(BaseModel):
    """Plain-text personal facts. Each field is independently optional."""
    model_config = ConfigDict(frozen=True)

    full_name: str = Field(default="", description="Full name of the author")
    date_of_birth: str = Field(default="", description="Date of birth as entered (e.g. '1990-04-12')")
    birthplace: str = Field(default="", description="City, Country")
    background: str = Field(default="", description="Cultural heritage, family roots and beginnings")


class LifeEventInput(BaseModel):
    """Editable fields of a timeline event. `year` is free text, not a number."""
    model_config = ConfigDict(frozen=True)

    title: str = Field(default="", description="Short title (e.g. 'Started university')")
    year: str = Field(default="", description="Year as entered; compared lexicographically")
    description: str = Field(default="", description="The story of this milestone")
    image_url: Optional[str] = Field(default=None, description="Link to a photo of the event")
    notes: Optional[str] = Field(default=None, description="Caption or reflection")


class LifeEvent(LifeEventInput):
    """A timeline event with its stable identifier."""
    id: str = Field(description="Unique identifier within the timeline (e.g. 'EVT_7xK9mN2pQ4')")


class Customizations(BaseModel):
    """Presentation metadata. Never changes what gets generated beyond title/subtitle/quote."""
    model_config = ConfigDict(frozen=True)

    title: str = Field(default="My Story")
    subtitle: str = Field(default="An Autobiography")
    quote: str = Field(default="")
    font_family: FontFamily = Field(default=FontFamily.SERIF)
    accent_color: str = Field(default="#6366f1", description="CSS color value")
    cover_image: Optional[str] = Field(default=None, description="URL of the cover image")


# =============================================================================
# AGGREGATE
# =============================================================================

class AutobiographyData(BaseModel):
    """
    Root aggregate for one user's autobiography.

    `generated_story` holds either the AI draft or the user's hand edit; it is
    fully decoupled from the sections once set. `updated_at` is only stamped
    by an explicit save.
    """
    model_config = ConfigDict(frozen=True)

    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)

    childhood_memories: str = ""
    education_journey: str = ""
    career_achievements: str = ""
    family_relationships: str = ""
    life_challenges: str = ""
    dreams_beliefs: str = ""

    timeline: List[LifeEvent] = Field(default_factory=list)
    customizations: Customizations = Field(default_factory=Customizations)
    writing_style: WritingStyle = Field(default=WritingStyle.EMOTIONAL)
    generated_story: Optional[str] = None
    updated_at: Optional[datetime] = None

    # -------------------------------------------------------------------------
    # Named update operations (one per logical field group)
    # -------------------------------------------------------------------------

    def with_personal_info(self, personal_info: PersonalInfo) -> "AutobiographyData":
        return self.model_copy(update={"personal_info": personal_info})

    def with_section(self, key: str, text: str) -> "AutobiographyData":
        if key not in SECTION_KEYS:
            raise ValidationError(f"Unknown section '{key}'")
        return self.model_copy(update={key: text})

    def with_customizations(self, customizations: Customizations) -> "AutobiographyData":
        return self.model_copy(update={"customizations": customizations})

    def with_writing_style(self, style: WritingStyle) -> "AutobiographyData":
        return self.model_copy(update={"writing_style": WritingStyle(style)})

    def with_generated_story(self, story: Optional[str]) -> "AutobiographyData":
        return self.model_copy(update={"generated_story": story})

    def with_timeline(self, events: Iterable[LifeEvent]) -> "AutobiographyData":
        return self.model_copy(update={"timeline": list(events)})

    def mark_saved(self, now: datetime) -> "AutobiographyData":
        return self.model_copy(update={"updated_at": now})

    def section_text(self, key: str) -> str:
        if key not in SECTION_KEYS:
            raise ValidationError(f"Unknown section '{key}'")
        return getattr(self, key)

    def has_story(self) -> bool:
        return bool(self.generated_story and self.generated_story.strip())


class SharedStory(BaseModel):
    """Immutable, publicly addressable copy of an aggregate at share time."""
    model_config = ConfigDict(frozen=True)

    share_id: str
    owner_id: str
    data: AutobiographyData
    created_at: Optional[datetime] = None
