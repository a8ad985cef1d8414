"""
Guided Authoring Steps

The seven-step form sequence, the cursor that walks it, and the completion
signals derived from the aggregate. Completion and progress are pure
functions of the data; nothing here caches or stores them.
"""

from dataclasses import dataclass
from typing import List, Sequence

from autobiography.errors import ValidationError
from autobiography.schemas import AutobiographyData, SECTION_KEYS


PERSONAL_INFO_KEY = "personal_info"


@dataclass(frozen=True)
class Step:
    key: str
    title: str
    description: str


STEPS: Sequence[Step] = (
    Step(PERSONAL_INFO_KEY, "Personal Information",
         "Lay the foundation with your origins and background."),
    Step("childhood_memories", "Childhood Memories",
         "Capture the stories that shaped your early years."),
    Step("education_journey", "Education Journey",
         "Document the lessons, mentors, and discoveries."),
    Step("career_achievements", "Career & Achievements",
         "Highlight milestones, accolades, and moments of pride."),
    Step("family_relationships", "Family & Relationships",
         "Celebrate the people who define your inner circle."),
    Step("life_challenges", "Life Challenges & Lessons",
         "Reflect on hurdles, resilience, and hard-won insights."),
    Step("dreams_beliefs", "Dreams, Beliefs & Future Goals",
         "Describe the legacy you are building and what comes next."),
)


def is_step_complete(data: AutobiographyData, key: str) -> bool:
    """
    A section step is complete when its trimmed text is non-empty.
    Personal information counts as complete once any of its fields is filled.
    """
    if key == PERSONAL_INFO_KEY:
        info = data.personal_info
        return any(value.strip() for value in (
            info.full_name, info.date_of_birth, info.birthplace, info.background
        ))
    if key in SECTION_KEYS:
        return bool(data.section_text(key).strip())
    raise ValidationError(f"Unknown step '{key}'")


def completed_steps(data: AutobiographyData, steps: Sequence[Step] = STEPS) -> List[str]:
    return [step.key for step in steps if is_step_complete(data, step.key)]


def progress(data: AutobiographyData, steps: Sequence[Step] = STEPS) -> int:
    """Percentage of completed steps, rounded half up like the UI meter."""
    if not steps:
        return 0
    done = len(completed_steps(data, steps))
    return int(100 * done / len(steps) + 0.5)


def step_statuses(data: AutobiographyData, steps: Sequence[Step] = STEPS) -> List[dict]:
    return [
        {
            "key": step.key,
            "title": step.title,
            "description": step.description,
            "completed": is_step_complete(data, step.key),
        }
        for step in steps
    ]


class FormStateMachine:
    """
    Cursor over the ordered steps.

    Any step can be reached at any time; completion never gates movement.
    There is no terminal state.
    """

    def __init__(self, steps: Sequence[Step] = STEPS, index: int = 0):
        if not steps:
            raise ValueError("FormStateMachine needs at least one step")
        self.steps = tuple(steps)
        self.index = 0
        self.jump_to(index)

    def __len__(self) -> int:
        return len(self.steps)

    @property
    def current(self) -> Step:
        return self.steps[self.index]

    @property
    def is_first(self) -> bool:
        return self.index == 0

    @property
    def is_last(self) -> bool:
        return self.index == len(self.steps) - 1

    def advance(self) -> Step:
        self.index = min(self.index + 1, len(self.steps) - 1)
        return self.current

    def retreat(self) -> Step:
        self.index = max(self.index - 1, 0)
        return self.current

    def jump_to(self, index: int) -> Step:
        if not 0 <= index < len(self.steps):
            raise ValidationError(f"Step {index} is out of range (0-{len(self.steps) - 1})")
        self.index = index
        return self.current
