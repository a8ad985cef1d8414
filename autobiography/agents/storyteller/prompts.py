"""
Prompts for the Storyteller Agent.
"""

import json

from autobiography.schemas import AutobiographyData, LifeEvent


STYLE_LABELS = {
    "emotional": "Emotional & Heartfelt",
    "professional": "Professional & Formal",
    "simple": "Simple & Clear",
    "poetic": "Poetic & Lyrical",
}

STORY_PROMPT = """You are a gifted biographical writer. Craft a compelling autobiography chapter for the following individual.

Tone preference: {writing_style}.

Customization preferences:
- Title: {title}
- Subtitle: {subtitle}
- Favorite quote: {quote}

Personal Information:
{personal_info}

Childhood Memories:
{childhood_memories}

Education Journey:
{education_journey}

Career & Achievements:
{career_achievements}

Family & Relationships:
{family_relationships}

Life Challenges & Lessons:
{life_challenges}

Dreams, Beliefs & Future Goals:
{dreams_beliefs}

Timeline Events:
{timeline}

Write in a way that feels cohesive, immersive, and faithful to the provided details. Include section headings that align with each stage of life, and close with an inspiring outlook toward the future. Keep the entire narrative under 1500 words.
"""


def format_timeline_event(event: LifeEvent) -> str:
    notes = event.notes if event.notes and event.notes.strip() else "none"
    image = event.image_url if event.image_url and event.image_url.strip() else "n/a"
    return f"{event.year} - {event.title}: {event.description}. Notes: {notes}. Image: {image}"


def build_story_prompt(data: AutobiographyData) -> str:
    """
    Render the aggregate into the single generation prompt.

    Pure and deterministic: identical data gives byte-identical text.
    Timeline events stay in storage order.
    """
    return STORY_PROMPT.format(
        writing_style=data.writing_style.value,
        title=data.customizations.title,
        subtitle=data.customizations.subtitle,
        quote=data.customizations.quote,
        personal_info=json.dumps(data.personal_info.model_dump(), indent=2, ensure_ascii=False),
        childhood_memories=data.childhood_memories,
        education_journey=data.education_journey,
        career_achievements=data.career_achievements,
        family_relationships=data.family_relationships,
        life_challenges=data.life_challenges,
        dreams_beliefs=data.dreams_beliefs,
        timeline="\n".join(format_timeline_event(event) for event in data.timeline),
    )
