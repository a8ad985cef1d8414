import pytest
from fastapi.testclient import TestClient
from langchain_core.language_models.fake_chat_models import FakeListChatModel

from autobiography.agents.storyteller import StorytellerAgent
from autobiography.api.dependencies import get_storyteller
from autobiography.database import get_record_store
from autobiography.main import app
from autobiography.schemas import (
    AutobiographyData,
    Customizations,
    LifeEvent,
    PersonalInfo,
    WritingStyle,
)
from tests.fakes import SpyStore


@pytest.fixture
def store():
    return SpyStore()


@pytest.fixture
def sample_data():
    return AutobiographyData(
        personal_info=PersonalInfo(
            full_name="Ada Lovelace",
            date_of_birth="1815-12-10",
            birthplace="London, England",
            background="Daughter of a poet, raised on mathematics.",
        ),
        childhood_memories="Designing a flying machine at twelve.",
        education_journey="Tutored by Mary Somerville.",
        career_achievements="Notes on the Analytical Engine.",
        family_relationships="Three children with William King.",
        life_challenges="Long stretches of illness.",
        dreams_beliefs="Poetical science.",
        timeline=[
            LifeEvent(id="EVT_b", title="Published the Notes", year="1843",
                      description="Translation with notes", notes="Note G"),
            LifeEvent(id="EVT_a", title="Met Babbage", year="1833",
                      description="A demonstration of the Difference Engine",
                      image_url="https://example.com/engine.jpg"),
        ],
        customizations=Customizations(title="Poetical Science", subtitle="A Memoir", quote="Imagination is the discovering faculty."),
        writing_style=WritingStyle.POETIC,
    )


@pytest.fixture
def storyteller():
    return StorytellerAgent(llm=FakeListChatModel(responses=["Chapter one."]), timeout=5)


@pytest.fixture
def client(store, storyteller):
    app.dependency_overrides[get_record_store] = lambda: store
    app.dependency_overrides[get_storyteller] = lambda: storyteller
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    return {"user-id": "user-123", "user-email": "ada@example.com"}
