"""
Storyteller Agent - turns the authored aggregate into a narrative draft.

One user action = one request to the generation service:
- No retries, no streaming, no chunking
- No caching; repeated calls are independent and may differ
- Never touches the aggregate; the caller decides whether to keep the result
"""

import asyncio
import logging
from typing import Any, Optional

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage

from autobiography.agents.storyteller.prompts import build_story_prompt
from autobiography.errors import GenerationError
from autobiography.schemas import AutobiographyData
from autobiography.settings import settings


logger = logging.getLogger(__name__)

FALLBACK_STORY = "We couldn't generate a story at this time. Please try again later."


def extract_text(content: Any) -> str:
    """
    Pull plain text out of a chat model response.

    Gemini may return a plain string or a list of parts; thinking parts are
    dropped and text parts are joined.
    """
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        pieces = []
        for part in content:
            if isinstance(part, str):
                pieces.append(part)
            elif isinstance(part, dict) and part.get("text"):
                pieces.append(part["text"])
        return "".join(pieces)
    return str(content)


class StorytellerAgent:
    """
    Generation pipeline over a LangChain chat model.

    A model can be injected (tests, other providers); otherwise a Gemini
    client is built on first use from settings.
    """

    def __init__(
        self,
        llm: Optional[BaseChatModel] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        timeout: Optional[float] = None
    ):
        """
        Args:
            llm: Chat model to call instead of Gemini
            model: Gemini model name (default from settings)
            temperature: Sampling temperature (default from settings)
            timeout: Seconds to wait for the service before failing
        """
        self._llm = llm
        self.model = model or settings.GENERATION_MODEL
        self.temperature = settings.GENERATION_TEMPERATURE if temperature is None else temperature
        self.timeout = settings.GENERATION_TIMEOUT_SECONDS if timeout is None else timeout

    @property
    def llm(self) -> BaseChatModel:
        if self._llm is None:
            from langchain_google_genai import ChatGoogleGenerativeAI

            settings.validate()
            self._llm = ChatGoogleGenerativeAI(
                model=self.model,
                temperature=self.temperature,
                google_api_key=settings.GEMINI_API_KEY,
                max_retries=0,  # single attempt per user action
            )
        return self._llm

    # =========================================================================
    # PUBLIC INTERFACE
    # =========================================================================
    async def generate(self, data: AutobiographyData) -> str:
        """
        Generate a narrative draft for the given aggregate.

        Returns the draft text, or FALLBACK_STORY when the service answers
        with nothing. Raises GenerationError on any transport, configuration
        or timeout failure.
        """
        prompt = build_story_prompt(data)
        logger.debug("Generating story (%d prompt chars, style=%s)", len(prompt), data.writing_style.value)

        try:
            llm = self.llm
            response = await asyncio.wait_for(
                llm.ainvoke([HumanMessage(content=prompt)]),
                timeout=self.timeout
            )
        except asyncio.TimeoutError as e:
            logger.warning("Story generation timed out after %ss", self.timeout)
            raise GenerationError("Story generation timed out. Please try again.") from e
        except Exception as e:
            logger.error("Story generation failed: %s", e)
            raise GenerationError("Failed to generate story") from e

        story = extract_text(getattr(response, "content", None))
        if not story.strip():
            logger.info("Generation service returned no text, using fallback")
            return FALLBACK_STORY
        return story
