"""
Story Workspace

Application-level context for one signed-in author: holds the current
aggregate and the step cursor, and funnels every mutation through the
aggregate's named update operations.

Calls that cross the system boundary (load, save, generate, share) are async
and independent; the workspace never sequences them itself. The aggregate is
only replaced after the external call succeeds.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from autobiography.agents.storyteller import StorytellerAgent
from autobiography.auth import Identity
from autobiography.errors import AuthenticationRequired
from autobiography.export import render_docx, render_pdf
from autobiography.persistence import RecordStore
from autobiography.schemas import (
    AutobiographyData,
    Customizations,
    LifeEvent,
    LifeEventInput,
    PersonalInfo,
    WritingStyle,
)
from autobiography.settings import settings
from autobiography.sharing import ShareResult, create_share
from autobiography.steps import FormStateMachine, completed_steps, progress
from autobiography import timeline as timeline_ops


logger = logging.getLogger(__name__)


class StoryWorkspace:
    """
    Single-writer editing session over one user's aggregate.

    Usage:
        workspace = StoryWorkspace(identity, store, StorytellerAgent())
        await workspace.load()
        workspace.update_section("childhood_memories", "...")
        await workspace.generate_story()
        await workspace.save()
    """

    def __init__(
        self,
        identity: Optional[Identity],
        store: RecordStore,
        storyteller: Optional[StorytellerAgent] = None,
        data: Optional[AutobiographyData] = None,
        base_url: Optional[str] = None
    ):
        self.identity = identity
        self.store = store
        self.storyteller = storyteller or StorytellerAgent()
        self.data = data or AutobiographyData()
        self.steps = FormStateMachine()
        self.base_url = base_url or settings.PUBLIC_BASE_URL

    # =========================================================================
    # PERSISTENCE
    # =========================================================================
    async def load(self) -> AutobiographyData:
        self.data = await self.store.load(self._owner_id())
        return self.data

    async def save(self) -> AutobiographyData:
        """Stamp updated_at and overwrite the stored aggregate (last write wins)."""
        saved = self.data.mark_saved(datetime.now(timezone.utc))
        await self.store.save(self._owner_id(), saved)
        logger.info("Saved autobiography for %s", self._owner_id())
        self.data = saved
        return self.data

    # =========================================================================
    # FIELD GROUP UPDATES
    # =========================================================================
    def update_personal_info(self, personal_info: PersonalInfo) -> AutobiographyData:
        self.data = self.data.with_personal_info(personal_info)
        return self.data

    def update_section(self, key: str, text: str) -> AutobiographyData:
        self.data = self.data.with_section(key, text)
        return self.data

    def update_customizations(self, customizations: Customizations) -> AutobiographyData:
        self.data = self.data.with_customizations(customizations)
        return self.data

    def set_writing_style(self, style: WritingStyle) -> AutobiographyData:
        self.data = self.data.with_writing_style(style)
        return self.data

    def edit_story(self, story: Optional[str]) -> AutobiographyData:
        """Manual edit of the narrative; the sections are left alone."""
        self.data = self.data.with_generated_story(story)
        return self.data

    # =========================================================================
    # TIMELINE
    # =========================================================================
    def add_event(self, fields: LifeEventInput) -> LifeEvent:
        self.data, event = timeline_ops.add_event(self.data, fields)
        return event

    def update_event(self, event_id: str, fields: LifeEventInput) -> bool:
        self.data, found = timeline_ops.update_event(self.data, event_id, fields)
        return found

    def remove_event(self, event_id: str) -> bool:
        self.data, found = timeline_ops.remove_event(self.data, event_id)
        return found

    def timeline(self) -> List[LifeEvent]:
        return timeline_ops.list_sorted(self.data)

    # =========================================================================
    # DERIVED SIGNALS
    # =========================================================================
    def progress(self) -> int:
        return progress(self.data)

    def completed_steps(self) -> List[str]:
        return completed_steps(self.data)

    # =========================================================================
    # GENERATION / EXPORT / SHARE
    # =========================================================================
    async def generate_story(self) -> str:
        """
        Regenerate the narrative from the current aggregate.

        On GenerationError the previous story stays exactly as it was.
        """
        story = await self.storyteller.generate(self.data)
        self.data = self.data.with_generated_story(story)
        return story

    def export_pdf(self) -> bytes:
        return render_pdf(self.data)

    def export_docx(self) -> bytes:
        return render_docx(self.data)

    async def share(self) -> ShareResult:
        owner_id = self.identity.user_id if self.identity else None
        return await create_share(self.store, owner_id, self.data, self.base_url)

    def _owner_id(self) -> str:
        if self.identity is None:
            raise AuthenticationRequired("Sign in to continue")
        return self.identity.user_id
