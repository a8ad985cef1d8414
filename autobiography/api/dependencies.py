"""
Shared FastAPI dependencies.
"""

from typing import Optional

from fastapi import Depends

from autobiography.agents.storyteller import StorytellerAgent
from autobiography.auth import Identity, get_current_identity
from autobiography.database import get_record_store
from autobiography.persistence import RecordStore
from autobiography.workspace import StoryWorkspace


# --- Storyteller (global singleton, built lazily) ---
_storyteller: Optional[StorytellerAgent] = None


def get_storyteller() -> StorytellerAgent:
    global _storyteller
    if _storyteller is None:
        _storyteller = StorytellerAgent()
    return _storyteller


async def get_workspace(
    identity: Identity = Depends(get_current_identity),
    store: RecordStore = Depends(get_record_store),
    storyteller: StorytellerAgent = Depends(get_storyteller)
) -> StoryWorkspace:
    """A workspace loaded with the signed-in user's saved aggregate."""
    workspace = StoryWorkspace(identity, store, storyteller)
    await workspace.load()
    return workspace
