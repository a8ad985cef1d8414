"""
Autobiography REST API

Load and save the signed-in user's aggregate, read derived progress, and
edit the timeline. Every endpoint works on the caller's own record only.
"""

from typing import Dict, List

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from autobiography.agents.storyteller.prompts import STYLE_LABELS
from autobiography.api.dependencies import get_workspace
from autobiography.errors import NotFoundError
from autobiography.schemas import AutobiographyData, LifeEvent, LifeEventInput
from autobiography.steps import step_statuses
from autobiography.workspace import StoryWorkspace


router = APIRouter(prefix="/api/autobiography", tags=["autobiography"])


# --- Pydantic Schemas ---

class StepStatus(BaseModel):
    key: str
    title: str
    description: str
    completed: bool


class ProgressResponse(BaseModel):
    progress: int
    completed: List[str]
    steps: List[StepStatus]


class RemoveEventResponse(BaseModel):
    removed: bool


# --- Endpoints ---

@router.get("", response_model=AutobiographyData)
async def load_autobiography(workspace: StoryWorkspace = Depends(get_workspace)):
    """Load the saved aggregate (a fresh default one if nothing is saved yet)."""
    return workspace.data


@router.put("", response_model=AutobiographyData)
async def save_autobiography(
    body: AutobiographyData,
    workspace: StoryWorkspace = Depends(get_workspace)
):
    """Overwrite the saved aggregate with the submitted one and stamp updated_at."""
    workspace.data = body
    return await workspace.save()


@router.get("/progress", response_model=ProgressResponse)
async def get_progress(workspace: StoryWorkspace = Depends(get_workspace)):
    """Completion per step and overall percentage, computed from saved data."""
    return ProgressResponse(
        progress=workspace.progress(),
        completed=workspace.completed_steps(),
        steps=[StepStatus(**status) for status in step_statuses(workspace.data)]
    )


@router.get("/writing-styles", response_model=Dict[str, str])
async def list_writing_styles():
    return STYLE_LABELS


@router.get("/timeline", response_model=List[LifeEvent])
async def list_timeline(workspace: StoryWorkspace = Depends(get_workspace)):
    """Events in display order (ascending year, compared as text)."""
    return workspace.timeline()


@router.post("/timeline", response_model=LifeEvent, status_code=201)
async def add_timeline_event(
    body: LifeEventInput,
    workspace: StoryWorkspace = Depends(get_workspace)
):
    event = workspace.add_event(body)
    await workspace.save()
    return event


@router.put("/timeline/{event_id}", response_model=LifeEvent)
async def update_timeline_event(
    event_id: str,
    body: LifeEventInput,
    workspace: StoryWorkspace = Depends(get_workspace)
):
    if not workspace.update_event(event_id, body):
        raise NotFoundError("Timeline event not found")
    await workspace.save()
    return LifeEvent(id=event_id, **body.model_dump())


@router.delete("/timeline/{event_id}", response_model=RemoveEventResponse)
async def remove_timeline_event(
    event_id: str,
    workspace: StoryWorkspace = Depends(get_workspace)
):
    """Idempotent: removing an unknown id succeeds with removed=false and saves nothing."""
    removed = workspace.remove_event(event_id)
    if removed:
        await workspace.save()
    return RemoveEventResponse(removed=removed)
