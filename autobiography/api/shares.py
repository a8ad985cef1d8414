"""
Shares and Admin REST API

- POST /api/shares: snapshot the submitted aggregate behind a public link
- GET /api/shares/{share_id}: read-only view of a snapshot, no sign-in needed
- GET /api/admin/autobiographies: allow-listed overview of every record
"""

from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from autobiography.auth import (
    AdminRecordRow,
    Identity,
    get_optional_identity,
    require_admin,
    summarize_records,
)
from autobiography.database import get_record_store
from autobiography.export import SharedStoryView, render_shared_view
from autobiography.persistence import RecordStore
from autobiography.schemas import AutobiographyData
from autobiography.settings import settings
from autobiography.sharing import create_share, fetch_shared_story


router = APIRouter(tags=["shares"])


# --- Pydantic Schemas ---

class ShareResponse(BaseModel):
    share_id: str
    link: str


# --- Endpoints ---

@router.post("/api/shares", response_model=ShareResponse, status_code=201)
async def share_story(
    body: AutobiographyData,
    identity: Optional[Identity] = Depends(get_optional_identity),
    store: RecordStore = Depends(get_record_store)
):
    """Create a new immutable snapshot. Every call yields a new share id."""
    result = await create_share(
        store,
        identity.user_id if identity else None,
        body,
        settings.PUBLIC_BASE_URL
    )
    return ShareResponse(share_id=result.share_id, link=result.link)


@router.get("/api/shares/{share_id}", response_model=SharedStoryView)
async def get_shared_story(
    share_id: str,
    store: RecordStore = Depends(get_record_store)
):
    shared = await fetch_shared_story(store, share_id)
    return render_shared_view(shared)


@router.get("/api/admin/autobiographies", response_model=List[AdminRecordRow])
async def list_autobiographies(
    _: Identity = Depends(require_admin),
    store: RecordStore = Depends(get_record_store)
):
    """Read-only overview across all users."""
    return summarize_records(await store.list_all())
