"""
Share Links

Creating a share persists a new immutable snapshot and returns the public
link; it is the only projection with an external side effect. Sharing again
always creates a new snapshot with a new id.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from autobiography.errors import AuthorizationError, NotFoundError, ValidationError
from autobiography.persistence import RecordStore
from autobiography.schemas import AutobiographyData, SharedStory


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShareResult:
    share_id: str
    link: str


def build_share_link(share_id: str, base_url: str) -> str:
    return f"{base_url.rstrip('/')}/share/{share_id}"


async def create_share(
    store: RecordStore,
    owner_id: Optional[str],
    data: AutobiographyData,
    base_url: str
) -> ShareResult:
    """
    Snapshot `data` for `owner_id` and return its public link.

    Nothing is persisted when the story is blank or no owner is signed in.
    """
    if not data.has_story():
        raise ValidationError("Generate or write a story before sharing")
    if not owner_id:
        raise AuthorizationError("Sign in to create a share link")

    shared = await store.create_share(owner_id, data.model_copy(deep=True))
    logger.info("Created share %s for %s", shared.share_id, owner_id)
    return ShareResult(share_id=shared.share_id, link=build_share_link(shared.share_id, base_url))


async def fetch_shared_story(store: RecordStore, share_id: Optional[str]) -> SharedStory:
    shared = await store.fetch_share(share_id or "")
    if shared is None:
        raise NotFoundError("Story not found or access revoked.")
    return shared
