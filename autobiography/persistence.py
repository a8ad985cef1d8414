"""
Record Store

Persists one autobiography aggregate per user and the immutable snapshots
behind shareable links. Two implementations share one async interface:

- SQLRecordStore: SQLModel tables over an async session factory
- MemoryRecordStore: process-local dictionaries (no DATABASE_URL, tests)

Driver failures surface as ExternalServiceError; a missing aggregate is not
an error and loads as a fresh default one.
"""

import copy
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from sqlmodel import select

from autobiography.errors import ExternalServiceError
from autobiography.models import AutobiographyRecord, SharedStoryRecord, utcnow
from autobiography.schemas import AutobiographyData, SharedStory
from autobiography.utils.id_generator import generate_share_id


logger = logging.getLogger(__name__)


class RecordStore(ABC):
    """Async interface to the external document store."""

    @abstractmethod
    async def load(self, user_id: str) -> AutobiographyData:
        """Return the user's aggregate, or a default one if none is saved."""

    @abstractmethod
    async def save(self, user_id: str, data: AutobiographyData) -> None:
        """Overwrite the user's aggregate with `data`."""

    @abstractmethod
    async def create_share(self, owner_id: str, data: AutobiographyData) -> SharedStory:
        """Persist a new snapshot under a fresh share id."""

    @abstractmethod
    async def fetch_share(self, share_id: str) -> Optional[SharedStory]:
        """Return the snapshot, or None for unknown or empty ids."""

    @abstractmethod
    async def list_all(self) -> List[Tuple[str, AutobiographyData]]:
        """Every saved aggregate as (user_id, data) pairs."""


# =============================================================================
# IN-MEMORY STORE
# =============================================================================

class MemoryRecordStore(RecordStore):
    """Dictionary-backed store. State is lost on restart."""

    def __init__(self):
        self._records: Dict[str, AutobiographyData] = {}
        self._shares: Dict[str, SharedStory] = {}

    async def load(self, user_id: str) -> AutobiographyData:
        data = self._records.get(user_id)
        return copy.deepcopy(data) if data is not None else AutobiographyData()

    async def save(self, user_id: str, data: AutobiographyData) -> None:
        self._records[user_id] = copy.deepcopy(data)

    async def create_share(self, owner_id: str, data: AutobiographyData) -> SharedStory:
        share_id = generate_share_id()
        while share_id in self._shares:
            share_id = generate_share_id()
        shared = SharedStory(
            share_id=share_id,
            owner_id=owner_id,
            data=copy.deepcopy(data),
            created_at=utcnow()
        )
        self._shares[share_id] = shared
        return shared

    async def fetch_share(self, share_id: str) -> Optional[SharedStory]:
        if not share_id:
            return None
        return self._shares.get(share_id)

    async def list_all(self) -> List[Tuple[str, AutobiographyData]]:
        return [(user_id, copy.deepcopy(data)) for user_id, data in self._records.items()]


# =============================================================================
# SQL STORE
# =============================================================================

class SQLRecordStore(RecordStore):
    """
    SQLModel-backed store.

    Usage:
        store = SQLRecordStore(async_session_maker)
        data = await store.load(user_id)
    """

    def __init__(self, session_maker):
        self.session_maker = session_maker

    async def load(self, user_id: str) -> AutobiographyData:
        try:
            async with self.session_maker() as db:
                record = await db.get(AutobiographyRecord, user_id)
        except Exception as e:
            logger.error("Failed to load autobiography for %s: %s", user_id, e)
            raise ExternalServiceError("Failed to load your autobiography") from e

        if record is None:
            return AutobiographyData()
        return AutobiographyData.model_validate_json(record.data_json)

    async def save(self, user_id: str, data: AutobiographyData) -> None:
        try:
            async with self.session_maker() as db:
                record = await db.get(AutobiographyRecord, user_id)
                if record is None:
                    record = AutobiographyRecord(user_id=user_id, data_json="")
                record.data_json = data.model_dump_json()
                record.updated_at = _aware_utc(data.updated_at)
                db.add(record)
                await db.commit()
        except Exception as e:
            logger.error("Failed to save autobiography for %s: %s", user_id, e)
            raise ExternalServiceError("Failed to save") from e

    async def create_share(self, owner_id: str, data: AutobiographyData) -> SharedStory:
        try:
            async with self.session_maker() as db:
                record = SharedStoryRecord(
                    id=generate_share_id(),
                    owner_id=owner_id,
                    data_json=data.model_dump_json()
                )
                db.add(record)
                await db.commit()
                await db.refresh(record)
        except Exception as e:
            logger.error("Failed to create share for %s: %s", owner_id, e)
            raise ExternalServiceError("Failed to share") from e

        return _shared_from_record(record)

    async def fetch_share(self, share_id: str) -> Optional[SharedStory]:
        if not share_id:
            return None
        try:
            async with self.session_maker() as db:
                record = await db.get(SharedStoryRecord, share_id)
        except Exception as e:
            logger.error("Failed to load shared story %s: %s", share_id, e)
            raise ExternalServiceError("Failed to load shared story.") from e

        return _shared_from_record(record) if record is not None else None

    async def list_all(self) -> List[Tuple[str, AutobiographyData]]:
        try:
            async with self.session_maker() as db:
                result = await db.execute(
                    select(AutobiographyRecord).order_by(AutobiographyRecord.user_id)
                )
                records = result.scalars().all()
        except Exception as e:
            logger.error("Failed to list autobiographies: %s", e)
            raise ExternalServiceError("Unable to load user autobiographies") from e

        return [
            (record.user_id, AutobiographyData.model_validate_json(record.data_json))
            for record in records
        ]


def _shared_from_record(record: SharedStoryRecord) -> SharedStory:
    return SharedStory(
        share_id=record.id,
        owner_id=record.owner_id,
        data=AutobiographyData.model_validate_json(record.data_json),
        created_at=record.created_at
    )


def _aware_utc(value: Optional[datetime]) -> Optional[datetime]:
    # Columns are timezone-aware; naive stamps are taken as UTC
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)
