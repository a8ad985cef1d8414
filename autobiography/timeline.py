"""
Timeline Editing

Create, update and delete life events on the aggregate. Events are stored in
insertion order; display order is always derived by `list_sorted`.

Update and remove of an unknown id are no-ops. They report whether a match
was found so callers can decide to surface it.
"""

import logging
from typing import List, Optional, Tuple

from autobiography.errors import ValidationError
from autobiography.schemas import AutobiographyData, LifeEvent, LifeEventInput
from autobiography.utils.id_generator import generate_event_id


logger = logging.getLogger(__name__)


def _require_title_and_year(fields: LifeEventInput) -> None:
    if not fields.title.strip() or not fields.year.strip():
        raise ValidationError("A timeline event needs both a title and a year")


def add_event(data: AutobiographyData, fields: LifeEventInput) -> Tuple[AutobiographyData, LifeEvent]:
    """Append a new event with a fresh id. Raises ValidationError if title or year is blank."""
    _require_title_and_year(fields)

    existing = {event.id for event in data.timeline}
    event_id = generate_event_id()
    while event_id in existing:
        event_id = generate_event_id()

    event = LifeEvent(id=event_id, **fields.model_dump())
    return data.with_timeline([*data.timeline, event]), event


def update_event(
    data: AutobiographyData,
    event_id: str,
    fields: LifeEventInput
) -> Tuple[AutobiographyData, bool]:
    """
    Replace every field of the event except its id.

    Returns (data, False) unchanged when no event has that id.
    """
    _require_title_and_year(fields)

    if find_event(data, event_id) is None:
        logger.debug("update_event: no event with id %s", event_id)
        return data, False

    replacement = LifeEvent(id=event_id, **fields.model_dump())
    events = [replacement if event.id == event_id else event for event in data.timeline]
    return data.with_timeline(events), True


def remove_event(data: AutobiographyData, event_id: str) -> Tuple[AutobiographyData, bool]:
    if find_event(data, event_id) is None:
        logger.debug("remove_event: no event with id %s", event_id)
        return data, False
    return data.with_timeline(e for e in data.timeline if e.id != event_id), True


def find_event(data: AutobiographyData, event_id: str) -> Optional[LifeEvent]:
    for event in data.timeline:
        if event.id == event_id:
            return event
    return None


def list_sorted(data: AutobiographyData) -> List[LifeEvent]:
    """
    Events by ascending year using plain string comparison, so "10" sorts
    before "9". Ties keep insertion order (sorted() is stable).
    """
    return sorted(data.timeline, key=lambda event: event.year)
