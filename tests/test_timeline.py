import pytest

from autobiography.errors import ValidationError
from autobiography.schemas import AutobiographyData, LifeEventInput
from autobiography.timeline import (
    add_event,
    find_event,
    list_sorted,
    remove_event,
    update_event,
)


def _add(data, title, year, **extra):
    return add_event(data, LifeEventInput(title=title, year=year, **extra))


def test_add_assigns_fresh_unique_ids():
    data = AutobiographyData()
    data, first = _add(data, "Started university", "1994")
    data, second = _add(data, "Graduated", "1998")

    assert first.id != second.id
    assert first.id.startswith("EVT_")
    assert [e.id for e in data.timeline] == [first.id, second.id]


def test_add_does_not_touch_the_original_aggregate():
    original = AutobiographyData()
    updated, _ = _add(original, "Born", "1980")
    assert original.timeline == []
    assert len(updated.timeline) == 1


@pytest.mark.parametrize("title, year", [("", "1994"), ("Moved", ""), ("  ", "1994"), ("Moved", "   ")])
def test_add_requires_title_and_year(title, year):
    with pytest.raises(ValidationError):
        _add(AutobiographyData(), title, year)


def test_list_sorted_orders_by_year():
    data = AutobiographyData()
    data, _ = _add(data, "Moved abroad", "2003")
    data, _ = _add(data, "Started university", "1994")

    assert [e.year for e in list_sorted(data)] == ["1994", "2003"]
    # storage keeps insertion order
    assert [e.year for e in data.timeline] == ["2003", "1994"]


def test_list_sorted_compares_years_as_text():
    data = AutobiographyData()
    data, _ = _add(data, "Age nine", "9")
    data, _ = _add(data, "Age ten", "10")

    assert [e.year for e in list_sorted(data)] == ["10", "9"]


def test_list_sorted_keeps_insertion_order_for_ties():
    data = AutobiographyData()
    data, a = _add(data, "First", "2001")
    data, b = _add(data, "Earlier", "1999")
    data, c = _add(data, "Second", "2001")

    assert [e.id for e in list_sorted(data)] == [b.id, a.id, c.id]


def test_update_replaces_all_fields_but_id():
    data, event = _add(AutobiographyData(), "Moved", "2001", notes="boxes", image_url="https://x/y.jpg")
    data, found = update_event(data, event.id, LifeEventInput(title="Moved to Paris", year="2002"))

    assert found is True
    updated = find_event(data, event.id)
    assert updated.title == "Moved to Paris"
    assert updated.year == "2002"
    assert updated.notes is None
    assert updated.image_url is None


def test_update_unknown_id_leaves_timeline_unchanged():
    data, _ = _add(AutobiographyData(), "Moved", "2001")
    before = list(data.timeline)

    after, found = update_event(data, "EVT_missing", LifeEventInput(title="X", year="1"))

    assert found is False
    assert after.timeline == before
    assert len(after.timeline) == len(before)


def test_remove_twice_is_idempotent():
    data, event = _add(AutobiographyData(), "Moved", "2001")
    data, _ = _add(data, "Married", "2005")

    data, first = remove_event(data, event.id)
    data, second = remove_event(data, event.id)

    assert first is True
    assert second is False
    assert [e.title for e in data.timeline] == ["Married"]
