import pytest

from autobiography.errors import ValidationError
from autobiography.schemas import AutobiographyData, PersonalInfo, SECTION_KEYS
from autobiography.steps import (
    STEPS,
    FormStateMachine,
    completed_steps,
    is_step_complete,
    progress,
    step_statuses,
)


def test_seven_steps_in_fixed_order():
    assert [step.key for step in STEPS] == ["personal_info", *SECTION_KEYS]


def test_empty_aggregate_has_no_progress():
    data = AutobiographyData()
    assert progress(data) == 0
    assert completed_steps(data) == []


@pytest.mark.parametrize("k", range(8))
def test_progress_matches_rounded_fraction(k):
    data = AutobiographyData()
    keys = [step.key for step in STEPS][:k]
    for key in keys:
        if key == "personal_info":
            data = data.with_personal_info(PersonalInfo(full_name="Ada"))
        else:
            data = data.with_section(key, "something")

    assert len(completed_steps(data)) == k
    assert progress(data) == round(100 * k / 7)


def test_progress_is_monotonic_as_sections_fill():
    data = AutobiographyData()
    seen = [progress(data)]
    for key in reversed(SECTION_KEYS):
        data = data.with_section(key, "filled")
        seen.append(progress(data))
    assert seen == sorted(seen)
    assert seen[-1] == 86


def test_whitespace_only_text_is_not_complete():
    data = AutobiographyData().with_section("childhood_memories", "   \n\t")
    assert not is_step_complete(data, "childhood_memories")


def test_any_personal_info_field_completes_the_step():
    data = AutobiographyData().with_personal_info(PersonalInfo(birthplace="Lagos"))
    assert is_step_complete(data, "personal_info")
    assert not is_step_complete(
        AutobiographyData().with_personal_info(PersonalInfo(full_name="  ")),
        "personal_info"
    )


def test_single_name_reports_fourteen_percent():
    data = AutobiographyData().with_personal_info(PersonalInfo(full_name="Ada"))
    assert progress(data) == 14


def test_step_statuses_follow_data():
    data = AutobiographyData().with_section("dreams_beliefs", "Peace")
    statuses = {s["key"]: s["completed"] for s in step_statuses(data)}
    assert statuses["dreams_beliefs"] is True
    assert statuses["personal_info"] is False


def test_unknown_step_key_is_rejected():
    with pytest.raises(ValidationError):
        is_step_complete(AutobiographyData(), "hobbies")


# --- FormStateMachine ---

def test_machine_starts_at_first_step():
    machine = FormStateMachine()
    assert machine.index == 0
    assert machine.current.key == "personal_info"
    assert machine.is_first


def test_retreat_clamps_at_zero():
    machine = FormStateMachine()
    machine.retreat()
    assert machine.index == 0


def test_advance_clamps_at_last_step():
    machine = FormStateMachine()
    for _ in range(10):
        machine.advance()
    assert machine.index == len(STEPS) - 1
    assert machine.is_last
    assert machine.current.key == "dreams_beliefs"


def test_jump_to_ignores_completion():
    machine = FormStateMachine()
    assert machine.jump_to(5).key == "life_challenges"
    machine.retreat()
    assert machine.index == 4
    machine.jump_to(0)
    machine.advance()
    assert machine.index == 1


@pytest.mark.parametrize("index", [-1, 7, 100])
def test_jump_to_out_of_range_is_rejected(index):
    machine = FormStateMachine()
    machine.jump_to(3)
    with pytest.raises(ValidationError):
        machine.jump_to(index)
    assert machine.index == 3


def test_machine_rejects_empty_step_list():
    with pytest.raises(ValueError):
        FormStateMachine(steps=())
