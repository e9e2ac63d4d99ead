from __future__ import annotations

import pytest

from core.allocation import SlotArrangementMode, allocate_slots


def test_aggressive_descent_halves_per_priority() -> None:
    assert allocate_slots(16, 4, SlotArrangementMode.AGGRESSIVE_DESCENT) == [16, 8, 4, 2]


def test_aggressive_descent_floors_at_one() -> None:
    assert allocate_slots(5, 6, SlotArrangementMode.AGGRESSIVE_DESCENT) == [5, 2, 1, 1, 1, 1]


def test_equal_distribution_drops_remainder() -> None:
    assert allocate_slots(10, 4, SlotArrangementMode.EQUAL_DISTRIBUTION) == [2, 2, 2, 2]


def test_max_capacity_gives_whole_budget_to_every_priority() -> None:
    assert allocate_slots(5, 3, SlotArrangementMode.MAX_CAPACITY) == [5, 5, 5]


def test_zero_budget_is_only_floored_by_aggressive_descent() -> None:
    assert allocate_slots(0, 3, SlotArrangementMode.AGGRESSIVE_DESCENT) == [0, 1, 1]
    assert allocate_slots(0, 3, SlotArrangementMode.EQUAL_DISTRIBUTION) == [0, 0, 0]
    assert allocate_slots(0, 3, SlotArrangementMode.MAX_CAPACITY) == [0, 0, 0]


def test_equal_distribution_with_fewer_slots_than_priorities() -> None:
    assert allocate_slots(3, 8, "EQUAL_DISTRIBUTION") == [0] * 8


def test_default_mode_is_aggressive_descent() -> None:
    assert allocate_slots(8, 4) == [8, 4, 2, 1]


def test_no_priorities_gives_empty_allocation() -> None:
    for mode in SlotArrangementMode:
        assert allocate_slots(4, 0, mode) == []


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("max_capacity", SlotArrangementMode.MAX_CAPACITY),
        (" Equal_Distribution ", SlotArrangementMode.EQUAL_DISTRIBUTION),
        (SlotArrangementMode.AGGRESSIVE_DESCENT, SlotArrangementMode.AGGRESSIVE_DESCENT),
    ],
)
def test_mode_parse(raw, expected) -> None:
    assert SlotArrangementMode.parse(raw) is expected


def test_unknown_mode_is_rejected() -> None:
    with pytest.raises(ValueError, match="Invalid slot arrangement mode"):
        allocate_slots(4, 2, "ROUND_ROBIN")


def test_negative_inputs_are_rejected() -> None:
    with pytest.raises(ValueError):
        allocate_slots(-1, 2)
    with pytest.raises(ValueError):
        allocate_slots(4, -2)
