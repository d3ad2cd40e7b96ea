from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError
from conftest import make_listing, make_rule

from skimatch.core.filters import SlotFilter, filter_slots, sort_slots
from skimatch.core.recurrence import expand
from skimatch.core.slots import AvailabilitySlot
from skimatch.db.models import SportSkill


@pytest.fixture()
def slots():
    singles = [
        make_listing(1, day=date(2024, 1, 3), start_time="08:00", end_time="10:00", price=Decimal("40")),
        make_listing(2, day=date(2024, 1, 20), start_time="13:00", end_time="15:00", skill=SportSkill.skiing),
        make_listing(3, teacher_id="teacher-2", day=date(2024, 1, 9), start_time="10:00", end_time="12:00", price=Decimal("90")),
    ]
    rule = make_rule(4, day_of_week=1, start_time="09:00", end_time="11:00", price=Decimal("60"))
    result = [AvailabilitySlot.from_listing(listing) for listing in singles]
    result.extend(expand([rule], {}, date(2024, 1, 1)))
    return result


def test_no_criteria_returns_everything_in_order(slots):
    assert filter_slots(slots, SlotFilter()) == slots
    assert filter_slots(slots, None) == slots


def test_date_range_is_inclusive(slots):
    criteria = SlotFilter(date_range=(date(2024, 1, 8), date(2024, 1, 20)))

    result = filter_slots(slots, criteria)

    assert [slot.date for slot in result] == [
        date(2024, 1, 20),
        date(2024, 1, 9),
        date(2024, 1, 8),
        date(2024, 1, 15),
    ]


def test_skill_and_price_bounds(slots):
    assert [slot.id for slot in filter_slots(slots, SlotFilter(skill="skiing"))] == ["2"]

    priced = filter_slots(slots, SlotFilter(min_price=Decimal("50"), max_price=Decimal("60")))
    assert {slot.price for slot in priced} == {Decimal("50.00"), Decimal("60.00")}
    assert all(Decimal("50") <= slot.price <= Decimal("60") for slot in priced)


def test_time_range_requires_slot_inside_window(slots):
    criteria = SlotFilter(time_range=("8:00", "11:00"))

    result = filter_slots(slots, criteria)

    assert criteria.time_range == ("08:00", "11:00")
    assert {(slot.start_time, slot.end_time) for slot in result} == {("08:00", "10:00"), ("09:00", "11:00")}


def test_criteria_are_conjunctive(slots):
    criteria = SlotFilter(
        date_range=(date(2024, 1, 1), date(2024, 1, 31)),
        skill=SportSkill.snowboarding,
        max_price=Decimal("60"),
        time_range=("09:00", "12:00"),
    )

    result = filter_slots(slots, criteria)

    assert result and all(slot.is_recurring for slot in result)


@pytest.mark.parametrize(
    "criteria",
    [
        SlotFilter(),
        SlotFilter(skill=SportSkill.snowboarding),
        SlotFilter(date_range=(date(2024, 1, 5), date(2024, 1, 25)), min_price=Decimal("45")),
        SlotFilter(time_range=("10:00", "16:00")),
    ],
)
def test_filter_is_idempotent(slots, criteria):
    once = filter_slots(slots, criteria)
    assert filter_slots(once, criteria) == once


def test_invalid_time_range_is_rejected():
    with pytest.raises(ValidationError):
        SlotFilter(time_range=("25:00", "26:00"))


def test_sort_slots_orders_by_date_then_start_time(slots):
    ordered = sort_slots(slots)

    assert [slot.date for slot in ordered] == sorted(slot.date for slot in slots)
    assert ordered[0].id == "4-2024-01-01"
