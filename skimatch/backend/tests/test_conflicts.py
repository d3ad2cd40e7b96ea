from datetime import date

import pytest
from conftest import make_listing, make_rule

from skimatch.core.conflicts import (
    Candidate,
    ConflictKind,
    ensure_no_conflicts,
    find_batch_conflicts,
    find_conflicts,
)
from skimatch.core.errors import ConflictError
from skimatch.db.models import SportSkill


def test_single_candidate_conflicts_with_overlapping_listing_on_same_date():
    existing = make_listing(5, day=date(2024, 2, 1), start_time="09:00", end_time="11:00")
    candidate = Candidate.single("teacher-1", date(2024, 2, 1), "10:00", "12:00", SportSkill.snowboarding)

    conflicts = find_conflicts(candidate, [existing], [])

    assert len(conflicts) == 1
    assert conflicts[0].kind == ConflictKind.single
    assert conflicts[0].source_id == 5
    assert (conflicts[0].start_time, conflicts[0].end_time) == ("09:00", "11:00")


def test_single_candidate_ignores_other_dates_teachers_and_touching_windows():
    existing = [
        make_listing(1, day=date(2024, 2, 2)),
        make_listing(2, teacher_id="teacher-2", day=date(2024, 2, 1)),
        make_listing(3, day=date(2024, 2, 1), start_time="11:00", end_time="12:00"),
    ]
    candidate = Candidate.single("teacher-1", date(2024, 2, 1), "09:00", "11:00", SportSkill.snowboarding)

    assert find_conflicts(candidate, existing, []) == []


def test_single_candidate_conflicts_with_rule_covering_the_date():
    # 2024-01-15 is a Monday inside the rule window
    rule = make_rule(9, day_of_week=1, start_time="08:00", end_time="10:00")
    candidate = Candidate.single("teacher-1", date(2024, 1, 15), "09:30", "10:30", SportSkill.skiing)

    conflicts = find_conflicts(candidate, [], [rule])

    assert [conflict.kind for conflict in conflicts] == [ConflictKind.recurring]
    assert conflicts[0].day_of_week == 1


def test_single_candidate_outside_rule_window_or_weekday_does_not_conflict():
    rule = make_rule(9, day_of_week=1)
    tuesday = Candidate.single("teacher-1", date(2024, 1, 16), "09:00", "11:00", SportSkill.snowboarding)
    after_window = Candidate.single("teacher-1", date(2024, 2, 5), "09:00", "11:00", SportSkill.snowboarding)

    assert find_conflicts(tuesday, [], [rule]) == []
    assert find_conflicts(after_window, [], [rule]) == []


def test_excluded_rule_date_is_free_for_a_single_listing():
    rule = make_rule(9, day_of_week=1)
    candidate = Candidate.single("teacher-1", date(2024, 1, 15), "09:00", "11:00", SportSkill.snowboarding)

    assert find_conflicts(candidate, [], [rule], exclusions_by_rule={9: {date(2024, 1, 15)}}) == []
    assert find_conflicts(candidate, [], [rule], exclusions_by_rule={9: {date(2024, 1, 22)}}) != []


def test_same_skill_mode_lets_different_sports_overlap():
    existing = make_listing(1, day=date(2024, 2, 1), skill=SportSkill.snowboarding)
    candidate = Candidate.single("teacher-1", date(2024, 2, 1), "09:00", "11:00", SportSkill.skiing)

    assert find_conflicts(candidate, [existing], [], same_skill_only=True) == []
    assert len(find_conflicts(candidate, [existing], [])) == 1


def test_recurring_candidate_checks_rules_on_same_weekday_only():
    rules = [
        make_rule(1, day_of_week=2, start_time="09:00", end_time="11:00"),
        make_rule(2, day_of_week=3, start_time="09:00", end_time="11:00"),
    ]
    candidate = Candidate.recurring("teacher-1", 2, "10:00", "12:00", SportSkill.snowboarding)

    conflicts = find_conflicts(candidate, [], rules)

    assert [conflict.source_id for conflict in conflicts] == [1]


def test_recurring_candidate_skips_single_listings_unless_asked():
    # 2024-01-10 is a Wednesday
    listing = make_listing(4, day=date(2024, 1, 10), start_time="09:00", end_time="11:00")
    candidate = Candidate.recurring(
        "teacher-1",
        3,
        "10:00",
        "12:00",
        SportSkill.snowboarding,
        start_date=date(2024, 1, 1),
        end_date=date(2024, 3, 31),
    )

    assert find_conflicts(candidate, [listing], []) == []
    conflicts = find_conflicts(candidate, [listing], [], check_single_listings_for_rules=True)
    assert [conflict.kind for conflict in conflicts] == [ConflictKind.single]


def test_ensure_no_conflicts_raises_with_first_conflict():
    existing = make_listing(5, day=date(2024, 2, 1))
    candidate = Candidate.single("teacher-1", date(2024, 2, 1), "10:00", "12:00", SportSkill.snowboarding)

    with pytest.raises(ConflictError) as excinfo:
        ensure_no_conflicts(candidate, [existing], [])

    assert excinfo.value.conflict.source_id == 5
    assert "9:00 AM - 11:00 AM" in str(excinfo.value)
    assert "2024-02-01" in str(excinfo.value)


def test_batch_conflicts_compare_entries_on_same_weekday():
    candidates = [
        Candidate.recurring("teacher-1", 1, "09:00", "12:00", SportSkill.snowboarding),
        Candidate.recurring("teacher-1", 2, "09:00", "12:00", SportSkill.snowboarding),
        Candidate.recurring("teacher-1", 1, "11:00", "13:00", SportSkill.snowboarding),
        Candidate.recurring("teacher-1", 1, "11:00", "13:00", SportSkill.skiing),
    ]

    found = find_batch_conflicts(candidates, same_skill_only=True)

    assert [index for index, _ in found] == [2]
    assert found[0][1].kind == ConflictKind.pending
    assert "Mondays" in found[0][1].describe()
