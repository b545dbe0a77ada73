import random

import pytest

from awards.exceptions import DuplicateCandidate
from awards.ranking import (
    DEFAULT_TIERS,
    Candidate,
    TierRule,
    assign_awards,
    tier_for_rank,
    tiers_from_settings,
    total_quota,
)

LEVEL_PRIORITY = {t.level: i for i, t in enumerate(DEFAULT_TIERS)}


def candidates(*scores):
    return [Candidate(employee_id=f"EMP{i:03d}", final_score=s) for i, s in enumerate(scores, start=1)]


def test_ties_break_on_employee_id():
    placements = assign_awards(2024, [
        Candidate("EMP002", 90),
        Candidate("EMP001", 90),
        Candidate("EMP003", 70),
    ])

    assert [(p.employee_id, p.rank, p.level, p.bonus) for p in placements] == [
        ("EMP001", 1, "special", 5000),
        ("EMP002", 2, "first", 3000),
        ("EMP003", 3, "first", 3000),
    ]


def test_awards_capped_at_total_quota():
    placements = assign_awards(2024, candidates(*range(100, 85, -1)))

    assert len(placements) == total_quota(DEFAULT_TIERS) == 11
    assert [p.rank for p in placements] == list(range(1, 12))
    levels = [p.level for p in placements]
    assert levels.count("special") == 1
    assert levels.count("first") == 2
    assert levels.count("second") == 3
    assert levels.count("excellent") == 5


def test_fewer_candidates_than_quota():
    placements = assign_awards(2024, candidates(10, 40, 30, 20))

    assert [p.final_score for p in placements] == [40, 30, 20, 10]
    assert [p.level for p in placements] == ["special", "first", "first", "second"]


def test_no_candidates_no_placements():
    assert assign_awards(2024, []) == []


def test_zero_scores_still_ranked():
    placements = assign_awards(2024, candidates(0, 0))

    assert [p.employee_id for p in placements] == ["EMP001", "EMP002"]


def test_duplicate_candidate_rejected():
    with pytest.raises(DuplicateCandidate) as exc_info:
        assign_awards(2024, [Candidate("EMP001", 10), Candidate("EMP001", 20)])

    assert exc_info.value.employee_id == "EMP001"
    assert exc_info.value.status == 500


def test_input_order_does_not_matter():
    pool = candidates(55, 80, 80, 12, 99, 3, 47, 80, 61, 20, 5, 70, 33)
    shuffled = pool[:]
    random.Random(7).shuffle(shuffled)

    assert assign_awards(2024, pool) == assign_awards(2024, shuffled)


@pytest.mark.parametrize("seed", [1, 2, 3])
def test_tiers_never_improve_down_the_ranking(seed):
    rng = random.Random(seed)
    pool = candidates(*[rng.randint(0, 30) for _ in range(20)])

    placements = assign_awards(2024, pool)

    priorities = [LEVEL_PRIORITY[p.level] for p in placements]
    assert priorities == sorted(priorities)
    scores = [p.final_score for p in placements]
    assert scores == sorted(scores, reverse=True)
    bonuses = [p.bonus for p in placements]
    assert bonuses == sorted(bonuses, reverse=True)


def test_tier_for_rank_boundaries():
    assert tier_for_rank(1, DEFAULT_TIERS).level == "special"
    assert tier_for_rank(3, DEFAULT_TIERS).level == "first"
    assert tier_for_rank(4, DEFAULT_TIERS).level == "second"
    assert tier_for_rank(11, DEFAULT_TIERS).level == "excellent"
    assert tier_for_rank(12, DEFAULT_TIERS) is None


def test_tiers_from_settings():
    assert tiers_from_settings(None) == DEFAULT_TIERS

    tiers = tiers_from_settings([{"level": "gold", "quota": "1", "bonus": 800}, {"level": "silver", "quota": 2, "bonus": 300}])
    assert tiers == (TierRule("gold", 1, 800), TierRule("silver", 2, 300))

    placements = assign_awards(2024, candidates(9, 8, 7, 6), tiers)
    assert [p.level for p in placements] == ["gold", "silver", "silver"]


def test_tiers_from_settings_rejects_negative_quota():
    with pytest.raises(ValueError):
        tiers_from_settings([{"level": "gold", "quota": -1, "bonus": 800}])
