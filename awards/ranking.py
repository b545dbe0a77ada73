# awards/ranking.py
# ============================================================
# Ranking and tier assignment (pure, no database access)
# - candidates sorted by final score desc, employee_id asc on ties
# - ranks walk the tier quotas in priority order
# - bonus is a function of the tier only
# ============================================================

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from .exceptions import DuplicateCandidate


# ============================================================
# Data Contracts
# ============================================================

@dataclass(frozen=True)
class TierRule:
    level: str
    quota: int
    bonus: int


@dataclass(frozen=True)
class Candidate:
    """One eligible employee; final_score is what the ranking sorts on."""
    employee_id: str
    final_score: int
    yearly_score: int = 0
    total_score: int = 0
    record_count: int = 0


@dataclass(frozen=True)
class Placement:
    year: int
    candidate: Candidate
    rank: int
    level: str
    bonus: int

    @property
    def employee_id(self) -> str:
        return self.candidate.employee_id

    @property
    def final_score(self) -> int:
        return self.candidate.final_score


DEFAULT_TIERS: tuple[TierRule, ...] = (
    TierRule("special", 1, 5000),
    TierRule("first", 2, 3000),
    TierRule("second", 3, 2000),
    TierRule("excellent", 5, 1000),
)


def tiers_from_settings(raw: Optional[Iterable[dict]]) -> tuple[TierRule, ...]:
    """Build the tier table from settings.AWARD_TIERS ([{level, quota, bonus}, ...], priority order)."""
    if not raw:
        return DEFAULT_TIERS
    tiers = tuple(TierRule(str(t["level"]), int(t["quota"]), int(t["bonus"])) for t in raw)
    for tier in tiers:
        if tier.quota < 0 or tier.bonus < 0:
            raise ValueError(f"Invalid award tier {tier!r}: quota and bonus must be >= 0")
    return tiers


def total_quota(tiers: Sequence[TierRule]) -> int:
    return sum(t.quota for t in tiers)


# ============================================================
# Ranking
# ============================================================

def sort_candidates(candidates: Iterable[Candidate]) -> list[Candidate]:
    return sorted(candidates, key=lambda c: (-c.final_score, c.employee_id))


def tier_for_rank(rank: int, tiers: Sequence[TierRule]) -> Optional[TierRule]:
    """Tier covering a 1-based rank, None once every quota is used up."""
    upper = 0
    for tier in tiers:
        upper += tier.quota
        if rank <= upper:
            return tier
    return None


def assign_awards(year: int, candidates: Sequence[Candidate], tiers: Sequence[TierRule] = DEFAULT_TIERS) -> list[Placement]:
    """
    Rank candidates and hand out tiers.

    Returns min(len(candidates), total quota) placements, ranks 1..n without gaps,
    tiers never improving as rank grows.
    """
    seen = set()
    for c in candidates:
        if c.employee_id in seen:
            raise DuplicateCandidate(c.employee_id, year)
        seen.add(c.employee_id)

    placements = []
    for rank, candidate in enumerate(sort_candidates(candidates), start=1):
        tier = tier_for_rank(rank, tiers)
        if tier is None:
            break
        placements.append(Placement(year=year, candidate=candidate, rank=rank, level=tier.level, bonus=tier.bonus))
    return placements
