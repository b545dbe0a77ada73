# awards/services.py
# ============================================================
# Annual award services
# - eligibility: who takes part in a year and with which score
# - generate(): rank, assign tiers, replace the year's awards atomically
# - read side: statistics, employee history, CSV rows
# ============================================================

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from django.apps import apps
from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction
from django.db.models import Avg, Count, Max, Min, Q, Sum
from django.utils import timezone

from performance.services import yearly_scores

from .exceptions import AlreadyGenerated, NoEligibleCandidates, PersistenceFailure
from .models import LEVEL_ORDER, AnnualAward, AwardCycle
from .ranking import Candidate, Placement, assign_awards, tiers_from_settings

logger = logging.getLogger(__name__)


def _employee_model():
    return apps.get_model("hr", "Employee")


RANKING_LIFETIME = "lifetime"
RANKING_YEARLY = "yearly"
RANKING_SCORES = (RANKING_LIFETIME, RANKING_YEARLY)


# ============================================================
# Data Contracts
# ============================================================

@dataclass(frozen=True)
class Eligibility:
    year: int
    total_employees: int
    candidates: tuple[Candidate, ...]


@dataclass
class GenerationResult:
    year: int
    awards: list = field(default_factory=list)
    candidates: dict = field(default_factory=dict)
    total_employees: int = 0
    replaced: int = 0

    @property
    def statistics(self) -> dict:
        counts = dict.fromkeys(LEVEL_ORDER, 0)
        for award in self.awards:
            counts[award.award_level] = counts.get(award.award_level, 0) + 1
        return {
            "totalEmployees": self.total_employees,
            "qualifiedEmployees": len(self.candidates),
            "awardedEmployees": len(self.awards),
            "totalBonusAmount": sum(a.bonus_amount for a in self.awards),
            "awardLevelCounts": counts,
        }

    def awards_as_dicts(self) -> list[dict]:
        rows = []
        for award in self.awards:
            candidate = self.candidates.get(award.employee.employee_id)
            rows.append({
                **award.as_dict(),
                "evaluationDetails": {
                    "yearlyScore": candidate.yearly_score if candidate else 0,
                    "totalScore": candidate.total_score if candidate else 0,
                    "recordCount": candidate.record_count if candidate else 0,
                },
            })
        return rows


# ============================================================
# Helpers
# ============================================================

def generation_year_bounds() -> tuple[int, int]:
    return settings.AWARD_MIN_YEAR, timezone.localdate().year


def check_generation_year(year: int) -> None:
    low, high = generation_year_bounds()
    if not low <= year <= high:
        raise ValidationError(f"年份必须在{low}到{high}之间", code="year_range")


def resolve_ranking_score(ranking_score: Optional[str]) -> str:
    mode = ranking_score or settings.AWARD_RANKING_SCORE
    if mode not in RANKING_SCORES:
        raise ValueError(f"Unknown ranking score {mode!r}; expected one of {RANKING_SCORES}")
    return mode


# ============================================================
# Eligibility
# ============================================================

def eligible_candidates(year: int, ranking_score: Optional[str] = None) -> Eligibility:
    """
    Active employees hired on or before Dec 31 of year, with their year and lifetime scores.
    The ranking score is the lifetime total unless ranking_score == "yearly".
    Negative ranking scores drop out.
    """
    mode = resolve_ranking_score(ranking_score)
    Employee = _employee_model()
    employees = list(
        Employee.objects.filter(
            work_status=Employee.WorkStatus.ACTIVE,
            hire_date__lte=date(year, 12, 31),
        ).values_list("pk", "employee_id", "total_score")
    )
    if not employees:
        raise NoEligibleCandidates(year)

    per_year = yearly_scores(year, [pk for pk, _, _ in employees])

    candidates = []
    for pk, employee_id, total_score in employees:
        ys = per_year.get(pk)
        yearly = ys.score if ys else 0
        final = yearly if mode == RANKING_YEARLY else (total_score or 0)
        if final < 0:
            continue
        candidates.append(Candidate(
            employee_id=employee_id,
            final_score=final,
            yearly_score=yearly,
            total_score=total_score or 0,
            record_count=ys.record_count if ys else 0,
        ))

    if not candidates:
        raise NoEligibleCandidates(year, NoEligibleCandidates.NO_QUALIFIED)

    return Eligibility(year=year, total_employees=len(employees), candidates=tuple(candidates))


# ============================================================
# Generation
# ============================================================

def _lock_cycle(year: int) -> AwardCycle:
    """Create the year's cycle row if needed and lock it for the rest of the transaction."""
    AwardCycle.objects.get_or_create(year=year)
    return AwardCycle.objects.select_for_update().get(year=year)


def _replace_year(cycle: AwardCycle, placements: list[Placement], mode: str) -> tuple[int, list[AnnualAward]]:
    year = cycle.year
    pk_by_employee_id = dict(
        _employee_model().objects.filter(employee_id__in=[p.employee_id for p in placements]).values_list("employee_id", "pk")
    )
    removed, _ = AnnualAward.objects.filter(year=year).delete()
    AnnualAward.objects.bulk_create([
        AnnualAward(
            year=year,
            employee_id=pk_by_employee_id[p.employee_id],
            final_score=p.final_score,
            rank=p.rank,
            award_level=p.level,
            bonus_amount=p.bonus,
        )
        for p in placements
    ])

    cycle.generated_at = timezone.now()
    cycle.generation_count += 1
    cycle.ranking_score = mode
    cycle.save(update_fields=["generated_at", "generation_count", "ranking_score", "updated_at"])

    awards = list(AnnualAward.objects.filter(year=year).select_related("employee").order_by("rank"))
    return removed, awards


def generate(year: int, force_regenerate: bool = False, ranking_score: Optional[str] = None) -> GenerationResult:
    """
    Generate the awards of year.

    - Refuses with AlreadyGenerated when the year has awards and force_regenerate is off.
    - Otherwise the old set is deleted and the new one inserted in one transaction,
      under the year's AwardCycle row lock. A failed write rolls everything back
      and surfaces as PersistenceFailure(previous_lost=False).
    """
    check_generation_year(year)
    mode = resolve_ranking_score(ranking_score)
    tiers = tiers_from_settings(settings.AWARD_TIERS)
    logger.info("Generating %s awards (force=%s, ranking=%s)", year, force_regenerate, mode)

    with transaction.atomic():
        cycle = _lock_cycle(year)

        existing = AnnualAward.objects.filter(year=year).count()
        if existing and not force_regenerate:
            logger.info("Awards for %s already exist (%s records); not regenerating", year, existing)
            raise AlreadyGenerated(year, existing)

        try:
            eligibility = eligible_candidates(year, mode)
        except NoEligibleCandidates as exc:
            logger.warning("No award candidates for %s (%s)", year, exc.reason)
            raise

        placements = assign_awards(year, eligibility.candidates, tiers)

        try:
            with transaction.atomic():
                removed, awards = _replace_year(cycle, placements, mode)
        except DatabaseError as exc:
            logger.exception("Persisting %s awards failed; rolled back", year)
            raise PersistenceFailure(year, previous_lost=False, cause=exc) from exc

    result = GenerationResult(
        year=year,
        awards=awards,
        candidates={c.employee_id: c for c in eligibility.candidates},
        total_employees=eligibility.total_employees,
        replaced=removed,
    )
    logger.info(
        "Generated %s awards for %s: %s employees, %s qualified, %s replaced",
        len(awards), year, result.total_employees, len(result.candidates), removed,
    )
    return result


# ============================================================
# Manual entry
# ============================================================

DUPLICATE_AWARD = "该员工在该年度已有评优记录"


def has_award(year: int, employee_id: str, exclude_pk=None) -> bool:
    """Whether the employee (by employee_id) already holds an award for year."""
    qs = AnnualAward.objects.filter(year=year, employee__employee_id=employee_id)
    if exclude_pk:
        qs = qs.exclude(pk=exclude_pk)
    return qs.exists()


# ============================================================
# Read side
# ============================================================

def _year_filter(year: Optional[int] = None, start_year: Optional[int] = None, end_year: Optional[int] = None) -> Q:
    if year:
        return Q(year=year)
    cond = Q()
    if start_year:
        cond &= Q(year__gte=start_year)
    if end_year:
        cond &= Q(year__lte=end_year)
    return cond


def _level_counts(prefix: str = "") -> dict:
    return {
        f"{level}Count": Count("id", filter=Q(**{f"{prefix}award_level": level}))
        for level in LEVEL_ORDER
    }


def award_statistics(year: Optional[int] = None, start_year: Optional[int] = None, end_year: Optional[int] = None) -> dict:
    scoped = AnnualAward.objects.filter(_year_filter(year, start_year, end_year))

    level_stats = [
        {
            "awardLevel": row["award_level"],
            "count": row["n"],
            "totalBonus": row["bonus"] or 0,
            "avgScore": round(row["avg"] or 0, 2),
            "minScore": row["min"],
            "maxScore": row["max"],
        }
        for row in scoped.values("award_level")
        .annotate(n=Count("id"), bonus=Sum("bonus_amount"), avg=Avg("final_score"),
                  min=Min("final_score"), max=Max("final_score"))
        .order_by("award_level")
    ]

    department_stats = [
        {
            "department": row["employee__department"],
            "count": row["n"],
            "totalBonus": row["bonus"] or 0,
            "avgScore": round(row["avg"] or 0, 2),
            **{f"{level}Count": row[f"{level}Count"] for level in LEVEL_ORDER},
        }
        for row in scoped.values("employee__department")
        .annotate(n=Count("id"), bonus=Sum("bonus_amount"), avg=Avg("final_score"), **_level_counts())
        .order_by("-n", "employee__department")
    ]

    # The trend always spans every year on file
    yearly_trend = [
        {
            "year": row["year"],
            "totalAwards": row["n"],
            "totalBonus": row["bonus"] or 0,
            "avgScore": round(row["avg"] or 0, 2),
            **{f"{level}Count": row[f"{level}Count"] for level in LEVEL_ORDER},
        }
        for row in AnnualAward.objects.values("year")
        .annotate(n=Count("id"), bonus=Sum("bonus_amount"), avg=Avg("final_score"), **_level_counts())
        .order_by("year")
    ]

    ranking_rows = list(
        scoped.values("employee_id", "employee__employee_id", "employee__name", "employee__department", "employee__position")
        .annotate(n=Count("id"), bonus=Sum("bonus_amount"), avg=Avg("final_score"), best=Min("rank"))
        .order_by("-n", "-bonus", "employee__employee_id")[:20]
    )
    history = {}
    for award in scoped.filter(employee_id__in=[r["employee_id"] for r in ranking_rows]).order_by("-year"):
        history.setdefault(award.employee_id, []).append({
            "year": award.year,
            "rank": award.rank,
            "awardLevel": award.award_level,
            "finalScore": award.final_score,
            "bonusAmount": award.bonus_amount,
        })
    employee_ranking = [
        {
            "employeeId": row["employee__employee_id"],
            "name": row["employee__name"],
            "department": row["employee__department"],
            "position": row["employee__position"],
            "totalAwards": row["n"],
            "totalBonus": row["bonus"] or 0,
            "avgScore": round(row["avg"] or 0, 2),
            "bestRank": row["best"],
            "awards": history.get(row["employee_id"], []),
        }
        for row in ranking_rows
    ]

    overall = scoped.aggregate(
        n=Count("id"), bonus=Sum("bonus_amount"), avg=Avg("final_score"),
        min=Min("final_score"), max=Max("final_score"),
    )

    return {
        "awardLevelStats": level_stats,
        "departmentStats": department_stats,
        "yearlyTrend": yearly_trend,
        "employeeRanking": employee_ranking,
        "overallStats": {
            "totalAwards": overall["n"],
            "totalBonus": overall["bonus"] or 0,
            "avgScore": round(overall["avg"] or 0, 2),
            "minScore": overall["min"] or 0,
            "maxScore": overall["max"] or 0,
        },
        "availableYears": available_years(),
    }


def available_years() -> list[int]:
    return list(AnnualAward.objects.order_by("-year").values_list("year", flat=True).distinct())


def employee_award_history(employee_id: str) -> list[AnnualAward]:
    return list(
        AnnualAward.objects.filter(employee__employee_id=employee_id)
        .select_related("employee")
        .order_by("-year", "rank")
    )


EXPORT_TITLE = "年度评优记录"
EXPORT_HEADER = ["排名", "员工ID", "员工姓名", "部门", "岗位", "年份", "奖项等级", "最终得分", "奖金金额", "创建时间"]


def export_rows(awards):
    """One spreadsheet row per award, in queryset order."""
    for award in awards:
        emp = award.employee
        yield [
            award.rank,
            emp.employee_id,
            emp.name,
            emp.department,
            emp.position,
            award.year,
            str(award.get_award_level_display()),
            award.final_score,
            award.bonus_amount,
            award.created_at,
        ]
