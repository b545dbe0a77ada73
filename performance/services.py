# performance/services.py
# ======================================================================
# Score aggregation: lifetime totals, per-year sums and the statistics page
# ======================================================================

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from django.apps import apps
from django.db.models import Avg, Count, Q, Sum
from django.db.models.functions import ExtractMonth

from performance.behaviors import CATALOG
from performance.models import ScoreRecord


def _employee_model():
    return apps.get_model("hr", "Employee")


# ======================================================================
# Totals
# ======================================================================

def recompute_total_score(employee_pk) -> int:
    """
    Employee.total_score := sum of the employee's score events.
    Written with a queryset update so Employee.save() side effects do not run.
    """
    if not employee_pk:
        return 0
    total = ScoreRecord.objects.filter(employee_id=employee_pk).aggregate(s=Sum("score_change"))["s"] or 0
    _employee_model().objects.filter(pk=employee_pk).update(total_score=total)
    return total


def rebuild_total_scores(employee_pks: Optional[Iterable[int]] = None) -> int:
    """Recompute totals for the given employees (all when None); returns how many were processed."""
    Employee = _employee_model()
    qs = Employee.objects.all()
    if employee_pks is not None:
        qs = qs.filter(pk__in=list(employee_pks))
    count = 0
    for pk in qs.values_list("pk", flat=True).iterator():
        recompute_total_score(pk)
        count += 1
    return count


# ======================================================================
# Per-year sums (award eligibility)
# ======================================================================

@dataclass(frozen=True)
class YearlyScore:
    score: int
    record_count: int


def yearly_scores(year: int, employee_pks: Optional[Iterable[int]] = None) -> dict[int, YearlyScore]:
    """
    Sum and count of score events dated within [Jan 1, Dec 31] of year, keyed by employee pk.
    Employees without events in that year are absent from the result.
    """
    qs = ScoreRecord.objects.filter(record_date__gte=date(year, 1, 1), record_date__lte=date(year, 12, 31))
    if employee_pks is not None:
        qs = qs.filter(employee_id__in=list(employee_pks))
    rows = qs.values("employee_id").annotate(s=Sum("score_change"), n=Count("id")).order_by()
    return {row["employee_id"]: YearlyScore(score=row["s"] or 0, record_count=row["n"]) for row in rows}


# ======================================================================
# Statistics
# ======================================================================

def _date_filtered(start: Optional[date], end: Optional[date]):
    qs = ScoreRecord.objects.all()
    if start:
        qs = qs.filter(record_date__gte=start)
    if end:
        qs = qs.filter(record_date__lte=end)
    return qs


def employee_ranking(limit: int = 20) -> list[dict]:
    Employee = _employee_model()
    qs = Employee.objects.filter(work_status=Employee.WorkStatus.ACTIVE).order_by("-total_score", "employee_id")[:limit]
    return [
        {
            "id": e.pk,
            "employeeId": e.employee_id,
            "name": e.name,
            "department": e.department,
            "position": e.position,
            "totalScore": e.total_score,
        }
        for e in qs
    ]


def behavior_stats(start: Optional[date] = None, end: Optional[date] = None) -> list[dict]:
    rows = (
        _date_filtered(start, end)
        .values("behavior_type")
        .annotate(total=Sum("score_change"), n=Count("id"), avg=Avg("score_change"))
        .order_by("-n", "behavior_type")
    )
    result = []
    for row in rows:
        behavior = CATALOG.get(row["behavior_type"])
        result.append({
            "behaviorType": row["behavior_type"],
            "description": behavior.description if behavior else row["behavior_type"],
            "totalScore": row["total"] or 0,
            "count": row["n"],
            "avgScore": round(row["avg"] or 0, 2),
        })
    return result


def monthly_trend(year: int) -> list[dict]:
    """Points added and deducted per month of year (deductions reported as positive numbers)."""
    rows = (
        ScoreRecord.objects.filter(record_date__year=year)
        .annotate(month=ExtractMonth("record_date"))
        .values("month")
        .annotate(
            addition=Sum("score_change", filter=Q(score_change__gt=0)),
            deduction=Sum("score_change", filter=Q(score_change__lt=0)),
            addition_count=Count("id", filter=Q(score_change__gt=0)),
            deduction_count=Count("id", filter=Q(score_change__lt=0)),
        )
        .order_by()
    )
    by_month = {row["month"]: row for row in rows}
    result = []
    for month in range(1, 13):
        row = by_month.get(month, {})
        result.append({
            "month": month,
            "monthName": f"{month}月",
            "addition": row.get("addition") or 0,
            "deduction": abs(row.get("deduction") or 0),
            "additionCount": row.get("addition_count") or 0,
            "deductionCount": row.get("deduction_count") or 0,
        })
    return result


def department_comparison() -> list[dict]:
    Employee = _employee_model()
    rows = (
        Employee.objects.filter(work_status=Employee.WorkStatus.ACTIVE)
        .values("department")
        .annotate(total=Sum("total_score"), avg=Avg("total_score"), n=Count("id"))
        .order_by("-total", "department")
    )
    return [
        {
            "department": row["department"],
            "totalScore": row["total"] or 0,
            "avgScore": round(row["avg"] or 0, 2),
            "employeeCount": row["n"],
        }
        for row in rows
    ]


def overall_stats(start: Optional[date] = None, end: Optional[date] = None) -> dict:
    agg = _date_filtered(start, end).aggregate(
        total_records=Count("id"),
        positive=Sum("score_change", filter=Q(score_change__gt=0)),
        negative=Sum("score_change", filter=Q(score_change__lt=0)),
        avg=Avg("score_change"),
    )
    return {
        "totalRecords": agg["total_records"],
        "totalPositiveScore": agg["positive"] or 0,
        "totalNegativeScore": agg["negative"] or 0,
        "avgScore": round(agg["avg"] or 0, 2),
    }


def score_statistics(year: int, start: Optional[date] = None, end: Optional[date] = None) -> dict:
    return {
        "employeeRanking": employee_ranking(),
        "behaviorStats": behavior_stats(start, end),
        "monthlyTrend": monthly_trend(year),
        "departmentComparison": department_comparison(),
        "overallStats": overall_stats(start, end),
    }


EXPORT_TITLE = "积分记录"
EXPORT_HEADER = [
    "员工ID", "员工姓名", "部门", "岗位", "行为类型", "积分变化",
    "记录原因", "记录人", "记录日期", "创建时间",
]


def export_rows(records):
    for record in records:
        emp = record.employee
        behavior = CATALOG.get(record.behavior_type)
        yield [
            emp.employee_id,
            emp.name,
            emp.department,
            emp.position,
            behavior.description if behavior else record.behavior_type,
            record.score_change,
            record.reason,
            record.recorded_by,
            record.record_date,
            record.created_at,
        ]
