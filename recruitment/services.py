# recruitment/services.py
"""
Recruitment queries: duplicate detection and the statistics behind the dashboard.
"""
from __future__ import annotations

from django.db.models import Avg, Count, Q
from django.db.models.functions import ExtractMonth
from django.utils import timezone

from base.api import ApiError
from base.security import mask_id_card
from base.views import month_bounds

from .models import RecruitmentRecord

UNFILLED_CHANNEL = "未填写"
_STATUSES = [s.value for s in RecruitmentRecord.Status]


def _passed_filter():
    return Q(trial_status__in=RecruitmentRecord.PASSED_TRIAL_STATUSES)


# ==========================================================
# Duplicates
# ==========================================================

def ensure_unique_candidate(phone: str, id_card: str, instance=None) -> None:
    """
    A candidate is recorded once: the same ID card or phone cannot appear on two records.
    Raises ApiError naming the existing record.
    """
    qs = RecruitmentRecord.objects.all()
    if instance is not None and instance.pk:
        qs = qs.exclude(pk=instance.pk)

    if id_card and qs.filter(id_card=id_card).exists():
        if instance is not None and instance.pk:
            raise ApiError("该身份证号已存在其他招聘记录")
        raise ApiError("该身份证号已存在招聘记录")

    if phone:
        existing = qs.filter(phone=phone).first()
        if existing is not None:
            raise ApiError(f"手机号 {phone} 已存在招聘记录，应聘者：{existing.candidate_name}")


# ==========================================================
# Statistics
# ==========================================================

def basic_stats(today=None) -> dict:
    today = today or timezone.localdate()
    month_start, _ = month_bounds(today)
    trials = RecruitmentRecord.objects.filter(has_trial=True).aggregate(
        total=Count("id"), passed=Count("id", filter=_passed_filter())
    )
    return {
        "totalCount": RecruitmentRecord.objects.count(),
        "monthlyCount": RecruitmentRecord.objects.filter(created_at__date__gte=month_start).count(),
        "trialPassRate": trials["passed"] / trials["total"] if trials["total"] else 0,
    }


def monthly_trend(year: int) -> list[dict]:
    """Interviews per month of year, split by current status."""
    rows = (
        RecruitmentRecord.objects.filter(interview_date__year=year)
        .annotate(month=ExtractMonth("interview_date"))
        .values("month", "status")
        .annotate(n=Count("id"))
        .order_by()
    )
    months = {m: dict.fromkeys(_STATUSES, 0) for m in range(1, 13)}
    for row in rows:
        months[row["month"]][row["status"]] = row["n"]
    return [
        {"month": f"{m}月", "total": sum(counts.values()), **counts}
        for m, counts in months.items()
    ]


def status_distribution() -> list[dict]:
    labels = dict(RecruitmentRecord.Status.choices)
    rows = RecruitmentRecord.objects.values("status").annotate(n=Count("id")).order_by("status")
    return [
        {"status": str(labels.get(row["status"], row["status"])), "count": row["n"], "value": row["status"]}
        for row in rows
    ]


def trial_pass_rate_trend(year: int) -> list[dict]:
    rows = (
        RecruitmentRecord.objects.filter(has_trial=True, trial_date__year=year)
        .annotate(month=ExtractMonth("trial_date"))
        .values("month")
        .annotate(total=Count("id"), passed=Count("id", filter=_passed_filter()))
        .order_by()
    )
    by_month = {row["month"]: row for row in rows}
    result = []
    for m in range(1, 13):
        row = by_month.get(m) or {"total": 0, "passed": 0}
        total, passed = row["total"], row["passed"]
        result.append({
            "month": f"{m}月",
            "total": total,
            "passed": passed,
            "passRate": round(passed / total * 100) if total else 0,
        })
    return result


def channel_analysis() -> list[dict]:
    rows = (
        RecruitmentRecord.objects.values("channel")
        .annotate(total=Count("id"), hired=Count("id", filter=Q(status=RecruitmentRecord.Status.HIRED)))
        .order_by("-total", "channel")
    )
    return [
        {
            "channel": row["channel"] or UNFILLED_CHANNEL,
            "total": row["total"],
            "hired": row["hired"],
            "hireRate": round(row["hired"] / row["total"] * 100, 2) if row["total"] else 0,
        }
        for row in rows
    ]


def recruitment_stats(year: int) -> dict:
    return {
        "basicStats": basic_stats(),
        "monthlyTrend": monthly_trend(year),
        "statusDistribution": status_distribution(),
        "trialPassRateTrend": trial_pass_rate_trend(year),
        "channelAnalysis": channel_analysis(),
    }


def recruitment_overview() -> dict:
    """Headline figures: trial rate, trial drop-out rate, average trial length, per-status counts."""
    qs = RecruitmentRecord.objects.all()
    total = qs.count()
    trials = qs.filter(has_trial=True)
    total_trials = trials.count()
    # A trial counts as a drop-out when rated poor or a remark (leaving reason) was written
    dropped = trials.filter(Q(trial_status=RecruitmentRecord.TrialStatus.POOR) | ~Q(remark="")).count()
    avg_days = trials.filter(trial_days__gt=0).aggregate(v=Avg("trial_days"))["v"] or 0

    counts = dict.fromkeys(_STATUSES, 0)
    counts.update(dict(qs.values_list("status").annotate(n=Count("id")).order_by()))

    return {
        "totalRecruitment": {"value": total, "label": "招聘总人数"},
        "trialRate": {
            "value": round(total_trials / total * 100, 1) if total else 0,
            "label": "试岗率",
            "unit": "%",
        },
        "trialResignationRate": {
            "value": round(dropped / total_trials * 100, 1) if total_trials else 0,
            "label": "试岗离职率",
            "unit": "%",
        },
        "avgTrialDays": {"value": round(avg_days, 1), "label": "平均试岗天数", "unit": "天"},
        "statusCounts": counts,
        "hireRate": round(counts[RecruitmentRecord.Status.HIRED] / total * 100, 1) if total else 0,
    }


EXPORT_TITLE = "招聘记录"
EXPORT_HEADER = [
    "姓名", "性别", "身份证号", "电话", "面试日期", "是否试岗", "试岗日期",
    "试岗天数", "试岗状态", "备注内容", "招聘状态", "创建时间",
]
NOT_APPLICABLE = "-"


def export_rows(records, reveal: bool = False):
    """One spreadsheet row per candidate; trial columns read "-" when there was no trial."""
    for record in records:
        yield [
            record.candidate_name,
            str(record.get_gender_display()),
            record.id_card if reveal else mask_id_card(record.id_card),
            record.phone,
            record.interview_date,
            "是" if record.has_trial else "否",
            record.trial_date or NOT_APPLICABLE,
            record.trial_days or NOT_APPLICABLE,
            str(record.get_trial_status_display()) if record.trial_status else NOT_APPLICABLE,
            record.remark or NOT_APPLICABLE,
            str(record.get_status_display()),
            record.created_at,
        ]
