# base/views.py
"""
Cross-app endpoints: health check, home dashboard numbers, ID-card reveal.
"""
import logging
import time
from datetime import timedelta

from django.apps import apps
from django.db import DatabaseError
from django.db.models import Avg, Count, Q
from django.utils import timezone
from django.views import View

from .api import ApiView, api_ok, api_error, parse_json_body
from .security import verify_reveal_password, grant_reveal

logger = logging.getLogger(__name__)


# ===== Helpers =====

def apply_search_filters(request, qs, search_fields=None):
    """
    Keyword search (?keyword= or ?q=) as OR-ed icontains over search_fields.
    """
    q = (request.GET.get("keyword") or request.GET.get("q") or "").strip()
    if q and search_fields:
        cond = Q()
        for f in search_fields:
            cond |= Q(**{f"{f}__icontains": q})
        qs = qs.filter(cond)
    return qs


def month_bounds(day):
    """First day of day's month and first day of the following month."""
    start = day.replace(day=1)
    nxt = (start + timedelta(days=32)).replace(day=1)
    return start, nxt


def percent_trend(current, previous) -> str:
    if previous:
        return f"{(current - previous) / previous * 100:.1f}"
    return "100.0" if current else "0.0"


# ===== Health =====

class HealthView(View):
    """Public health check: one DB round trip plus record counts."""

    collections = {
        "employees": ("hr", "Employee"),
        "recruitment": ("recruitment", "RecruitmentRecord"),
        "scores": ("performance", "ScoreRecord"),
        "awards": ("awards", "AnnualAward"),
    }
    slow_db_ms = 1000

    def get(self, request):
        started = time.monotonic()
        try:
            db_started = time.monotonic()
            counts = {
                key: apps.get_model(app_label, model_name).objects.count()
                for key, (app_label, model_name) in self.collections.items()
            }
            db_ms = int((time.monotonic() - db_started) * 1000)
        except DatabaseError as exc:
            logger.error("Health check failed: %s", exc)
            return api_error(
                "Database unavailable",
                status=503,
                data={
                    "status": "unhealthy",
                    "timestamp": timezone.now().isoformat(),
                    "responseTime": int((time.monotonic() - started) * 1000),
                },
            )

        checks = {"database": db_ms < self.slow_db_ms}
        return api_ok({
            "status": "healthy" if all(checks.values()) else "degraded",
            "timestamp": timezone.now().isoformat(),
            "responseTime": int((time.monotonic() - started) * 1000),
            "database": {"status": "connected", "responseTime": db_ms, "collections": counts},
            "checks": checks,
        })


# ===== Dashboard =====

class DashboardStatsView(ApiView):
    failure_message = "获取统计数据失败"

    def get(self, request):
        Employee = apps.get_model("hr", "Employee")
        RecruitmentRecord = apps.get_model("recruitment", "RecruitmentRecord")

        today = timezone.localdate()
        month_start, next_month = month_bounds(today)
        last_month_start, _ = month_bounds(month_start - timedelta(days=1))

        # 1) interviews: total and added this month
        total_interviews = RecruitmentRecord.objects.count()
        before_this_month = RecruitmentRecord.objects.filter(created_at__date__lt=month_start).count()
        new_interviews = total_interviews - before_this_month

        # 2) active employees vs. those already on file at the end of last month
        active = Employee.objects.filter(work_status=Employee.WorkStatus.ACTIVE)
        active_now = active.count()
        active_before = active.filter(created_at__date__lt=month_start).count()

        # 3) average lifetime score of active employees
        avg_now = active.aggregate(v=Avg("total_score"))["v"] or 0
        avg_before = active.filter(created_at__date__lt=month_start).aggregate(v=Avg("total_score"))["v"] or 0

        # 4) trial pass rate (excellent/good) for trials started this month vs. last month
        rate_now = self._trial_pass_rate(RecruitmentRecord, month_start, next_month)
        rate_before = self._trial_pass_rate(RecruitmentRecord, last_month_start, month_start)

        employee_trend = percent_trend(active_now, active_before)
        score_trend = percent_trend(avg_now, avg_before)
        trial_trend = percent_trend(rate_now, rate_before)

        return api_ok({
            "totalInterviews": {
                "value": str(total_interviews),
                "trend": f"本月+{new_interviews}",
                "isPositive": new_interviews >= 0,
            },
            "activeEmployees": {
                "value": str(active_now),
                "trend": f"{employee_trend}%",
                "isPositive": float(employee_trend) >= 0,
            },
            "averageScore": {
                "value": str(round(avg_now)),
                "trend": f"{score_trend}%",
                "isPositive": float(score_trend) >= 0,
            },
            "trialPassRate": {
                "value": str(round(rate_now)),
                "trend": f"{trial_trend}%",
                "isPositive": float(trial_trend) >= 0,
            },
        })

    @staticmethod
    def _trial_pass_rate(RecruitmentRecord, start, end) -> float:
        stats = RecruitmentRecord.objects.filter(
            has_trial=True, trial_date__gte=start, trial_date__lt=end
        ).aggregate(
            total=Count("id"),
            passed=Count("id", filter=Q(trial_status__in=RecruitmentRecord.PASSED_TRIAL_STATUSES)),
        )
        if not stats["total"]:
            return 0.0
        return stats["passed"] / stats["total"] * 100


# ===== ID card reveal =====

class RevealView(ApiView):
    """POST {"password": "..."}; on success the session may request unmasked ID cards."""

    def post(self, request):
        body = parse_json_body(request)
        if not verify_reveal_password(str(body.get("password") or "")):
            logger.warning("Rejected ID-card reveal attempt by user %s", request.user.pk)
            return api_error("密码错误，请重新输入", status=403)
        grant_reveal(request)
        return api_ok(message="验证成功")
