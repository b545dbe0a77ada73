# awards/views.py
"""
Annual award endpoints: generation, manual CRUD, statistics, history,
spreadsheet export and the printable certificate.
"""
import logging

from django.conf import settings
from django.contrib.auth.mixins import LoginRequiredMixin
from django.shortcuts import get_object_or_404
from django.utils import timezone
from django.views import View

from base.api import (
    ApiError,
    ApiView,
    api_error,
    api_ok,
    get_object_or_api_404,
    paginate,
    parse_json_body,
    query_choice,
    query_int,
    query_ordering,
)
from base.exports import export_response

from .exceptions import AwardGenerationError
from .forms import AnnualAwardForm, GenerateAwardsForm
from .models import AnnualAward
from .pdf import render_certificate
from .services import (
    DUPLICATE_AWARD,
    EXPORT_HEADER,
    EXPORT_TITLE,
    award_statistics,
    employee_award_history,
    export_rows,
    generate,
    has_award,
)

logger = logging.getLogger(__name__)

NOT_FOUND = "年度评优记录不存在"


# ==========================================================
# Generation
# ==========================================================

class GenerateAwardsView(ApiView):
    failure_message = "生成年度评优失败"

    def post(self, request):
        form = self.bind_form(GenerateAwardsForm, parse_json_body(request))
        data = form.cleaned_data
        try:
            result = generate(
                data["year"],
                force_regenerate=data["force_regenerate"],
                ranking_score=data.get("ranking_score") or None,
            )
        except AwardGenerationError as exc:
            return api_error(exc.message, status=exc.status, **exc.as_details())

        logger.info("User %s generated %s awards for %s", request.user.pk, len(result.awards), result.year)
        return api_ok(
            {"awards": result.awards_as_dicts(), "statistics": result.statistics},
            message=f"{result.year}年度评优生成成功，共产生{len(result.awards)}个获奖名额",
        )


# ==========================================================
# Manual CRUD
# ==========================================================

def _award_payload(request, instance=None) -> dict:
    """JSON body with employeeId mapped onto the form's employee field; duplicates refused up front."""
    data = parse_json_body(request)
    if "employee_id" in data:
        data["employee"] = data.pop("employee_id")

    year = data.get("year", instance.year if instance else None)
    employee_id = data.get("employee", instance.employee.employee_id if instance else None)
    try:
        year = int(year)
    except (TypeError, ValueError):
        return data
    if employee_id and has_award(year, employee_id, exclude_pk=instance.pk if instance else None):
        raise ApiError(DUPLICATE_AWARD)
    return data


class AwardFilterMixin:
    sort_fields = {
        "rank": "rank",
        "year": "year",
        "finalScore": "final_score",
        "bonusAmount": "bonus_amount",
        "createdAt": "created_at",
    }

    def filtered_queryset(self, request):
        qs = AnnualAward.objects.select_related("employee")

        year = query_int(request, "year")
        if year:
            qs = qs.filter(year=year)
        level = query_choice(request, "awardLevel")
        if level:
            qs = qs.filter(award_level=level)
        department = query_choice(request, "department")
        if department:
            qs = qs.filter(employee__department=department)

        return qs.order_by(*query_ordering(request, self.sort_fields, "rank", default_order="asc"))


class AwardListView(AwardFilterMixin, ApiView):
    failure_message = "获取年度评优记录失败"
    duplicate_message = DUPLICATE_AWARD

    def get(self, request):
        page, pagination = paginate(request, self.filtered_queryset(request))
        return api_ok({
            "awards": [a.as_dict() for a in page],
            "pagination": pagination,
        })

    def post(self, request):
        form = self.bind_form(AnnualAwardForm, _award_payload(request))
        award = form.save()
        logger.info("Award %s created manually by user %s", award, request.user.pk)
        return api_ok(award.as_dict(), message="年度评优记录创建成功", status=201)


class AwardDetailView(ApiView):
    failure_message = "操作年度评优记录失败"
    duplicate_message = DUPLICATE_AWARD

    def get(self, request, pk):
        award = get_object_or_api_404(AnnualAward.objects.select_related("employee"), NOT_FOUND, pk=pk)
        return api_ok(award.as_dict())

    def put(self, request, pk):
        award = get_object_or_api_404(AnnualAward.objects.select_related("employee"), NOT_FOUND, pk=pk)
        form = self.bind_form(AnnualAwardForm, _award_payload(request, award), instance=award, partial=True)
        award = form.save()
        logger.info("Award %s updated by user %s", award, request.user.pk)
        return api_ok(award.as_dict(), message="年度评优记录更新成功")

    def delete(self, request, pk):
        award = get_object_or_api_404(AnnualAward.objects.all(), NOT_FOUND, pk=pk)
        award.delete()
        logger.info("Award %s deleted by user %s", pk, request.user.pk)
        return api_ok(message="年度评优记录删除成功")


# ==========================================================
# Read side
# ==========================================================

class AwardStatisticsView(ApiView):
    failure_message = "获取年度评优统计失败"

    def get(self, request):
        return api_ok(award_statistics(
            year=query_int(request, "year"),
            start_year=query_int(request, "startYear"),
            end_year=query_int(request, "endYear"),
        ))


class EmployeeAwardHistoryView(ApiView):
    failure_message = "获取员工获奖记录失败"

    def get(self, request, employee_id):
        awards = employee_award_history(employee_id)
        return api_ok({
            "employeeId": employee_id,
            "awards": [a.as_dict() for a in awards],
            "totalAwards": len(awards),
            "totalBonus": sum(a.bonus_amount for a in awards),
        })


class AwardExportView(AwardFilterMixin, ApiView):
    """Same filters as the list, without pagination."""
    failure_message = "导出年度评优失败"

    def get(self, request):
        awards = self.filtered_queryset(request)
        logger.info("User %s exported %s awards", request.user.pk, awards.count())
        return export_response(request, EXPORT_TITLE, EXPORT_HEADER, export_rows(awards))


# ==========================================================
# Certificate
# ==========================================================

CERTIFICATE_STYLES = {
    "special": {"color": "#D4A017", "background": "#FFFEF7", "text": "#B45309", "description": "年度最佳员工"},
    "first": {"color": "#E53E3E", "background": "#FEF2F2", "text": "#B91C1C", "description": "年度优秀员工"},
    "second": {"color": "#3182CE", "background": "#EBF8FF", "text": "#1E40AF", "description": "年度表现优异员工"},
    "excellent": {"color": "#4CAF50", "background": "#F8FFF8", "text": "#166534", "description": "年度优秀员工"},
}


class AwardCertificateView(LoginRequiredMixin, View):

    def get(self, request, pk):
        award = get_object_or_404(AnnualAward.objects.select_related("employee"), pk=pk)
        context = {
            "award": award,
            "employee": award.employee,
            "style": CERTIFICATE_STYLES.get(award.award_level, CERTIFICATE_STYLES["excellent"]),
            "bonus": f"{award.bonus_amount:,}",
            "issue_date": timezone.localdate(),
            "issuer": settings.CERTIFICATE_ISSUER,
            "subtitle": settings.CERTIFICATE_SUBTITLE,
            "title": f"{award.year}年度获奖证书 - {award.employee.name}",
        }
        return render_certificate(request, "awards/certificate.html", context, f"certificate-{award.year}-{award.employee.employee_id}")
