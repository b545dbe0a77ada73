# performance/views.py
import logging

from django.utils import timezone

from base.api import (
    ApiError,
    ApiView,
    api_ok,
    get_object_or_api_404,
    paginate,
    parse_json_body,
    query_choice,
    query_date,
    query_int,
    query_ordering,
)
from base.exports import export_response
from hr.models import Employee

from .behaviors import ADDITIONS, DEDUCTIONS
from .forms import ScoreRecordForm
from .models import ScoreRecord
from .services import EXPORT_HEADER, EXPORT_TITLE, export_rows, score_statistics

logger = logging.getLogger(__name__)

NOT_FOUND = "积分记录不存在"


def _score_payload(request) -> dict:
    """JSON body with employeeId mapped onto the form's employee field."""
    data = parse_json_body(request)
    if "employee_id" in data:
        employee_id = data.pop("employee_id")
        if not Employee.objects.filter(employee_id=employee_id).exists():
            raise ApiError("员工不存在", status=404)
        data["employee"] = employee_id
    return data


class ScoreFilterMixin:
    sort_fields = {
        "recordDate": "record_date",
        "scoreChange": "score_change",
        "createdAt": "created_at",
        "behaviorType": "behavior_type",
    }

    def filtered_queryset(self, request):
        qs = ScoreRecord.objects.select_related("employee")

        employee_id = (request.GET.get("employeeId") or "").strip()
        if employee_id:
            qs = qs.filter(employee__employee_id=employee_id)
        behavior_type = query_choice(request, "behaviorType")
        if behavior_type:
            qs = qs.filter(behavior_type=behavior_type)
        start = query_date(request, "startDate")
        if start:
            qs = qs.filter(record_date__gte=start)
        end = query_date(request, "endDate")
        if end:
            qs = qs.filter(record_date__lte=end)

        return qs.order_by(*query_ordering(request, self.sort_fields, "recordDate"))


class ScoreListView(ScoreFilterMixin, ApiView):
    failure_message = "获取积分记录失败"

    def get(self, request):
        page, pagination = paginate(request, self.filtered_queryset(request))
        return api_ok({
            "records": [r.as_dict() for r in page],
            "pagination": pagination,
        })

    def post(self, request):
        form = self.bind_form(ScoreRecordForm, _score_payload(request))
        record = form.save()
        logger.info(
            "Score event %s for %s: %s (%+d)",
            record.pk, record.employee.employee_id, record.behavior_type, record.score_change,
        )
        return api_ok(record.as_dict(), message="积分记录创建成功", status=201)


class ScoreDetailView(ApiView):
    failure_message = "操作积分记录失败"

    def get(self, request, pk):
        record = get_object_or_api_404(ScoreRecord.objects.select_related("employee"), NOT_FOUND, pk=pk)
        return api_ok(record.as_dict())

    def put(self, request, pk):
        record = get_object_or_api_404(ScoreRecord.objects.select_related("employee"), NOT_FOUND, pk=pk)
        form = self.bind_form(ScoreRecordForm, _score_payload(request), instance=record, partial=True)
        record = form.save()
        logger.info("Score event %s updated: %s (%+d)", record.pk, record.behavior_type, record.score_change)
        return api_ok(record.as_dict(), message="积分记录更新成功")

    def delete(self, request, pk):
        record = get_object_or_api_404(ScoreRecord.objects.all(), NOT_FOUND, pk=pk)
        record.delete()
        logger.info("Score event %s deleted", pk)
        return api_ok(message="积分记录删除成功")


class ScoreStatisticsView(ApiView):
    failure_message = "获取积分统计失败"

    def get(self, request):
        year = query_int(request, "year", timezone.localdate().year)
        start = query_date(request, "startDate")
        end = query_date(request, "endDate")
        return api_ok(score_statistics(year, start, end))


class BehaviorCatalogView(ApiView):

    def get(self, request):
        return api_ok({
            "deductions": [b.as_dict() for b in DEDUCTIONS],
            "additions": [b.as_dict() for b in ADDITIONS],
        })


class ScoreExportView(ScoreFilterMixin, ApiView):
    failure_message = "导出积分记录失败"

    def get(self, request):
        records = self.filtered_queryset(request)
        logger.info("User %s exported %s score events", request.user.pk, records.count())
        return export_response(request, EXPORT_TITLE, EXPORT_HEADER, export_rows(records))
