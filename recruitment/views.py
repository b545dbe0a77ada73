# recruitment/views.py
import logging

from django.utils import timezone

from base.api import (
    ApiView,
    api_ok,
    get_object_or_api_404,
    paginate,
    parse_json_body,
    query_choice,
    query_date,
    query_int,
)
from base.exports import export_response
from base.security import can_reveal
from base.views import apply_search_filters

from .forms import RecruitmentRecordForm
from .models import RecruitmentRecord
from .services import (
    EXPORT_HEADER,
    EXPORT_TITLE,
    ensure_unique_candidate,
    export_rows,
    recruitment_overview,
    recruitment_stats,
)

logger = logging.getLogger(__name__)

NOT_FOUND = "招聘记录不存在"


class RecruitmentApiView(ApiView):
    duplicate_message = "数据重复，可能是身份证号或手机号已存在"

    def serialize(self, record):
        return record.as_dict(reveal=can_reveal(self.request))

    def save_form(self, payload, instance=None):
        form = self.bind_form(RecruitmentRecordForm, payload, instance=instance, partial=instance is not None)
        ensure_unique_candidate(
            form.cleaned_data.get("phone"),
            form.cleaned_data.get("id_card"),
            instance=instance,
        )
        return form.save()


class RecruitmentFilterMixin:
    search_fields = ["candidate_name", "phone", "id_card"]

    def filtered_queryset(self, request):
        qs = apply_search_filters(request, RecruitmentRecord.objects.all(), self.search_fields)

        status = query_choice(request, "status")
        if status:
            qs = qs.filter(status=status)
        start = query_date(request, "startDate")
        if start:
            qs = qs.filter(interview_date__gte=start)
        end = query_date(request, "endDate")
        if end:
            qs = qs.filter(interview_date__lte=end)

        return qs.order_by("-interview_date", "-id")


class RecruitmentListView(RecruitmentFilterMixin, RecruitmentApiView):
    failure_message = "获取招聘记录失败"

    def get(self, request):
        page, pagination = paginate(request, self.filtered_queryset(request))
        return api_ok({
            "records": [self.serialize(r) for r in page],
            "pagination": pagination,
        })

    def post(self, request):
        record = self.save_form(parse_json_body(request))
        logger.info("Recruitment record %s created (%s)", record.pk, record.status)
        return api_ok(self.serialize(record), message="招聘记录创建成功", status=201)


class RecruitmentDetailView(RecruitmentApiView):
    failure_message = "操作招聘记录失败"

    def get(self, request, pk):
        record = get_object_or_api_404(RecruitmentRecord.objects.all(), NOT_FOUND, pk=pk)
        return api_ok(self.serialize(record))

    def put(self, request, pk):
        record = get_object_or_api_404(RecruitmentRecord.objects.all(), NOT_FOUND, pk=pk)
        record = self.save_form(parse_json_body(request), instance=record)
        logger.info("Recruitment record %s updated (%s)", record.pk, record.status)
        return api_ok(self.serialize(record), message="招聘记录更新成功")

    def delete(self, request, pk):
        record = get_object_or_api_404(RecruitmentRecord.objects.all(), NOT_FOUND, pk=pk)
        record.delete()
        logger.info("Recruitment record %s deleted", pk)
        return api_ok(message="招聘记录删除成功")


class RecruitmentStatsView(ApiView):
    failure_message = "获取统计数据失败"

    def get(self, request):
        year = query_int(request, "year", timezone.localdate().year)
        return api_ok(recruitment_stats(year))


class RecruitmentOverviewView(ApiView):
    failure_message = "获取统计数据失败"

    def get(self, request):
        return api_ok(recruitment_overview())


class RecruitmentExportView(RecruitmentFilterMixin, ApiView):
    failure_message = "导出招聘记录失败"

    def get(self, request):
        records = self.filtered_queryset(request)
        logger.info("User %s exported %s recruitment records", request.user.pk, records.count())
        rows = export_rows(records, reveal=can_reveal(request))
        return export_response(request, EXPORT_TITLE, EXPORT_HEADER, rows)
