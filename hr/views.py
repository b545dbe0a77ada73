# hr/views.py
"""
Employee API.

- Views are thin: validation lives in EmployeeForm / Employee.clean
- ID cards leave the server masked unless the session unlocked them
"""
import logging

from base.api import (
    ApiView,
    api_ok,
    get_object_or_api_404,
    paginate,
    parse_json_body,
    query_choice,
    query_int,
    query_ordering,
)
from base.exports import export_response
from base.security import can_reveal
from base.views import apply_search_filters

from .forms import EmployeeForm
from .models import Employee
from .services import EXPORT_HEADER, EXPORT_TITLE, employee_overview, export_rows, score_ranking

logger = logging.getLogger(__name__)

NOT_FOUND = "员工不存在"


class EmployeeApiView(ApiView):
    duplicate_message = "员工编号、手机号或身份证号已存在"

    def serialize(self, employee):
        return employee.as_dict(reveal=can_reveal(self.request))


# ==========================================================
# Collection
# ==========================================================

class EmployeeFilterMixin:
    search_fields = ["name", "employee_id", "phone"]
    sort_fields = {
        "createdAt": "created_at",
        "regularDate": "regular_date",
        "workingDays": "working_days",
        "totalScore": "total_score",
        "employeeId": "employee_id",
    }

    def filtered_queryset(self, request):
        qs = apply_search_filters(request, Employee.objects.all(), self.search_fields)

        department = query_choice(request, "department")
        if department:
            qs = qs.filter(department=department)
        position = query_choice(request, "position")
        if position:
            qs = qs.filter(position=position)
        work_status = query_choice(request, "workStatus")
        if work_status:
            qs = qs.filter(work_status=work_status)

        return qs.order_by(*query_ordering(request, self.sort_fields, "createdAt"))


class EmployeeListView(EmployeeFilterMixin, EmployeeApiView):
    failure_message = "获取员工列表失败"

    def get(self, request):
        page, pagination = paginate(request, self.filtered_queryset(request))
        return api_ok({
            "employees": [self.serialize(e) for e in page],
            "pagination": pagination,
        })

    def post(self, request):
        form = self.bind_form(EmployeeForm, parse_json_body(request))
        employee = form.save()
        logger.info("Employee %s created by user %s", employee.employee_id, request.user.pk)
        return api_ok(self.serialize(employee), message="员工创建成功", status=201)


# ==========================================================
# Item
# ==========================================================

class EmployeeDetailView(EmployeeApiView):
    failure_message = "获取员工信息失败"

    def get(self, request, pk):
        employee = get_object_or_api_404(Employee.objects.all(), NOT_FOUND, pk=pk)
        return api_ok(self.serialize(employee))

    def put(self, request, pk):
        employee = get_object_or_api_404(Employee.objects.all(), NOT_FOUND, pk=pk)
        form = self.bind_form(EmployeeForm, parse_json_body(request), instance=employee, partial=True)
        employee = form.save()
        logger.info("Employee %s updated by user %s", employee.employee_id, request.user.pk)
        return api_ok(self.serialize(employee), message="员工信息更新成功")

    def delete(self, request, pk):
        employee = get_object_or_api_404(Employee.objects.all(), NOT_FOUND, pk=pk)
        employee_id = employee.employee_id
        # Score events and awards go with the employee (CASCADE)
        employee.delete()
        logger.info("Employee %s deleted by user %s", employee_id, request.user.pk)
        return api_ok(message="员工删除成功")


# ==========================================================
# Aggregates
# ==========================================================

class EmployeeOverviewView(ApiView):
    failure_message = "获取员工概览失败"

    def get(self, request):
        return api_ok(employee_overview())


class EmployeeRankingView(EmployeeApiView):
    failure_message = "获取积分排行失败"

    def get(self, request):
        limit = max(1, min(query_int(request, "limit", 10), 100))
        employees = score_ranking(limit=limit, department=query_choice(request, "department"))
        return api_ok([
            {"rank": i, **self.serialize(e)}
            for i, e in enumerate(employees, start=1)
        ])


class EmployeeExportView(EmployeeFilterMixin, ApiView):
    """List filters applied to the whole table; ID cards follow the session's reveal state."""
    failure_message = "导出员工信息失败"

    def get(self, request):
        employees = self.filtered_queryset(request)
        logger.info("User %s exported %s employees", request.user.pk, employees.count())
        rows = export_rows(employees, reveal=can_reveal(request))
        return export_response(request, EXPORT_TITLE, EXPORT_HEADER, rows)
