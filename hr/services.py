# hr/services.py
from django.db.models import Avg, Count
from django.utils import timezone

from base.security import mask_id_card
from hr.models import Employee


def employee_overview() -> dict:
    """Headcount figures for the employee list header."""
    qs = Employee.objects.all()
    active = qs.filter(work_status=Employee.WorkStatus.ACTIVE)
    agg = active.aggregate(avg_days=Avg("working_days"), avg_score=Avg("total_score"))

    by_status = dict(qs.values_list("work_status").annotate(n=Count("id")).order_by())
    by_department = [
        {"department": row["department"], "count": row["n"]}
        for row in active.values("department").annotate(n=Count("id")).order_by("-n", "department")
    ]

    return {
        "total": qs.count(),
        "active": by_status.get(Employee.WorkStatus.ACTIVE, 0),
        "resigned": by_status.get(Employee.WorkStatus.RESIGNED, 0),
        "leave": by_status.get(Employee.WorkStatus.LEAVE, 0),
        "averageWorkingDays": round(agg["avg_days"] or 0),
        "averageScore": round(agg["avg_score"] or 0, 1),
        "departmentDistribution": by_department,
    }


def score_ranking(limit: int = 10, department: str = ""):
    """Active employees ordered by lifetime score, employee_id breaking ties."""
    qs = Employee.objects.filter(work_status=Employee.WorkStatus.ACTIVE)
    if department:
        qs = qs.filter(department=department)
    return list(qs.order_by("-total_score", "employee_id")[:limit])


def refresh_working_days(today=None, queryset=None) -> int:
    """
    Recompute working_days for every active employee.
    Used by the nightly management command and the admin; returns the number of rows changed.
    """
    today = today or timezone.localdate()
    changed = []
    qs = Employee.objects.all() if queryset is None else queryset
    for emp in qs.filter(work_status=Employee.WorkStatus.ACTIVE).only("id", "regular_date", "working_days", "work_status"):
        before = emp.working_days
        emp.refresh_working_days(today)
        if emp.working_days != before:
            changed.append(emp)
    Employee.objects.bulk_update(changed, ["working_days"], batch_size=500)
    return len(changed)


EXPORT_TITLE = "员工信息"
EXPORT_HEADER = [
    "员工ID", "姓名", "性别", "手机号", "身份证号", "部门", "岗位",
    "在职状况", "在职天数", "总积分", "转正日期", "今日日期",
]


def export_rows(employees, reveal: bool = False, today=None):
    """One spreadsheet row per employee; working days are counted up to today."""
    today = today or timezone.localdate()
    for emp in employees:
        emp.refresh_working_days(today)
        yield [
            emp.employee_id,
            emp.name,
            str(emp.get_gender_display()),
            emp.phone,
            emp.id_card if reveal else mask_id_card(emp.id_card),
            emp.department,
            emp.position,
            str(emp.get_work_status_display()),
            emp.working_days,
            emp.total_score,
            emp.regular_date,
            today,
        ]
