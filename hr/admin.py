# hr/admin.py
# ============================================================
# Django Admin (HR)
# working_days / total_score are derived and shown read-only.
# ============================================================

from __future__ import annotations

from django.contrib import admin, messages

from base.admin_mixins import AppAdmin
from . import models
from .services import refresh_working_days


@admin.register(models.Employee)
class EmployeeAdmin(AppAdmin):
    list_display = (
        "employee_id",
        "name",
        "gender",
        "department",
        "position",
        "work_status",
        "regular_date",
        "working_days",
        "total_score",
    )
    list_filter = ("work_status", "department", "position", "gender")
    search_fields = ("employee_id", "name", "phone", "id_card")
    ordering = ("-created_at",)
    derived_fields = ("working_days", "total_score")

    fieldsets = (
        ("Core", {
            "fields": ("employee_id", "name", "gender", "phone", "id_card"),
        }),
        ("Employment", {
            "fields": ("regular_date", "hire_date", "work_status", "department", "position", "working_days"),
        }),
        ("Performance", {
            "fields": ("total_score",),
        }),
        ("Audit", {
            "fields": ("created_at", "updated_at"),
        }),
    )

    actions = ["refresh_days"]

    @admin.action(description="Refresh working days of selected employees")
    def refresh_days(self, request, queryset):
        changed = refresh_working_days(queryset=queryset)
        messages.success(request, f"Working days refreshed for {changed} employee(s).")
