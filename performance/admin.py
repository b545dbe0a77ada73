# performance/admin.py
from django.contrib import admin, messages
from django.db import transaction

from base.admin_mixins import AppAdmin
from .models import ScoreRecord
from .services import rebuild_total_scores


@admin.register(ScoreRecord)
class ScoreRecordAdmin(AppAdmin):
    list_display = ("id", "employee", "record_date", "behavior_type", "score_change", "recorded_by", "created_at")
    list_filter = ("behavior_type", "record_date", "employee__department")
    search_fields = ("employee__name", "employee__employee_id", "reason")
    ordering = ("-record_date", "-id")
    raw_id_fields = ["employee"]
    list_select_related = ("employee",)
    derived_fields = ("score_change",)
    date_hierarchy = "record_date"

    actions = ["recompute_totals"]

    @admin.action(description="Recompute total score of the employees behind the selected records")
    def recompute_totals(self, request, queryset):
        with transaction.atomic():
            n = rebuild_total_scores(queryset.values_list("employee_id", flat=True).distinct())
        messages.success(request, f"Total score recomputed for {n} employee(s).")
