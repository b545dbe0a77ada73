# recruitment/admin.py
from django.contrib import admin

from base.admin_mixins import AppAdmin
from .models import RecruitmentRecord


@admin.register(RecruitmentRecord)
class RecruitmentRecordAdmin(AppAdmin):
    list_display = (
        "candidate_name",
        "interview_date",
        "applied_position",
        "channel",
        "phone",
        "has_trial",
        "trial_status",
        "status",
    )
    list_filter = ("status", "has_trial", "trial_status", "applied_position", "interview_date")
    search_fields = ("candidate_name", "phone", "id_card", "channel")
    date_hierarchy = "interview_date"
    ordering = ("-interview_date", "-id")
