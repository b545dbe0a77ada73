# performance/models.py
# ============================================================
# Behavior score events
# - score_change is derived from the behavior catalog on every save
# - Employee.total_score is the running sum (kept by signals)
# ============================================================

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.core.validators import MinLengthValidator
from django.db import models
from django.utils import timezone

from base.models import CreatedStampMixin
from base.validators import validate_image_url, validate_not_future

from .behaviors import BEHAVIOR_CHOICES, get_behavior, score_for

DEFAULT_RECORDER = "管理员"


class ScoreRecord(CreatedStampMixin, models.Model):
    employee = models.ForeignKey(
        "hr.Employee",
        on_delete=models.CASCADE,
        related_name="score_records",
    )
    record_date = models.DateField(default=timezone.localdate, validators=[validate_not_future])
    behavior_type = models.CharField(max_length=32, choices=BEHAVIOR_CHOICES, db_index=True)
    score_change = models.IntegerField(editable=False)
    reason = models.CharField(max_length=500, validators=[MinLengthValidator(2, "记录原因至少2个字符")])
    recorded_by = models.CharField(max_length=64, default=DEFAULT_RECORDER)
    evidence = models.CharField(max_length=500, blank=True, default="", validators=[validate_image_url])

    class Meta:
        db_table = "performance_score_record"
        ordering = ["-record_date", "-id"]
        indexes = [
            models.Index(fields=["employee", "-record_date"], name="perf_score_emp_date_idx"),
            models.Index(fields=["record_date"], name="perf_score_date_idx"),
        ]

    def clean(self):
        super().clean()
        if self.behavior_type and not score_for(self.behavior_type):
            raise ValidationError({"behavior_type": "无效的行为类型"})

    def save(self, *args, **kwargs):
        self.score_change = score_for(self.behavior_type)
        self.full_clean()
        return super().save(*args, **kwargs)

    @property
    def behavior(self):
        return get_behavior(self.behavior_type)

    def as_dict(self) -> dict:
        emp = self.employee
        return {
            "id": self.pk,
            "employee": {
                "id": emp.pk,
                "employeeId": emp.employee_id,
                "name": emp.name,
                "department": emp.department,
                "position": emp.position,
            },
            "recordDate": self.record_date,
            "behaviorType": self.behavior_type,
            "behaviorDescription": self.behavior.description if self.behavior else self.behavior_type,
            "scoreChange": self.score_change,
            "reason": self.reason,
            "recordedBy": self.recorded_by,
            "evidence": self.evidence,
            "createdAt": self.created_at,
        }

    def __str__(self):
        return f"{self.employee}: {self.behavior_type} ({self.score_change:+d})"
