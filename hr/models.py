# hr/models.py
# ============================================================
# Employee records
# - employee_id is the business key (EMP<ms timestamp> when not given)
# - working_days follows regular_date while the employee is active
# - total_score is owned by the performance app (sum of score events)
# ============================================================

from __future__ import annotations

import time

from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from base.models import DEPARTMENT_CHOICES, POSITION_CHOICES, UNASSIGNED, Gender, TimeStampedMixin
from base.security import mask_id_card
from base.validators import validate_chinese_name, validate_id_card, validate_not_future, validate_phone


def next_employee_id() -> str:
    """EMP + current epoch milliseconds, bumped until free."""
    stamp = int(time.time() * 1000)
    while Employee.objects.filter(employee_id=f"EMP{stamp}").exists():
        stamp += 1
    return f"EMP{stamp}"


class Employee(TimeStampedMixin, models.Model):

    class WorkStatus(models.TextChoices):
        ACTIVE = "active", _("在职")
        RESIGNED = "resigned", _("离职")
        LEAVE = "leave", _("请假")

    employee_id = models.CharField(max_length=32, unique=True, blank=True)
    name = models.CharField(max_length=20, db_index=True, validators=[validate_chinese_name])
    gender = models.CharField(max_length=8, choices=Gender.choices)
    phone = models.CharField(
        max_length=11,
        unique=True,
        validators=[validate_phone],
        error_messages={"unique": "该手机号已存在"},
    )
    id_card = models.CharField(
        max_length=18,
        unique=True,
        validators=[validate_id_card],
        error_messages={"unique": "该身份证号已存在"},
    )

    regular_date = models.DateField(validators=[validate_not_future])
    # Award eligibility is decided on hire_date; it defaults to regular_date
    hire_date = models.DateField(null=True, blank=True)
    working_days = models.PositiveIntegerField(default=0)

    work_status = models.CharField(
        max_length=16,
        choices=WorkStatus.choices,
        default=WorkStatus.ACTIVE,
        db_index=True,
    )
    department = models.CharField(max_length=16, choices=DEPARTMENT_CHOICES, default=UNASSIGNED, db_index=True)
    position = models.CharField(max_length=16, choices=POSITION_CHOICES, default=UNASSIGNED)

    total_score = models.IntegerField(default=0, db_index=True)

    class Meta:
        db_table = "hr_employee"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["work_status", "department"], name="hr_emp_status_dept_idx"),
        ]

    # ------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------
    def clean(self):
        super().clean()
        if self.id_card:
            self.id_card = self.id_card.upper()
        if self.hire_date and self.hire_date > timezone.localdate():
            raise ValidationError({"hire_date": "日期不能晚于当前日期"})

    def refresh_working_days(self, today=None):
        if self.work_status == self.WorkStatus.ACTIVE and self.regular_date:
            today = today or timezone.localdate()
            self.working_days = max(0, (today - self.regular_date).days)

    def save(self, *args, **kwargs):
        if not self.employee_id:
            self.employee_id = next_employee_id()
        if not self.hire_date:
            self.hire_date = self.regular_date
        self.refresh_working_days()
        self.full_clean()
        return super().save(*args, **kwargs)

    # ------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------
    def as_dict(self, reveal: bool = False) -> dict:
        return {
            "id": self.pk,
            "employeeId": self.employee_id,
            "name": self.name,
            "gender": self.gender,
            "phone": self.phone,
            "idCard": self.id_card if reveal else mask_id_card(self.id_card),
            "regularDate": self.regular_date,
            "hireDate": self.hire_date,
            "workingDays": self.working_days,
            "workStatus": self.work_status,
            "department": self.department,
            "position": self.position,
            "totalScore": self.total_score,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    def __str__(self):
        return f"{self.name} ({self.employee_id})"
