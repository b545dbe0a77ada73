# recruitment/models.py
# ============================================================
# Candidate tracking: one row per interview, optionally followed by a trial
# ============================================================

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

from base.models import POSITION_CHOICES, UNASSIGNED, Gender, TimeStampedMixin
from base.security import mask_id_card
from base.validators import validate_chinese_name, validate_id_card, validate_not_future, validate_phone


class RecruitmentRecord(TimeStampedMixin, models.Model):

    class Status(models.TextChoices):
        INTERVIEWING = "interviewing", _("面试中")
        TRIAL = "trial", _("试岗中")
        HIRED = "hired", _("已录用")
        REJECTED = "rejected", _("已拒绝")

    class TrialStatus(models.TextChoices):
        EXCELLENT = "excellent", _("优秀")
        GOOD = "good", _("良好")
        AVERAGE = "average", _("一般")
        POOR = "poor", _("差")

    # Trials rated at or above "good" count as passed
    PASSED_TRIAL_STATUSES = (TrialStatus.EXCELLENT, TrialStatus.GOOD)

    interview_date = models.DateField(validators=[validate_not_future], db_index=True)
    candidate_name = models.CharField(max_length=20, db_index=True, validators=[validate_chinese_name])
    channel = models.CharField(max_length=64, blank=True, default="")
    gender = models.CharField(max_length=8, choices=Gender.choices)
    age = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(16, "年龄不能小于16岁"), MaxValueValidator(70, "年龄不能大于70岁")],
    )
    # Optional and not unique at the DB level; duplicates are refused by the API
    id_card = models.CharField(max_length=18, blank=True, default="", db_index=True, validators=[validate_id_card])
    phone = models.CharField(max_length=11, db_index=True, validators=[validate_phone])
    applied_position = models.CharField(max_length=16, choices=POSITION_CHOICES, default=UNASSIGNED, db_index=True)

    has_trial = models.BooleanField(default=False)
    trial_date = models.DateField(null=True, blank=True)
    trial_days = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(1, "试岗天数至少1天"), MaxValueValidator(90, "试岗天数最多90天")],
    )
    trial_status = models.CharField(max_length=16, choices=TrialStatus.choices, blank=True, default="")

    remark = models.CharField(max_length=500, blank=True, default="")
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.INTERVIEWING, db_index=True)

    class Meta:
        db_table = "recruitment_record"
        ordering = ["-interview_date", "-id"]

    def clean(self):
        super().clean()
        errors = {}
        if self.trial_date and self.interview_date and self.trial_date < self.interview_date:
            errors["trial_date"] = "试岗日期不能早于面试日期"
        if self.has_trial:
            if not self.trial_days:
                errors["trial_days"] = "试岗时必须填写试岗天数"
            if not self.trial_status:
                errors["trial_status"] = "试岗时必须填写试岗状况"
        if errors:
            raise ValidationError(errors)
        if self.id_card:
            self.id_card = self.id_card.upper()

    def save(self, *args, **kwargs):
        # A new record that already carries a trial starts in the trial stage
        if self._state.adding and self.has_trial and self.trial_date:
            self.status = self.Status.TRIAL
        self.full_clean()
        return super().save(*args, **kwargs)

    @property
    def trial_passed(self) -> bool:
        return self.has_trial and self.trial_status in self.PASSED_TRIAL_STATUSES

    def as_dict(self, reveal: bool = False) -> dict:
        return {
            "id": self.pk,
            "interviewDate": self.interview_date,
            "candidateName": self.candidate_name,
            "channel": self.channel,
            "gender": self.gender,
            "age": self.age,
            "idCard": self.id_card if reveal else mask_id_card(self.id_card),
            "phone": self.phone,
            "appliedPosition": self.applied_position,
            "hasTrial": self.has_trial,
            "trialDate": self.trial_date,
            "trialDays": self.trial_days,
            "trialStatus": self.trial_status,
            "remark": self.remark,
            "status": self.status,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    def __str__(self):
        return f"{self.candidate_name} @ {self.interview_date}"
