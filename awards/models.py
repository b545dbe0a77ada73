# awards/models.py
# ============================================================
# Annual awards
# - AnnualAward: one row per (year, employee), written by generation or by hand
# - AwardCycle: one row per generated year, locked while the year is replaced
# ============================================================

from __future__ import annotations

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from base.models import CreatedStampMixin, TimeStampedMixin


class AwardLevel(models.TextChoices):
    SPECIAL = "special", _("特等奖")
    FIRST = "first", _("一等奖")
    SECOND = "second", _("二等奖")
    EXCELLENT = "excellent", _("优秀员工")


LEVEL_ORDER = [level.value for level in (AwardLevel.SPECIAL, AwardLevel.FIRST, AwardLevel.SECOND, AwardLevel.EXCELLENT)]


def validate_award_year(value):
    """Manual entries may be prepared for next year at the latest."""
    upper = timezone.localdate().year + 1
    if value < settings.AWARD_MIN_YEAR:
        raise ValidationError(f"年份不能早于{settings.AWARD_MIN_YEAR}年")
    if value > upper:
        raise ValidationError("年份不能超过明年")


class AnnualAward(CreatedStampMixin, models.Model):
    year = models.PositiveSmallIntegerField(validators=[validate_award_year], db_index=True)
    employee = models.ForeignKey(
        "hr.Employee",
        on_delete=models.CASCADE,
        related_name="annual_awards",
    )
    final_score = models.IntegerField(validators=[MinValueValidator(0, "最终得分不能为负数")])
    rank = models.PositiveIntegerField(validators=[MinValueValidator(1, "排名不能小于1")])
    award_level = models.CharField(max_length=16, choices=AwardLevel.choices, db_index=True)
    bonus_amount = models.PositiveIntegerField(validators=[MinValueValidator(0, "奖金金额不能为负数")])

    class Meta:
        db_table = "awards_annual_award"
        ordering = ["-year", "rank"]
        constraints = [
            models.UniqueConstraint(
                fields=["year", "employee"],
                name="awards_unique_year_employee",
                violation_error_message="该员工在该年度已有评优记录",
            ),
        ]
        indexes = [
            models.Index(fields=["year", "rank"], name="awards_year_rank_idx"),
        ]

    def as_dict(self) -> dict:
        emp = self.employee
        return {
            "id": self.pk,
            "year": self.year,
            "employee": {
                "id": emp.pk,
                "employeeId": emp.employee_id,
                "name": emp.name,
                "department": emp.department,
                "position": emp.position,
            },
            "finalScore": self.final_score,
            "rank": self.rank,
            "awardLevel": self.award_level,
            "awardLevelLabel": str(self.get_award_level_display()),
            "bonusAmount": self.bonus_amount,
            "createdAt": self.created_at,
        }

    def __str__(self):
        return f"{self.year} {self.get_award_level_display()} #{self.rank} {self.employee_id}"


class AwardCycle(TimeStampedMixin, models.Model):
    """
    Generation bookkeeping for one year.
    The row is taken with select_for_update while the year's awards are replaced,
    so two generations of the same year run one after the other.
    """
    year = models.PositiveSmallIntegerField(unique=True)
    generated_at = models.DateTimeField(null=True, blank=True)
    generation_count = models.PositiveIntegerField(default=0)
    ranking_score = models.CharField(max_length=16, blank=True, default="")

    class Meta:
        db_table = "awards_cycle"
        ordering = ["-year"]

    def __str__(self):
        return f"Award cycle {self.year} (x{self.generation_count})"
