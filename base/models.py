from __future__ import annotations
from django.db import models
from django.utils.translation import gettext_lazy as _


# ------------ Choices shared by hr / recruitment --------------

class Gender(models.TextChoices):
    MALE = "male", _("男")
    FEMALE = "female", _("女")


UNASSIGNED = "未分配"

DEPARTMENT_CHOICES = [
    ("销售部", "销售部"),
    ("运营部", "运营部"),
    ("人事部", "人事部"),
    (UNASSIGNED, UNASSIGNED),
]

POSITION_CHOICES = [
    ("销售主管", "销售主管"),
    ("人事主管", "人事主管"),
    ("运营主管", "运营主管"),
    ("销售", "销售"),
    ("运营", "运营"),
    ("助理", "助理"),
    ("客服", "客服"),
    ("美工", "美工"),
    (UNASSIGNED, UNASSIGNED),
]


# ------------ Mixins --------------

class TimeStampedMixin(models.Model):
    """created_at / updated_at, both indexed."""
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True, db_index=True)

    class Meta:
        abstract = True


class CreatedStampMixin(models.Model):
    """Append-only records only carry a creation stamp."""
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        abstract = True
