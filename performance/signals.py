# performance/signals.py
"""
Signals:
- Employee.total_score follows every ScoreRecord create/update/delete.
- A record moved to another employee refreshes both employees.
"""

from django.db.models.signals import post_delete, post_save, pre_save
from django.dispatch import receiver

from performance.models import ScoreRecord
from performance.services import recompute_total_score


@receiver(pre_save, sender=ScoreRecord, dispatch_uid="performance.remember_previous_employee")
def remember_previous_employee(sender, instance, **kwargs):
    instance._previous_employee_id = None
    if instance.pk:
        instance._previous_employee_id = (
            ScoreRecord.objects.filter(pk=instance.pk).values_list("employee_id", flat=True).first()
        )


@receiver(post_save, sender=ScoreRecord, dispatch_uid="performance.total_score_on_save")
def total_score_on_save(sender, instance, raw=False, **kwargs):
    if raw:
        return
    recompute_total_score(instance.employee_id)
    previous = getattr(instance, "_previous_employee_id", None)
    if previous and previous != instance.employee_id:
        recompute_total_score(previous)


@receiver(post_delete, sender=ScoreRecord, dispatch_uid="performance.total_score_on_delete")
def total_score_on_delete(sender, instance, **kwargs):
    recompute_total_score(instance.employee_id)
