# performance/forms.py
from django import forms
from django.utils import timezone

from hr.models import Employee
from .models import DEFAULT_RECORDER, ScoreRecord


class ScoreRecordForm(forms.ModelForm):
    """
    employee is addressed by its business key (employeeId in payloads).
    """
    employee = forms.ModelChoiceField(
        queryset=Employee.objects.all(),
        to_field_name="employee_id",
        error_messages={"invalid_choice": "员工不存在"},
    )

    class Meta:
        model = ScoreRecord
        fields = ["employee", "record_date", "behavior_type", "reason", "recorded_by", "evidence"]
        error_messages = {
            "behavior_type": {"invalid_choice": "请选择有效的行为类型"},
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["record_date"].required = False
        self.fields["recorded_by"].required = False
        if self.instance.pk:
            self.initial["employee"] = self.instance.employee.employee_id

    def clean_record_date(self):
        return self.cleaned_data.get("record_date") or timezone.localdate()

    def clean_recorded_by(self):
        return self.cleaned_data.get("recorded_by") or DEFAULT_RECORDER
