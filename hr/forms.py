from django import forms

from base.models import UNASSIGNED
from .models import Employee


# ============================================================
# EmployeeForm
# ============================================================
class EmployeeForm(forms.ModelForm):
    """
    JSON payloads are bound straight to this form (camelCase keys already snake_cased).
    total_score and working_days are derived, never accepted from clients.
    """
    # Omitted in a payload -> model default
    defaulted_fields = {
        "work_status": Employee.WorkStatus.ACTIVE,
        "department": UNASSIGNED,
        "position": UNASSIGNED,
    }

    class Meta:
        model = Employee
        fields = [
            "employee_id",
            "name",
            "gender",
            "phone",
            "id_card",
            "regular_date",
            "hire_date",
            "work_status",
            "department",
            "position",
        ]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        for name in self.defaulted_fields:
            self.fields[name].required = False

    def clean_id_card(self):
        return (self.cleaned_data.get("id_card") or "").strip().upper()

    def clean_employee_id(self):
        return (self.cleaned_data.get("employee_id") or "").strip()

    def clean(self):
        cleaned = super().clean()
        for name, default in self.defaulted_fields.items():
            if name in cleaned and not cleaned[name]:
                cleaned[name] = default
        regular_date = cleaned.get("regular_date")
        hire_date = cleaned.get("hire_date")
        if regular_date and hire_date and hire_date > regular_date:
            self.add_error("hire_date", "入职日期不能晚于转正日期")
        return cleaned
