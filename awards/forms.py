# awards/forms.py
from django import forms
from django.conf import settings

from hr.models import Employee

from .models import AnnualAward
from .ranking import tiers_from_settings
from .services import RANKING_SCORES, check_generation_year


class GenerateAwardsForm(forms.Form):
    year = forms.IntegerField()
    force_regenerate = forms.BooleanField(required=False)
    ranking_score = forms.ChoiceField(choices=[(m, m) for m in RANKING_SCORES], required=False)

    def clean_year(self):
        year = self.cleaned_data["year"]
        check_generation_year(year)
        return year


class AnnualAwardForm(forms.ModelForm):
    """
    Manual award entry. employee is addressed by employee_id;
    bonus_amount defaults to the configured bonus of the chosen level.
    """
    employee = forms.ModelChoiceField(
        queryset=Employee.objects.all(),
        to_field_name="employee_id",
        error_messages={"invalid_choice": "员工不存在"},
    )

    class Meta:
        model = AnnualAward
        fields = ["year", "employee", "final_score", "rank", "award_level", "bonus_amount"]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["bonus_amount"].required = False
        if self.instance.pk:
            self.initial["employee"] = self.instance.employee.employee_id

    def clean(self):
        cleaned = super().clean()
        level = cleaned.get("award_level")
        if cleaned.get("bonus_amount") is None and level:
            bonus = {t.level: t.bonus for t in tiers_from_settings(settings.AWARD_TIERS)}.get(level, 0)
            cleaned["bonus_amount"] = bonus
        return cleaned
