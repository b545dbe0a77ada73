from django import forms

from base.models import UNASSIGNED
from .models import RecruitmentRecord


class RecruitmentRecordForm(forms.ModelForm):

    class Meta:
        model = RecruitmentRecord
        fields = [
            "interview_date",
            "candidate_name",
            "channel",
            "gender",
            "age",
            "id_card",
            "phone",
            "applied_position",
            "has_trial",
            "trial_date",
            "trial_days",
            "trial_status",
            "remark",
            "status",
        ]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Optional in payloads, defaulted below
        self.fields["status"].required = False
        self.fields["applied_position"].required = False

    def clean_id_card(self):
        return (self.cleaned_data.get("id_card") or "").strip().upper()

    def clean_channel(self):
        return (self.cleaned_data.get("channel") or "").strip()

    def clean_remark(self):
        return (self.cleaned_data.get("remark") or "").strip()

    def clean_status(self):
        return self.cleaned_data.get("status") or RecruitmentRecord.Status.INTERVIEWING

    def clean_applied_position(self):
        return self.cleaned_data.get("applied_position") or UNASSIGNED
