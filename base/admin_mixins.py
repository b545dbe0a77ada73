# base/admin_mixins.py
# Reusable admin mixins shared by every app
from typing import Sequence
from django.contrib import admin


class ReadonlyAuditFieldsMixin:
    """
    Timestamp fields stay visible but read-only.
    Safe when the model lacks some of them.
    """
    AUDIT_FIELDS: Sequence[str] = ("created_at", "updated_at")

    def get_readonly_fields(self, request, obj=None):
        ro = list(super().get_readonly_fields(request, obj) or [])
        present = [f for f in self.AUDIT_FIELDS if f in {fld.name for fld in self.model._meta.get_fields()}]
        return list(dict.fromkeys(ro + present))


class DerivedFieldsMixin:
    """
    Fields computed by the domain (scores, counters) are read-only in the admin.
    Subclasses list them in derived_fields.
    """
    derived_fields: Sequence[str] = ()

    def get_readonly_fields(self, request, obj=None):
        ro = list(super().get_readonly_fields(request, obj) or [])
        return list(dict.fromkeys(ro + list(self.derived_fields)))


class AppAdmin(DerivedFieldsMixin, ReadonlyAuditFieldsMixin, admin.ModelAdmin):
    list_per_page = 50
