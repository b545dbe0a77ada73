# awards/admin.py
from django.contrib import admin, messages

from base.admin_mixins import AppAdmin
from .exceptions import AwardGenerationError
from .models import AnnualAward, AwardCycle
from .services import generate


@admin.register(AnnualAward)
class AnnualAwardAdmin(AppAdmin):
    list_display = ("year", "rank", "employee", "award_level", "final_score", "bonus_amount", "created_at")
    list_filter = ("year", "award_level", "employee__department")
    search_fields = ("employee__name", "employee__employee_id")
    ordering = ("-year", "rank")
    raw_id_fields = ["employee"]
    list_select_related = ("employee",)


@admin.register(AwardCycle)
class AwardCycleAdmin(AppAdmin):
    list_display = ("year", "generated_at", "generation_count", "ranking_score")
    ordering = ("-year",)
    derived_fields = ("generated_at", "generation_count", "ranking_score")

    actions = ["regenerate"]

    @admin.action(description="Regenerate awards of the selected years")
    def regenerate(self, request, queryset):
        for cycle in queryset:
            try:
                result = generate(cycle.year, force_regenerate=True)
            except AwardGenerationError as exc:
                messages.error(request, exc.message)
                continue
            messages.success(request, f"{cycle.year}: {len(result.awards)} award(s) generated.")
