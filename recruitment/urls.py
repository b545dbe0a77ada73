# recruitment/urls.py
"""
Recruitment API routes, mounted under /api/recruitment/.
"""

from django.urls import path
from . import views

app_name = "recruitment"

urlpatterns = [
    path("", views.RecruitmentListView.as_view(), name="record_list"),
    path("stats/", views.RecruitmentStatsView.as_view(), name="stats"),
    path("overview/", views.RecruitmentOverviewView.as_view(), name="overview"),
    path("export/", views.RecruitmentExportView.as_view(), name="export"),
    path("<int:pk>/", views.RecruitmentDetailView.as_view(), name="record_detail"),
]
