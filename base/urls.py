# base/urls.py
from django.urls import path

from .views import HealthView, DashboardStatsView, RevealView

app_name = "base"

urlpatterns = [
    path("api/health/", HealthView.as_view(), name="health"),
    path("api/dashboard/stats/", DashboardStatsView.as_view(), name="dashboard_stats"),
    path("api/reveal/", RevealView.as_view(), name="reveal"),
]
