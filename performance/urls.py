# performance/urls.py
"""
Score event API routes, mounted under /api/scores/.
"""
from django.urls import path
from . import views

app_name = "performance"

urlpatterns = [
    path("", views.ScoreListView.as_view(), name="score_list"),
    path("statistics/", views.ScoreStatisticsView.as_view(), name="score_statistics"),
    path("behaviors/", views.BehaviorCatalogView.as_view(), name="behaviors"),
    path("export/", views.ScoreExportView.as_view(), name="score_export"),
    path("<int:pk>/", views.ScoreDetailView.as_view(), name="score_detail"),
]
