# awards/urls.py
from django.urls import path
from . import views

app_name = "awards"

urlpatterns = [
    # JSON API
    path("api/awards/", views.AwardListView.as_view(), name="award_list"),
    path("api/awards/generate/", views.GenerateAwardsView.as_view(), name="generate"),
    path("api/awards/statistics/", views.AwardStatisticsView.as_view(), name="statistics"),
    path("api/awards/export/", views.AwardExportView.as_view(), name="export"),
    path(
        "api/awards/employee/<str:employee_id>/history/",
        views.EmployeeAwardHistoryView.as_view(),
        name="employee_history",
    ),
    path("api/awards/<int:pk>/", views.AwardDetailView.as_view(), name="award_detail"),

    # Printable
    path("awards/<int:pk>/certificate/", views.AwardCertificateView.as_view(), name="certificate"),
]
