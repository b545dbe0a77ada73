# hr/urls.py
"""
Employee API routes, mounted under /api/employees/.
"""

from django.urls import path
from . import views

app_name = "hr"

urlpatterns = [
    path("", views.EmployeeListView.as_view(), name="employee_list"),
    path("overview/", views.EmployeeOverviewView.as_view(), name="employee_overview"),
    path("ranking/", views.EmployeeRankingView.as_view(), name="employee_ranking"),
    path("export/", views.EmployeeExportView.as_view(), name="employee_export"),
    path("<int:pk>/", views.EmployeeDetailView.as_view(), name="employee_detail"),
]
