"""
URL configuration for Hrms project.

Each app owns its routes; JSON endpoints live under /api/.
"""
# Hrms/urls.py
from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path("", include(("base.urls", "base"), namespace="base")),
    path("api/employees/", include(("hr.urls", "hr"), namespace="hr")),
    path("api/recruitment/", include(("recruitment.urls", "recruitment"), namespace="recruitment")),
    path("api/scores/", include(("performance.urls", "performance"), namespace="performance")),
    path("", include(("awards.urls", "awards"), namespace="awards")),

    # Admin
    path("admin/", admin.site.urls),
]
