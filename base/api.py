# base/api.py
"""
JSON plumbing shared by every app.

Envelope:
    {"success": true,  "data": ..., "message": ...}
    {"success": false, "error": ..., "details": [...], <extra keys>}
"""
from __future__ import annotations

import json
import logging
import math
import re
from datetime import date
from typing import Any, Optional

from django import forms
from django.conf import settings
from django.contrib.auth.mixins import LoginRequiredMixin
from django.core.exceptions import ValidationError
from django.core.serializers.json import DjangoJSONEncoder
from django.db import IntegrityError
from django.http import JsonResponse
from django.utils.dateparse import parse_date
from django.views import View

logger = logging.getLogger(__name__)

_JSON_PARAMS = {"ensure_ascii": False}
_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


class ApiError(Exception):
    """Raised from handlers; turned into an error envelope by ApiView."""

    def __init__(self, message: str, status: int = 400, details=None, **extra):
        super().__init__(message)
        self.message = message
        self.status = status
        self.details = details
        self.extra = extra


# ==========================================================
# Responses
# ==========================================================

def api_ok(data: Any = None, message: Optional[str] = None, status: int = 200) -> JsonResponse:
    payload: dict[str, Any] = {"success": True}
    if data is not None:
        payload["data"] = data
    if message:
        payload["message"] = message
    return JsonResponse(payload, status=status, encoder=DjangoJSONEncoder, json_dumps_params=_JSON_PARAMS)


def api_error(error: str, status: int = 400, details=None, **extra) -> JsonResponse:
    payload: dict[str, Any] = {"success": False, "error": error}
    if details:
        payload["details"] = details
    payload.update(extra)
    return JsonResponse(payload, status=status, encoder=DjangoJSONEncoder, json_dumps_params=_JSON_PARAMS)


def form_error_details(form) -> list[dict[str, str]]:
    """Flatten form.errors into [{field, message}] (the field of non-field errors is "__all__")."""
    details = []
    for field, errors in form.errors.items():
        for message in errors:
            details.append({"field": field, "message": str(message)})
    return details


def validation_error_details(exc: ValidationError) -> list[dict[str, str]]:
    if hasattr(exc, "error_dict"):
        return [
            {"field": field, "message": str(message)}
            for field, messages in exc.message_dict.items()
            for message in messages
        ]
    return [{"field": "__all__", "message": str(m)} for m in exc.messages]


# ==========================================================
# Requests
# ==========================================================

def camel_to_snake(name: str) -> str:
    return _CAMEL_RE.sub("_", name).lower()


def parse_json_body(request) -> dict[str, Any]:
    """Decode a JSON object body; camelCase keys become snake_case form field names."""
    try:
        body = json.loads(request.body or b"{}")
    except (ValueError, UnicodeDecodeError):
        raise ApiError("Invalid JSON body")
    if not isinstance(body, dict):
        raise ApiError("Request body must be a JSON object")
    return {camel_to_snake(k): v for k, v in body.items()}


def query_int(request, name: str, default: Optional[int] = None) -> Optional[int]:
    raw = (request.GET.get(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ApiError(f"Invalid integer for '{name}'")


def query_date(request, name: str) -> Optional[date]:
    raw = (request.GET.get(name) or "").strip()
    if not raw:
        return None
    # Accept full ISO timestamps too, only the date part matters
    try:
        value = parse_date(raw[:10])
    except ValueError:
        value = None
    if value is None:
        raise ApiError(f"Invalid date for '{name}'")
    return value


def query_choice(request, name: str) -> str:
    """Filter value; empty and "all" both mean no filter."""
    raw = (request.GET.get(name) or "").strip()
    return "" if raw == "all" else raw


def query_ordering(request, allowed: dict[str, str], default: str, default_order: str = "desc") -> list[str]:
    """
    ?sortBy=<camelCase key>&sortOrder=asc|desc -> order_by() arguments.
    allowed maps the public key to the model field; unknown keys fall back to default.
    """
    field = allowed.get(request.GET.get("sortBy") or "", allowed[default])
    descending = (request.GET.get("sortOrder") or default_order).lower() != "asc"
    return [f"-{field}" if descending else field, "-id" if descending else "id"]


def paginate(request, items, default_limit: Optional[int] = None):
    """
    Slice a queryset or list by ?page=&limit=.
    Returns (page_items, pagination_dict). Pages past the end are empty, not an error.
    """
    page = max(1, query_int(request, "page", 1))
    limit = query_int(request, "limit", default_limit or settings.PAGINATION_DEFAULT_LIMIT)
    limit = max(1, min(limit, settings.PAGINATION_MAX_LIMIT))

    total = len(items) if isinstance(items, list) else items.count()
    start = (page - 1) * limit
    return items[start:start + limit], {
        "page": page,
        "limit": limit,
        "total": total,
        "totalPages": math.ceil(total / limit),
    }


# ==========================================================
# Base view
# ==========================================================

class ApiView(LoginRequiredMixin, View):
    """
    Login-protected JSON endpoint.
    - ApiError / ValidationError -> 4xx envelope
    - IntegrityError (unique keys) -> 400
    - anything else is logged and reported as a 500 envelope
    """
    failure_message = "Request failed"
    duplicate_message = "Duplicate record"

    def handle_no_permission(self):
        return api_error("Authentication required", status=401)

    def dispatch(self, request, *args, **kwargs):
        try:
            return super().dispatch(request, *args, **kwargs)
        except ApiError as exc:
            return api_error(exc.message, status=exc.status, details=exc.details, **exc.extra)
        except ValidationError as exc:
            return api_error("Validation failed", status=400, details=validation_error_details(exc))
        except IntegrityError:
            logger.warning("Integrity error on %s %s", request.method, request.path, exc_info=True)
            return api_error(self.duplicate_message, status=400)
        except Exception:
            logger.exception("%s %s failed", request.method, request.path)
            return api_error(self.failure_message, status=500)

    def bind_form(self, form_class, data, instance=None, partial=False):
        """
        Validate a JSON payload through a Form or ModelForm.
        partial=True (PUT) merges the payload over the instance's current values.
        """
        kwargs = {}
        # Plain Forms take no instance
        if issubclass(form_class, forms.BaseModelForm):
            kwargs["instance"] = instance
            if partial and instance is not None:
                merged = form_class(instance=instance).initial.copy()
                merged.update(data)
                data = merged
        form = form_class(data=data, **kwargs)
        if not form.is_valid():
            raise ApiError("Validation failed", details=form_error_details(form))
        return form


def get_object_or_api_404(queryset, message: str, **lookup):
    try:
        return queryset.get(**lookup)
    except queryset.model.DoesNotExist:
        raise ApiError(message, status=404)
