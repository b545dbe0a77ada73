"""Shared fixtures: an authenticated client and small factories for each model."""

from __future__ import annotations

import itertools
import json
from datetime import date

import pytest

from hr.models import Employee
from performance.models import ScoreRecord
from recruitment.models import RecruitmentRecord

NAMES = ["张伟", "王芳", "李娜", "刘洋", "陈静", "杨磊", "赵敏", "黄勇", "周杰", "吴霞", "徐涛", "孙丽", "马超", "朱琳", "胡斌", "郭强"]

_seq = itertools.count(1)


def valid_id_card(n: int) -> str:
    return f"11010119900101{n:03d}X"


def valid_phone(n: int) -> str:
    return f"138{n:08d}"


@pytest.fixture
def user(django_user_model):
    return django_user_model.objects.create_user(username="hr-admin", password="secret-pass")


@pytest.fixture
def api(client, user):
    """Logged-in test client with JSON helpers."""
    client.force_login(user)

    def _send(method, url, payload=None):
        return getattr(client, method)(url, data=json.dumps(payload or {}), content_type="application/json")

    client.post_json = lambda url, payload=None: _send("post", url, payload)
    client.put_json = lambda url, payload=None: _send("put", url, payload)
    return client


@pytest.fixture
def make_employee(db):
    def _make(employee_id=None, total_score=None, **fields):
        n = next(_seq)
        data = {
            "employee_id": employee_id or f"EMP{n:03d}",
            "name": NAMES[n % len(NAMES)],
            "gender": "male",
            "phone": valid_phone(n),
            "id_card": valid_id_card(n),
            "regular_date": date(2022, 3, 1),
            "department": "销售部",
            "position": "销售",
        }
        data.update(fields)
        employee = Employee.objects.create(**data)
        if total_score is not None:
            # Set the lifetime score directly instead of replaying score events
            Employee.objects.filter(pk=employee.pk).update(total_score=total_score)
            employee.refresh_from_db()
        return employee

    return _make


@pytest.fixture
def add_score(db):
    def _add(employee, behavior_type="outstanding_work", record_date=None, reason="工作记录", **fields):
        return ScoreRecord.objects.create(
            employee=employee,
            behavior_type=behavior_type,
            record_date=record_date or date(2024, 6, 1),
            reason=reason,
            **fields,
        )

    return _add


@pytest.fixture
def make_candidate(db):
    def _make(**fields):
        n = next(_seq)
        data = {
            "interview_date": date(2024, 5, 10),
            "candidate_name": NAMES[n % len(NAMES)],
            "gender": "female",
            "phone": valid_phone(50000 + n),
            "applied_position": "客服",
        }
        data.update(fields)
        return RecruitmentRecord.objects.create(**data)

    return _make
