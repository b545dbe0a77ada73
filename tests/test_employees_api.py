from datetime import date, timedelta

import pytest
from django.utils import timezone

from hr.models import Employee
from hr.services import refresh_working_days
from performance.models import ScoreRecord

pytestmark = pytest.mark.django_db

URL = "/api/employees/"

PAYLOAD = {
    "name": "林晓",
    "gender": "female",
    "phone": "13912345678",
    "idCard": "110101199003071234",
    "regularDate": "2023-01-01",
    "department": "运营部",
    "position": "运营",
}


def test_create_assigns_business_key_and_masks_id_card(api):
    response = api.post_json(URL, PAYLOAD)

    body = response.json()
    assert response.status_code == 201
    assert body["message"] == "员工创建成功"
    data = body["data"]
    assert data["employeeId"].startswith("EMP")
    assert data["idCard"] == "110101********1234"
    assert data["hireDate"] == "2023-01-01"
    assert data["workStatus"] == "active"
    assert data["totalScore"] == 0
    assert data["workingDays"] == (timezone.localdate() - date(2023, 1, 1)).days


def test_create_with_minimal_payload_uses_defaults(api):
    payload = {k: v for k, v in PAYLOAD.items() if k not in ("department", "position")}

    data = api.post_json(URL, payload).json()["data"]

    assert data["department"] == "未分配"
    assert data["position"] == "未分配"


def test_duplicate_phone_rejected(api, make_employee):
    make_employee(phone=PAYLOAD["phone"])

    response = api.post_json(URL, PAYLOAD)

    body = response.json()
    assert response.status_code == 400
    assert {"field": "phone", "message": "该手机号已存在"} in body["details"]


def test_invalid_fields_reported(api):
    tomorrow = (timezone.localdate() + timedelta(days=1)).isoformat()
    response = api.post_json(URL, {**PAYLOAD, "name": "Tom", "phone": "12345", "regularDate": tomorrow})

    fields = {d["field"] for d in response.json()["details"]}
    assert response.status_code == 400
    assert {"name", "phone", "regular_date"} <= fields


def test_hire_date_after_regular_date_rejected(api):
    response = api.post_json(URL, {**PAYLOAD, "hireDate": "2023-02-01"})

    assert response.status_code == 400
    assert response.json()["details"] == [{"field": "hire_date", "message": "入职日期不能晚于转正日期"}]


def test_list_filters_and_paginates(api, make_employee):
    make_employee(department="人事部", name="郑爽")
    for _ in range(3):
        make_employee(department="销售部")

    data = api.get(URL, {"department": "销售部", "limit": 2}).json()["data"]
    assert data["pagination"] == {"page": 1, "limit": 2, "total": 3, "totalPages": 2}
    assert len(data["employees"]) == 2

    data = api.get(URL, {"keyword": "郑爽"}).json()["data"]
    assert [e["department"] for e in data["employees"]] == ["人事部"]


def test_list_sorted_by_score(api, make_employee):
    make_employee("EMP001", total_score=5)
    make_employee("EMP002", total_score=50)

    data = api.get(URL, {"sortBy": "totalScore", "sortOrder": "desc"}).json()["data"]

    assert [e["employeeId"] for e in data["employees"]] == ["EMP002", "EMP001"]


def test_partial_update(api, make_employee):
    employee = make_employee(department="销售部")

    response = api.put_json(f"{URL}{employee.pk}/", {"department": "人事部", "position": "人事主管"})

    assert response.status_code == 200
    employee.refresh_from_db()
    assert employee.department == "人事部"
    assert employee.position == "人事主管"
    assert employee.phone.startswith("138")


def test_resigned_employee_keeps_working_days(make_employee):
    employee = make_employee(regular_date=date(2022, 1, 1))
    employee.work_status = Employee.WorkStatus.RESIGNED
    employee.working_days = 10
    employee.save()

    assert refresh_working_days() == 0
    employee.refresh_from_db()
    assert employee.working_days == 10


def test_delete_cascades_scores(api, make_employee, add_score):
    employee = make_employee()
    add_score(employee)

    response = api.delete(f"{URL}{employee.pk}/")

    assert response.status_code == 200
    assert not ScoreRecord.objects.exists()
    assert api.get(f"{URL}{employee.pk}/").json()["error"] == "员工不存在"


def test_reveal_unlocks_full_id_card(api, make_employee, settings):
    settings.REVEAL_PASSWORD = "open-sesame"
    employee = make_employee(id_card="110101199003071234")
    detail = f"{URL}{employee.pk}/"

    assert api.post_json("/api/reveal/", {"password": "wrong"}).status_code == 403
    assert api.get(detail, {"reveal": "1"}).json()["data"]["idCard"] == "110101********1234"

    assert api.post_json("/api/reveal/", {"password": "open-sesame"}).status_code == 200
    assert api.get(detail, {"reveal": "1"}).json()["data"]["idCard"] == "110101199003071234"
    assert api.get(detail).json()["data"]["idCard"] == "110101********1234"


def test_overview_and_ranking(api, make_employee):
    make_employee("EMP001", total_score=30, department="销售部")
    make_employee("EMP002", total_score=10, department="人事部")
    make_employee("EMP003", total_score=99, work_status=Employee.WorkStatus.RESIGNED)

    overview = api.get(f"{URL}overview/").json()["data"]
    assert overview["total"] == 3
    assert overview["active"] == 2
    assert overview["resigned"] == 1
    assert overview["averageScore"] == 20

    ranking = api.get(f"{URL}ranking/").json()["data"]
    assert [(r["rank"], r["employeeId"]) for r in ranking] == [(1, "EMP001"), (2, "EMP002")]
