import csv
import io

import pytest

from awards.models import AnnualAward
from awards.services import generate

pytestmark = pytest.mark.django_db

GENERATE_URL = "/api/awards/generate/"


@pytest.fixture
def generated(make_employee):
    make_employee("EMP001", total_score=90, department="销售部")
    make_employee("EMP002", total_score=60, department="人事部")
    make_employee("EMP003", total_score=30, department="销售部")
    generate(2024)
    return list(AnnualAward.objects.order_by("rank"))


def test_generate_endpoint(api, make_employee):
    make_employee("EMP001", total_score=90)
    make_employee("EMP002", total_score=90)

    response = api.post_json(GENERATE_URL, {"year": 2024})

    body = response.json()
    assert response.status_code == 200
    assert body["success"] is True
    assert body["message"] == "2024年度评优生成成功，共产生2个获奖名额"
    assert [a["employee"]["employeeId"] for a in body["data"]["awards"]] == ["EMP001", "EMP002"]
    assert body["data"]["awards"][0]["evaluationDetails"]["totalScore"] == 90
    assert body["data"]["statistics"]["awardLevelCounts"]["first"] == 1


def test_generate_twice_reports_existing_count(api, generated):
    response = api.post_json(GENERATE_URL, {"year": 2024})

    body = response.json()
    assert response.status_code == 400
    assert body["success"] is False
    assert body["existingCount"] == 3
    assert "forceRegenerate" in body["error"]


def test_generate_with_force(api, generated):
    response = api.post_json(GENERATE_URL, {"year": 2024, "forceRegenerate": True})

    assert response.status_code == 200
    assert AnnualAward.objects.filter(year=2024).count() == 3


def test_generate_without_candidates(api):
    response = api.post_json(GENERATE_URL, {"year": 2024})

    assert response.status_code == 400
    assert response.json()["reason"] == "no_employees"


def test_generate_validates_year(api):
    response = api.post_json(GENERATE_URL, {"year": 2001})

    body = response.json()
    assert response.status_code == 400
    assert body["details"][0]["field"] == "year"


def test_list_sorted_by_rank(api, generated):
    response = api.get("/api/awards/", {"year": 2024})

    data = response.json()["data"]
    assert [a["rank"] for a in data["awards"]] == [1, 2, 3]
    assert data["pagination"]["total"] == 3


def test_list_filters_department(api, generated):
    response = api.get("/api/awards/", {"department": "人事部"})

    assert [a["employee"]["employeeId"] for a in response.json()["data"]["awards"]] == ["EMP002"]


def test_manual_create_defaults_bonus(api, make_employee):
    make_employee("EMP010", total_score=12)

    response = api.post_json("/api/awards/", {
        "year": 2023,
        "employeeId": "EMP010",
        "finalScore": 12,
        "rank": 1,
        "awardLevel": "second",
    })

    assert response.status_code == 201
    assert response.json()["data"]["bonusAmount"] == 2000


def test_manual_create_duplicate_refused(api, generated):
    response = api.post_json("/api/awards/", {
        "year": 2024,
        "employeeId": "EMP001",
        "finalScore": 1,
        "rank": 9,
        "awardLevel": "excellent",
    })

    assert response.status_code == 400
    assert response.json()["error"] == "该员工在该年度已有评优记录"


def test_manual_create_unknown_employee(api):
    response = api.post_json("/api/awards/", {
        "year": 2024,
        "employeeId": "NOPE",
        "finalScore": 1,
        "rank": 1,
        "awardLevel": "excellent",
    })

    assert response.status_code == 400
    assert response.json()["details"][0] == {"field": "employee", "message": "员工不存在"}


def test_update_and_delete(api, generated):
    award = generated[2]

    response = api.put_json(f"/api/awards/{award.pk}/", {"bonusAmount": 2500})
    assert response.status_code == 200
    assert response.json()["data"]["bonusAmount"] == 2500
    assert response.json()["data"]["employee"]["employeeId"] == "EMP003"

    response = api.delete(f"/api/awards/{award.pk}/")
    assert response.status_code == 200
    assert not AnnualAward.objects.filter(pk=award.pk).exists()

    assert api.get(f"/api/awards/{award.pk}/").status_code == 404


def test_statistics(api, generated):
    data = api.get("/api/awards/statistics/", {"year": 2024}).json()["data"]

    assert data["overallStats"]["totalAwards"] == 3
    assert data["overallStats"]["totalBonus"] == 11000
    assert data["availableYears"] == [2024]
    departments = {row["department"]: row for row in data["departmentStats"]}
    assert departments["销售部"]["count"] == 2
    assert departments["销售部"]["specialCount"] == 1
    assert data["employeeRanking"][0]["employeeId"] == "EMP001"


def test_employee_history(api, generated, make_employee):
    generate(2023)

    data = api.get("/api/awards/employee/EMP001/history/").json()["data"]

    assert data["totalAwards"] == 2
    assert [a["year"] for a in data["awards"]] == [2024, 2023]
    assert data["totalBonus"] == 10000


def test_export_csv(api, generated):
    response = api.get("/api/awards/export/", {"year": 2024, "format": "csv"})

    assert response["Content-Type"].startswith("text/csv")
    text = response.content.decode("utf-8-sig")
    rows = list(csv.reader(io.StringIO(text)))
    assert rows[0][:3] == ["排名", "员工ID", "员工姓名"]
    assert [r[1] for r in rows[1:]] == ["EMP001", "EMP002", "EMP003"]
    assert rows[1][6] == "特等奖"


def test_export_follows_list_filters(api, generated):
    response = api.get("/api/awards/export/", {"department": "人事部", "format": "csv"})

    rows = list(csv.reader(io.StringIO(response.content.decode("utf-8-sig"))))
    assert [r[1] for r in rows[1:]] == ["EMP002"]


def test_certificate_html_preview(api, generated):
    response = api.get(f"/awards/{generated[0].pk}/certificate/", {"format": "html"})

    html = response.content.decode()
    assert response.status_code == 200
    assert generated[0].employee.name in html
    assert "特等奖" in html
    assert "5,000" in html


def test_requires_login(client):
    response = client.get("/api/awards/")

    assert response.status_code == 401
    assert response.json()["success"] is False
