from datetime import date

import pytest

from recruitment.models import RecruitmentRecord

pytestmark = pytest.mark.django_db

URL = "/api/recruitment/"

PAYLOAD = {
    "interviewDate": "2024-03-05",
    "candidateName": "何敏",
    "gender": "female",
    "age": 26,
    "phone": "13700001111",
    "appliedPosition": "客服",
    "channel": "招聘网站",
}


def test_create_without_trial(api):
    response = api.post_json(URL, PAYLOAD)

    data = response.json()["data"]
    assert response.status_code == 201
    assert data["status"] == "interviewing"
    assert data["hasTrial"] is False
    assert data["idCard"] == ""


def test_create_with_trial_starts_in_trial(api):
    response = api.post_json(URL, {
        **PAYLOAD,
        "hasTrial": True,
        "trialDate": "2024-03-10",
        "trialDays": 7,
        "trialStatus": "good",
        "status": "interviewing",
    })

    assert response.status_code == 201
    assert response.json()["data"]["status"] == "trial"


def test_trial_requires_days_and_rating(api):
    response = api.post_json(URL, {**PAYLOAD, "hasTrial": True, "trialDate": "2024-03-10"})

    fields = {d["field"] for d in response.json()["details"]}
    assert response.status_code == 400
    assert fields == {"trial_days", "trial_status"}


def test_trial_before_interview_rejected(api):
    response = api.post_json(URL, {
        **PAYLOAD,
        "hasTrial": True,
        "trialDate": "2024-03-01",
        "trialDays": 3,
        "trialStatus": "average",
    })

    assert response.status_code == 400
    assert {"field": "trial_date", "message": "试岗日期不能早于面试日期"} in response.json()["details"]


def test_age_bounds(api):
    response = api.post_json(URL, {**PAYLOAD, "age": 15})

    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "age"


def test_duplicate_phone_names_existing_candidate(api, make_candidate):
    make_candidate(phone=PAYLOAD["phone"], candidate_name="宋佳")

    response = api.post_json(URL, PAYLOAD)

    assert response.status_code == 400
    assert response.json()["error"] == "手机号 13700001111 已存在招聘记录，应聘者：宋佳"


def test_duplicate_id_card(api, make_candidate):
    make_candidate(id_card="110101199003071234")

    response = api.post_json(URL, {**PAYLOAD, "idCard": "110101199003071234"})

    assert response.status_code == 400
    assert response.json()["error"] == "该身份证号已存在招聘记录"


def test_update_into_other_records_id_card(api, make_candidate):
    make_candidate(id_card="110101199003071234")
    record = make_candidate()

    response = api.put_json(f"{URL}{record.pk}/", {"idCard": "110101199003071234"})

    assert response.status_code == 400
    assert response.json()["error"] == "该身份证号已存在其他招聘记录"


def test_update_status_is_kept(api, make_candidate):
    record = make_candidate(
        has_trial=True,
        trial_date=date(2024, 5, 12),
        trial_days=5,
        trial_status=RecruitmentRecord.TrialStatus.EXCELLENT,
    )
    assert record.status == RecruitmentRecord.Status.TRIAL

    response = api.put_json(f"{URL}{record.pk}/", {"status": "hired"})

    assert response.status_code == 200
    record.refresh_from_db()
    assert record.status == RecruitmentRecord.Status.HIRED


def test_list_filters(api, make_candidate):
    make_candidate(status=RecruitmentRecord.Status.REJECTED, candidate_name="冯刚")
    make_candidate(interview_date=date(2023, 1, 9))

    data = api.get(URL, {"status": "rejected"}).json()["data"]
    assert [r["candidateName"] for r in data["records"]] == ["冯刚"]

    data = api.get(URL, {"startDate": "2024-01-01"}).json()["data"]
    assert data["pagination"]["total"] == 1


def test_delete(api, make_candidate):
    record = make_candidate()

    assert api.delete(f"{URL}{record.pk}/").status_code == 200
    assert api.get(f"{URL}{record.pk}/").status_code == 404


def test_stats(api, make_candidate):
    make_candidate(channel="")
    make_candidate(channel="内推", status=RecruitmentRecord.Status.HIRED)
    make_candidate(
        channel="内推",
        has_trial=True,
        trial_date=date(2024, 5, 20),
        trial_days=3,
        trial_status=RecruitmentRecord.TrialStatus.POOR,
    )

    data = api.get(f"{URL}stats/", {"year": 2024}).json()["data"]

    assert data["basicStats"]["totalCount"] == 3
    assert data["basicStats"]["trialPassRate"] == 0
    may = data["monthlyTrend"][4]
    assert may["month"] == "5月"
    assert may["total"] == 3
    assert may["hired"] == 1
    channels = {row["channel"]: row for row in data["channelAnalysis"]}
    assert channels["内推"]["total"] == 2
    assert channels["内推"]["hireRate"] == 50
    assert channels["未填写"]["total"] == 1
    assert data["trialPassRateTrend"][4] == {"month": "5月", "total": 1, "passed": 0, "passRate": 0}


def test_overview(api, make_candidate):
    make_candidate(status=RecruitmentRecord.Status.HIRED)
    make_candidate(
        has_trial=True,
        trial_date=date(2024, 5, 20),
        trial_days=4,
        trial_status=RecruitmentRecord.TrialStatus.POOR,
    )

    data = api.get(f"{URL}overview/").json()["data"]

    assert data["totalRecruitment"]["value"] == 2
    assert data["trialRate"]["value"] == 50
    assert data["trialResignationRate"]["value"] == 100
    assert data["avgTrialDays"]["value"] == 4
    assert data["statusCounts"]["trial"] == 1
    assert data["hireRate"] == 50
