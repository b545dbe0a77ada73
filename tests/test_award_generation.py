from datetime import date

import pytest
from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.utils import timezone

from awards import services
from awards.exceptions import AlreadyGenerated, NoEligibleCandidates, PersistenceFailure
from awards.models import AnnualAward, AwardCycle
from hr.models import Employee

pytestmark = pytest.mark.django_db

YEAR = 2024


def awarded(year=YEAR):
    return list(
        AnnualAward.objects.filter(year=year).order_by("rank").values_list("employee__employee_id", "rank", "award_level")
    )


def test_generate_ranks_by_lifetime_score(make_employee):
    make_employee("EMP002", total_score=90)
    make_employee("EMP001", total_score=90)
    make_employee("EMP003", total_score=70)

    result = services.generate(YEAR)

    assert awarded() == [("EMP001", 1, "special"), ("EMP002", 2, "first"), ("EMP003", 3, "first")]
    assert result.statistics == {
        "totalEmployees": 3,
        "qualifiedEmployees": 3,
        "awardedEmployees": 3,
        "totalBonusAmount": 11000,
        "awardLevelCounts": {"special": 1, "first": 2, "second": 0, "excellent": 0},
    }
    cycle = AwardCycle.objects.get(year=YEAR)
    assert cycle.generation_count == 1
    assert cycle.ranking_score == "lifetime"


def test_at_most_eleven_awards(make_employee):
    for i in range(15):
        make_employee(f"EMP{i:03d}", total_score=100 - i)

    result = services.generate(YEAR)

    assert len(result.awards) == 11
    assert AnnualAward.objects.filter(year=YEAR).count() == 11
    assert result.statistics["totalBonusAmount"] == 5000 + 2 * 3000 + 3 * 2000 + 5 * 1000
    assert not AnnualAward.objects.filter(employee__employee_id__in=["EMP011", "EMP012", "EMP013", "EMP014"]).exists()


def test_existing_year_refused_without_force(make_employee):
    for i in range(5):
        make_employee(total_score=10 * i)
    services.generate(YEAR)
    before = awarded()

    with pytest.raises(AlreadyGenerated) as exc_info:
        services.generate(YEAR)

    assert exc_info.value.existing_count == 5
    assert exc_info.value.as_details() == {"existingCount": 5}
    assert awarded() == before


def test_force_regenerate_replaces_and_is_repeatable(make_employee):
    make_employee("EMP001", total_score=50)
    services.generate(YEAR)
    make_employee("EMP002", total_score=80)

    first = services.generate(YEAR, force_regenerate=True)
    snapshot = awarded()
    second = services.generate(YEAR, force_regenerate=True)

    assert snapshot == [("EMP002", 1, "special"), ("EMP001", 2, "first")]
    assert awarded() == snapshot
    assert first.replaced == 1
    assert second.replaced == 2
    assert AwardCycle.objects.get(year=YEAR).generation_count == 3


def test_other_years_untouched(make_employee):
    make_employee(total_score=10)
    services.generate(2023)
    services.generate(YEAR)

    services.generate(YEAR, force_regenerate=True)

    assert AnnualAward.objects.filter(year=2023).count() == 1


def test_no_employees(db):
    with pytest.raises(NoEligibleCandidates) as exc_info:
        services.generate(YEAR)

    assert exc_info.value.reason == NoEligibleCandidates.NO_EMPLOYEES
    assert exc_info.value.message == "2024年度没有符合条件的员工"
    assert not AnnualAward.objects.exists()


def test_only_negative_scores(make_employee):
    make_employee(total_score=-5)
    make_employee(total_score=-1)

    with pytest.raises(NoEligibleCandidates) as exc_info:
        services.generate(YEAR)

    assert exc_info.value.reason == NoEligibleCandidates.NO_QUALIFIED
    assert "最终得分需≥0分" in exc_info.value.message


def test_eligibility_filters(make_employee):
    make_employee("EMP001", total_score=10)
    make_employee("EMP002", total_score=99, work_status=Employee.WorkStatus.RESIGNED)
    make_employee("EMP003", total_score=98, regular_date=date(2025, 3, 1), hire_date=date(2025, 2, 1))
    make_employee("EMP004", total_score=-3)
    make_employee("EMP005", total_score=0, regular_date=date(2024, 12, 31))

    result = services.generate(YEAR)

    assert awarded() == [("EMP001", 1, "special"), ("EMP005", 2, "first")]
    assert result.statistics["totalEmployees"] == 3
    assert result.statistics["qualifiedEmployees"] == 2


def test_yearly_ranking_score(make_employee, add_score):
    veteran = make_employee("EMP001")
    newcomer = make_employee("EMP002")
    add_score(veteran, "suggestion", date(2023, 5, 1))
    add_score(veteran, "suggestion", date(2023, 6, 1))
    add_score(newcomer, "outstanding_work", date(2024, 5, 1))
    add_score(newcomer, "late", date(2024, 6, 1))

    lifetime = services.generate(YEAR)
    assert awarded() == [("EMP001", 1, "special"), ("EMP002", 2, "first")]

    yearly = services.generate(YEAR, force_regenerate=True, ranking_score="yearly")
    assert awarded() == [("EMP002", 1, "special"), ("EMP001", 2, "first")]

    details = {row["employee"]["employeeId"]: row["evaluationDetails"] for row in yearly.awards_as_dicts()}
    assert details["EMP002"] == {"yearlyScore": 8, "totalScore": 8, "recordCount": 2}
    assert details["EMP001"] == {"yearlyScore": 0, "totalScore": 20, "recordCount": 0}
    assert lifetime.awards[0].final_score == 20


def test_unknown_ranking_score(make_employee):
    make_employee(total_score=1)

    with pytest.raises(ValueError):
        services.generate(YEAR, ranking_score="monthly")


@pytest.mark.parametrize("year", [2019, timezone.localdate().year + 1])
def test_year_out_of_range(db, year):
    with pytest.raises(ValidationError):
        services.generate(year)


def test_failed_write_keeps_previous_awards(make_employee, monkeypatch):
    make_employee("EMP001", total_score=30)
    make_employee("EMP002", total_score=20)
    services.generate(YEAR)
    before = awarded()
    make_employee("EMP003", total_score=90)

    def broken_bulk_create(*args, **kwargs):
        raise DatabaseError("disk full")

    monkeypatch.setattr(AnnualAward.objects, "bulk_create", broken_bulk_create)

    with pytest.raises(PersistenceFailure) as exc_info:
        services.generate(YEAR, force_regenerate=True)

    assert exc_info.value.previous_lost is False
    assert exc_info.value.status == 500
    assert awarded() == before
    assert AwardCycle.objects.get(year=YEAR).generation_count == 1
