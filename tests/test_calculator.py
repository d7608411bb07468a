"""
Pay rate calculation against the reference data in conftest.
Amounts are compared as Decimals, so 37.500000 == 37.50.
"""
from datetime import date
from decimal import Decimal

import pytest

from app.errors import InvalidRequestError
from app.models.db_models import Classification
from app.models.schemas import PayRateCalculationRequest
from app.services.calculator import calculate_pay_rates

from conftest import TODAY


def _request(**overrides):
    values = {"award_id": 1, "employment_type_code": "FT", "classification_level": 2}
    values.update(overrides)
    return PayRateCalculationRequest(**values)


def test_no_selection_total_is_base_weekly(reference_data, clock):
    result = calculate_pay_rates(reference_data, _request(), clock=clock)
    assert result["award_code"] == "MA000004"
    assert result["award_name"] == "General Retail Industry Award 2020"
    assert result["employment_type"] == {"code": "FT", "name": "Full time"}
    assert result["classification"] == {"level": 2, "name": "Retail Employee Level 2"}
    assert result["base_pay"] == {
        "hourly_rate": Decimal("25.00"),
        "weekly_rate": Decimal("950.00"),
        "annual_rate": Decimal("49400.00"),
    }
    assert result["allowances"] == []
    assert result["total_allowances_per_week"] == 0
    assert result["total_weekly_pay"] == Decimal("950.00")
    assert result["applied_tags"] == []


def test_without_tags_all_active_effective_penalties_are_listed(reference_data, clock):
    """Inactive OT and the expired public holiday rate are left out."""
    result = calculate_pay_rates(reference_data, _request(), clock=clock)
    assert [p["name"] for p in result["penalty_rates"]] == ["Saturday", "Sunday"]
    sunday = result["penalty_rates"][1]
    assert sunday["multiplier"] == Decimal("2.00")
    assert sunday["hourly_rate"] == Decimal("50.00")
    assert sunday["weekly_rate"] == Decimal("1900.00")


def test_tag_filter_keeps_only_mapped_penalty(reference_data, clock):
    """FT level 2, tag 10 -> only Saturday: 37.50/hr, 1425.00/wk"""
    result = calculate_pay_rates(reference_data, _request(tag_ids=[10]), clock=clock)
    assert len(result["penalty_rates"]) == 1
    saturday = result["penalty_rates"][0]
    assert saturday["name"] == "Saturday"
    assert saturday["multiplier"] == Decimal("1.5")
    assert saturday["hourly_rate"] == Decimal("37.50")
    assert saturday["weekly_rate"] == Decimal("1425.00")
    assert result["applied_tags"] == ["Weekend work"]


def test_tag_without_penalty_mappings_removes_all_penalties(reference_data, clock):
    result = calculate_pay_rates(reference_data, _request(tag_ids=[11]), clock=clock)
    assert result["penalty_rates"] == []
    assert result["applied_tags"] == ["Remote location"]


def test_penalties_are_not_added_to_weekly_total(reference_data, clock):
    result = calculate_pay_rates(reference_data, _request(tag_ids=[10]), clock=clock)
    assert result["total_weekly_pay"] == Decimal("950.00")


def test_allowance_weekly_equivalents(reference_data, clock):
    """5.00 per_hour -> 190.00; 50.00 per_occasion -> none and not totalled"""
    result = calculate_pay_rates(reference_data, _request(allowance_ids=[1, 2]), clock=clock)
    first_aid, meal = result["allowances"]
    assert first_aid["name"] == "First aid allowance"
    assert first_aid["unit"] == "per_hour"
    assert first_aid["weekly_equivalent"] == Decimal("190.00")
    assert meal["amount"] == Decimal("50.00")
    assert meal["weekly_equivalent"] is None
    assert result["total_allowances_per_week"] == Decimal("190.00")
    assert result["total_weekly_pay"] == Decimal("1140.00")


def test_all_allowance_units(reference_data, clock):
    result = calculate_pay_rates(reference_data, _request(allowance_ids=[1, 2, 3, 4]), clock=clock)
    by_name = {a["name"]: a["weekly_equivalent"] for a in result["allowances"]}
    assert by_name == {
        "First aid allowance": Decimal("190.00"),
        "Meal allowance": None,
        "Tool allowance": Decimal("20.00"),
        "Vehicle allowance": None,
    }
    assert result["total_allowances_per_week"] == Decimal("210.00")
    assert result["total_weekly_pay"] == Decimal("1160.00")


def test_expired_and_unknown_allowances_are_ignored(reference_data, clock):
    result = calculate_pay_rates(reference_data, _request(allowance_ids=[3, 5, 404]), clock=clock)
    assert [a["name"] for a in result["allowances"]] == ["Tool allowance"]


def test_missing_annual_rate_defaults_to_zero(reference_data, clock):
    result = calculate_pay_rates(reference_data, _request(classification_level=1), clock=clock)
    assert result["base_pay"]["annual_rate"] == 0
    assert result["base_pay"]["hourly_rate"] == Decimal("23.00")


def test_effective_date_defaults_to_clock(reference_data, clock):
    result = calculate_pay_rates(reference_data, _request(), clock=clock)
    assert result["effective_date"] == TODAY


def test_explicit_effective_date_selects_classification_version(reference_data, clock):
    reference_data.add(Classification(
        award_id=1, employment_type_id=1, classification_level=2,
        classification_name="Retail Employee Level 2",
        base_hourly_rate=Decimal("26.0000"), base_weekly_rate=Decimal("988.00"),
        operative_from=date(2025, 7, 1),
    ))
    reference_data.query(Classification).filter(Classification.id == 2).update(
        {"operative_to": date(2025, 7, 1)}
    )
    reference_data.commit()

    before = calculate_pay_rates(reference_data, _request(effective_date=date(2025, 6, 30)), clock=clock)
    after = calculate_pay_rates(reference_data, _request(effective_date=date(2025, 7, 1)), clock=clock)
    assert before["base_pay"]["weekly_rate"] == Decimal("950.00")
    assert after["base_pay"]["weekly_rate"] == Decimal("988.00")
    assert after["effective_date"] == date(2025, 7, 1)


def test_classification_not_effective(reference_data, clock):
    with pytest.raises(InvalidRequestError) as exc:
        calculate_pay_rates(reference_data, _request(effective_date=date(2024, 1, 1)), clock=clock)
    assert exc.value.message == "Classification level 2 not found for award 1"


def test_expired_classification_level(reference_data, clock):
    with pytest.raises(InvalidRequestError) as exc:
        calculate_pay_rates(reference_data, _request(classification_level=3), clock=clock)
    assert "Classification level 3" in exc.value.message


def test_invalid_request_lists_validation_errors(reference_data, clock):
    with pytest.raises(InvalidRequestError) as exc:
        calculate_pay_rates(
            reference_data,
            _request(award_id=999, employment_type_code="", classification_level=0),
            clock=clock,
        )
    assert exc.value.message.startswith("Invalid request: Award 999 not found or inactive")
    assert len(exc.value.errors) == 3


def test_inactive_award_is_rejected(reference_data, clock):
    with pytest.raises(InvalidRequestError):
        calculate_pay_rates(reference_data, _request(award_id=2), clock=clock)


def test_tenant_id_does_not_change_the_result(reference_data, clock):
    plain = calculate_pay_rates(reference_data, _request(), clock=clock)
    with_tenant = calculate_pay_rates(reference_data, _request(tenant_id=42), clock=clock)
    assert plain == with_tenant
