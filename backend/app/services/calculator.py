"""
Pay rate breakdown for one award / employment type / classification level.

Base pay comes straight from the classification. Penalty rates are listed
as informational lines (hourly and 38-hour weekly figures) and are not
added to the weekly total; allowances with a weekly basis are.
"""
import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from app.errors import InvalidRequestError
from app.models.schemas import PayRateCalculationRequest
from app.services.award_rules import (
    penalty_hourly_rate,
    penalty_weekly_rate,
    to_decimal,
    weekly_equivalent,
)
from app.services.clock import SystemClock
from app.services.db_rates import (
    get_award,
    get_classification,
    get_effective_allowances,
    get_effective_penalty_rates,
    get_employment_type,
    get_penalty_rate_ids_for_tags,
    get_tag_names,
)
from app.services.validation import validate_conditions

logger = logging.getLogger(__name__)


def _penalty_line(penalty, base_hourly: Decimal) -> dict:
    return {
        "name": penalty.penalty_name,
        "multiplier": to_decimal(penalty.rate_multiplier),
        "hourly_rate": penalty_hourly_rate(base_hourly, penalty.rate_multiplier),
        "weekly_rate": penalty_weekly_rate(base_hourly, penalty.rate_multiplier),
    }


def _allowance_line(allowance) -> dict:
    return {
        "name": allowance.allowance_name,
        "amount": to_decimal(allowance.amount),
        "unit": allowance.unit,
        "weekly_equivalent": weekly_equivalent(allowance.amount, allowance.unit),
    }


def calculate_pay_rates(db: Session, request: PayRateCalculationRequest, clock=None) -> dict:
    """
    Build the pay breakdown for ``request``.
    Raises InvalidRequestError when validation fails or a referenced award,
    employment type or classification cannot be found for the date.
    """
    clock = clock or SystemClock()
    effective_date = request.effective_date or clock.today()

    validation = validate_conditions(db, request)
    if not validation["is_valid"]:
        raise InvalidRequestError(
            f"Invalid request: {', '.join(validation['errors'])}",
            errors=validation["errors"],
        )

    award = get_award(db, request.award_id, active_only=True)
    if award is None:
        raise InvalidRequestError(f"Award {request.award_id} not found")

    employment_type = get_employment_type(db, request.employment_type_code)
    if employment_type is None:
        raise InvalidRequestError(f"Employment type {request.employment_type_code} not found")

    classification = get_classification(
        db, award.id, request.classification_level, employment_type.id, effective_date
    )
    if classification is None:
        raise InvalidRequestError(
            f"Classification level {request.classification_level} not found for award {request.award_id}"
        )

    penalty_rates = get_effective_penalty_rates(db, award.id, effective_date)
    if request.tag_ids:
        tagged_ids = get_penalty_rate_ids_for_tags(db, request.tag_ids)
        penalty_rates = [p for p in penalty_rates if p.id in tagged_ids]

    allowances = get_effective_allowances(db, award.id, request.allowance_ids, effective_date)
    applied_tags = get_tag_names(db, request.tag_ids)

    base_hourly = to_decimal(classification.base_hourly_rate)
    base_weekly = to_decimal(classification.base_weekly_rate)
    annual = classification.base_annual_rate
    base_annual = to_decimal(annual) if annual is not None else Decimal("0")

    allowance_lines = [_allowance_line(a) for a in allowances]
    total_allowances = sum(
        (a["weekly_equivalent"] for a in allowance_lines if a["weekly_equivalent"] is not None),
        Decimal("0"),
    )

    logger.info(
        "Calculated pay rates for award %s, employment type %s, level %s on %s "
        "(%d penalty rates, %d allowances)",
        award.award_code, employment_type.code, classification.classification_level,
        effective_date, len(penalty_rates), len(allowance_lines),
    )

    return {
        "award_code": award.award_code,
        "award_name": award.award_name,
        "employment_type": {"code": employment_type.code, "name": employment_type.name},
        "classification": {
            "level": classification.classification_level,
            "name": classification.classification_name,
        },
        "base_pay": {
            "hourly_rate": base_hourly,
            "weekly_rate": base_weekly,
            "annual_rate": base_annual,
        },
        "penalty_rates": [_penalty_line(p, base_hourly) for p in penalty_rates],
        "allowances": allowance_lines,
        "total_allowances_per_week": total_allowances,
        "total_weekly_pay": base_weekly + total_allowances,
        "applied_tags": applied_tags,
        "effective_date": effective_date,
    }
