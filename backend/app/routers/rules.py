import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_clock, require_admin
from app.models.schemas import (
    ComputedRule,
    ComputedRulesResponse,
    RuleGenerationResponse,
    RuleRegenerationResponse,
)
from app.services.db_rates import get_award
from app.services.rule_builder import (
    generate_pay_rules_for_award,
    list_computed_rules,
    regenerate_all_rules,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["rules"])


@router.post(
    "/api/v1/admin/rules/generate/{award_id}",
    response_model=RuleGenerationResponse,
    dependencies=[Depends(require_admin)],
)
async def generate_rules_for_award(
    award_id: int,
    effective_from: Optional[date] = None,
    db: Session = Depends(get_db),
    clock=Depends(get_clock),
):
    """Rebuild the computed pay rules of one award for an effective date (default today)."""
    effective = effective_from or clock.today()
    if get_award(db, award_id, active_only=False) is None:
        raise HTTPException(status_code=404, detail=f"Award {award_id} not found")

    logger.info("Generating rules for award %s effective from %s", award_id, effective)
    try:
        count = generate_pay_rules_for_award(db, award_id, effective, clock=clock)
    except Exception:
        logger.exception("Error generating rules for award %s", award_id)
        raise HTTPException(status_code=500, detail="An error occurred while generating rules")

    return RuleGenerationResponse(
        award_id=award_id,
        generated_rules_count=count,
        effective_from=effective,
        generated_at=clock.now(),
    )


@router.post(
    "/api/v1/admin/rules/regenerate-all",
    response_model=RuleRegenerationResponse,
    dependencies=[Depends(require_admin)],
)
async def regenerate_all(
    effective_from: Optional[date] = None,
    db: Session = Depends(get_db),
    clock=Depends(get_clock),
):
    """Rebuild computed pay rules for every active award; failures are reported per award."""
    effective = effective_from or clock.today()
    logger.info("Regenerating all rules effective from %s", effective)
    try:
        results = regenerate_all_rules(db, effective, clock=clock)
    except Exception:
        logger.exception("Error regenerating all rules")
        raise HTTPException(status_code=500, detail="An error occurred while regenerating rules")

    failed = [r["award_id"] for r in results if not r["succeeded"]]
    if failed:
        logger.warning("Rule regeneration failed for awards %s", failed)

    return RuleRegenerationResponse(
        generated_rules_count=sum(r["generated_rules_count"] for r in results),
        effective_from=effective,
        generated_at=clock.now(),
        failed_award_ids=failed,
        results=results,
    )


@router.get("/api/v1/rules/{award_id}", response_model=ComputedRulesResponse)
async def get_computed_rules(
    award_id: int,
    as_of: Optional[date] = None,
    db: Session = Depends(get_db),
    clock=Depends(get_clock),
):
    """Pre-computed rules for an award with hourly, weekly and annual figures."""
    as_of = as_of or clock.today()
    rules = list_computed_rules(db, award_id, as_of)
    return ComputedRulesResponse(
        award_id=award_id,
        as_of=as_of,
        total=len(rules),
        rules=[
            ComputedRule(
                rule_id=r.id,
                employment_type_id=r.employment_type_id,
                classification_id=r.classification_id,
                penalty_rate_id=r.penalty_rate_id,
                base_hourly_rate=r.base_hourly_rate,
                penalty_multiplier=r.penalty_multiplier,
                calculated_hourly_rate=r.calculated_hourly_rate,
                calculated_weekly_rate=r.calculated_weekly_rate,
                calculated_annual_rate=r.calculated_annual_rate,
                effective_from=r.effective_from,
                effective_to=r.effective_to,
                generated_at=r.generated_at,
                generated_by=r.generated_by,
            )
            for r in rules
        ],
    )
