"""
Materialises classification x penalty rate combinations into computed_pay_rules.

A generation is keyed by (award, effective_from). Regenerating replaces that
generation wholesale inside a single transaction, so readers never observe
the gap between the delete and the insert.
"""
import logging
from datetime import date, timezone
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.config import settings
from app.models.db_models import ComputedPayRule, ComputedRuleAllowance, ComputedRuleTag
from app.services.award_rules import NO_PENALTY_MULTIPLIER
from app.services.clock import SystemClock
from app.services.db_rates import (
    effective_on,
    get_active_award_ids,
    get_effective_classifications,
    get_effective_penalty_rates,
)

logger = logging.getLogger(__name__)


def _delete_generation(db: Session, award_id: int, effective_from: date) -> int:
    rule_ids = [
        r.id
        for r in db.query(ComputedPayRule.id).filter(
            ComputedPayRule.award_id == award_id,
            ComputedPayRule.effective_from == effective_from,
        )
    ]
    if not rule_ids:
        return 0
    db.query(ComputedRuleAllowance).filter(
        ComputedRuleAllowance.rule_id.in_(rule_ids)
    ).delete(synchronize_session="fetch")
    db.query(ComputedRuleTag).filter(
        ComputedRuleTag.rule_id.in_(rule_ids)
    ).delete(synchronize_session="fetch")
    db.query(ComputedPayRule).filter(
        ComputedPayRule.id.in_(rule_ids)
    ).delete(synchronize_session="fetch")
    return len(rule_ids)


def generate_pay_rules_for_award(
    db: Session,
    award_id: int,
    effective_from: date,
    clock=None,
) -> int:
    """Rebuild the computed rules for one award and return how many were created."""
    clock = clock or SystemClock()
    # Stored as naive UTC
    generated_at = clock.now().astimezone(timezone.utc).replace(tzinfo=None)
    try:
        removed = _delete_generation(db, award_id, effective_from)

        classifications = get_effective_classifications(db, award_id, effective_from)
        if not classifications:
            db.commit()
            logger.info(
                "No effective classifications for award %s on %s (removed %d old rules)",
                award_id, effective_from, removed,
            )
            return 0

        penalty_rates = get_effective_penalty_rates(db, award_id, effective_from)

        new_rules = []
        for classification in classifications:
            combos = [(None, NO_PENALTY_MULTIPLIER)]
            combos.extend((p.id, p.rate_multiplier) for p in penalty_rates)
            for penalty_rate_id, multiplier in combos:
                new_rules.append(ComputedPayRule(
                    award_id=classification.award_id,
                    employment_type_id=classification.employment_type_id,
                    classification_id=classification.id,
                    penalty_rate_id=penalty_rate_id,
                    base_hourly_rate=classification.base_hourly_rate,
                    penalty_multiplier=multiplier,
                    effective_from=effective_from,
                    generated_at=generated_at,
                    generated_by=settings.rule_generated_by,
                    is_active=True,
                ))

        db.add_all(new_rules)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(
        "Generated %d rules for award %s effective %s (%d classifications x %d penalty rates, "
        "replaced %d)",
        len(new_rules), award_id, effective_from, len(classifications), len(penalty_rates), removed,
    )
    return len(new_rules)


def regenerate_all_rules(db: Session, effective_from: date, clock=None) -> list[dict]:
    """
    Regenerate rules for every active award.
    Each award is its own transaction; a failing award is recorded and the
    batch moves on to the next one.
    """
    results: list[dict] = []
    for award_id in get_active_award_ids(db):
        try:
            count = generate_pay_rules_for_award(db, award_id, effective_from, clock=clock)
        except Exception as exc:
            logger.exception("Rule generation failed for award %s", award_id)
            results.append({
                "award_id": award_id,
                "generated_rules_count": 0,
                "succeeded": False,
                "error": str(exc),
            })
            continue
        results.append({
            "award_id": award_id,
            "generated_rules_count": count,
            "succeeded": True,
            "error": None,
        })
    return results


def list_computed_rules(db: Session, award_id: int, as_of: date) -> list[ComputedPayRule]:
    """Active rules from the latest generation in force on ``as_of``."""
    base = db.query(ComputedPayRule).filter(
        ComputedPayRule.award_id == award_id,
        ComputedPayRule.is_active.is_(True),
    )
    base = effective_on(base, ComputedPayRule, as_of, "effective_from", "effective_to")
    latest: Optional[date] = base.with_entities(func.max(ComputedPayRule.effective_from)).scalar()
    if latest is None:
        return []
    return (
        base.filter(ComputedPayRule.effective_from == latest)
        .order_by(
            ComputedPayRule.classification_id,
            ComputedPayRule.penalty_rate_id.asc().nullsfirst(),
            ComputedPayRule.id,
        )
        .all()
    )
