"""
Database-driven reference data lookups.
Every date-sensitive query goes through ``effective_on`` so that
classifications, penalty rates, allowances and computed rules share one
definition of "in force".
"""
from datetime import date
from typing import Iterable, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Query, Session

from app.models.db_models import (
    Allowance,
    Award,
    Classification,
    EmploymentType,
    PenaltyRate,
    Tag,
    TagPenaltyMapping,
)


def effective_on(query: Query, model, as_of: date, from_attr: str = "operative_from",
                 to_attr: str = "operative_to") -> Query:
    """Restrict ``query`` to rows whose [from, to) window contains ``as_of``."""
    starts = getattr(model, from_attr)
    ends = getattr(model, to_attr)
    return query.filter(starts <= as_of, or_(ends.is_(None), ends > as_of))


def get_award(db: Session, award_id: int, active_only: bool = True) -> Optional[Award]:
    query = db.query(Award).filter(Award.id == award_id)
    if active_only:
        query = query.filter(Award.is_active.is_(True))
    return query.first()


def award_exists(db: Session, award_id: int, active_only: bool = True) -> bool:
    return get_award(db, award_id, active_only=active_only) is not None


def get_active_award_ids(db: Session) -> list[int]:
    rows = db.query(Award.id).filter(Award.is_active.is_(True)).order_by(Award.id).all()
    return [r.id for r in rows]


def get_employment_type(db: Session, code: str, active_only: bool = False) -> Optional[EmploymentType]:
    query = db.query(EmploymentType).filter(EmploymentType.code == code)
    if active_only:
        query = query.filter(EmploymentType.is_active.is_(True))
    return query.first()


def get_classification(
    db: Session,
    award_id: int,
    classification_level: int,
    employment_type_id: int,
    as_of: date,
) -> Optional[Classification]:
    """The classification for award/level/type in force on ``as_of``."""
    query = db.query(Classification).filter(
        Classification.award_id == award_id,
        Classification.classification_level == classification_level,
        Classification.employment_type_id == employment_type_id,
    )
    return effective_on(query, Classification, as_of).order_by(
        Classification.operative_from.desc()
    ).first()


def get_effective_classifications(db: Session, award_id: int, as_of: date) -> list[Classification]:
    query = db.query(Classification).filter(
        Classification.award_id == award_id,
        Classification.is_active.is_(True),
    )
    return effective_on(query, Classification, as_of).order_by(
        Classification.employment_type_id, Classification.classification_level, Classification.id
    ).all()


def get_effective_penalty_rates(db: Session, award_id: int, as_of: date) -> list[PenaltyRate]:
    query = db.query(PenaltyRate).filter(
        PenaltyRate.award_id == award_id,
        PenaltyRate.is_active.is_(True),
    )
    return effective_on(query, PenaltyRate, as_of).order_by(PenaltyRate.id).all()


def get_penalty_rate_ids_for_tags(db: Session, tag_ids: Iterable[int]) -> set[int]:
    tag_ids = list(tag_ids)
    if not tag_ids:
        return set()
    rows = (
        db.query(TagPenaltyMapping.penalty_rate_id)
        .filter(TagPenaltyMapping.tag_id.in_(tag_ids))
        .distinct()
        .all()
    )
    return {r.penalty_rate_id for r in rows}


def get_effective_allowances(
    db: Session,
    award_id: int,
    allowance_ids: Iterable[int],
    as_of: date,
) -> list[Allowance]:
    allowance_ids = list(allowance_ids)
    if not allowance_ids:
        return []
    query = db.query(Allowance).filter(
        Allowance.id.in_(allowance_ids),
        Allowance.award_id == award_id,
        Allowance.is_active.is_(True),
    )
    return effective_on(query, Allowance, as_of).order_by(Allowance.id).all()


def get_tag_names(db: Session, tag_ids: Iterable[int]) -> list[str]:
    tag_ids = list(tag_ids)
    if not tag_ids:
        return []
    rows = db.query(Tag.tag_name).filter(Tag.id.in_(tag_ids)).order_by(Tag.id).all()
    return [r.tag_name for r in rows]
