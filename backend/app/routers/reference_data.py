from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.database import get_db_optional
from app.models.db_models import (
    Allowance,
    Award,
    Classification,
    ComputedPayRule,
    EmploymentType,
    PenaltyRate,
    Tag,
)
from app.services.db_rates import effective_on

router = APIRouter(prefix="/api/v1/reference-data", tags=["reference-data"])


def _iso(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value else None


def _num(value) -> Optional[float]:
    return float(value) if value is not None else None


def _award_row(r: Award) -> dict:
    return {
        "id": r.id,
        "award_code": r.award_code,
        "award_name": r.award_name,
        "industry_id": r.industry_id,
        "version_number": r.version_number,
        "is_active": r.is_active,
        "operative_from": _iso(r.operative_from),
        "operative_to": _iso(r.operative_to),
    }


def _employment_type_row(r: EmploymentType) -> dict:
    return {
        "id": r.id,
        "code": r.code,
        "name": r.name,
        "rate_type_code": r.rate_type_code,
        "casual_loading_percent": _num(r.casual_loading_percent),
        "is_active": r.is_active,
    }


def _classification_row(r: Classification) -> dict:
    return {
        "id": r.id,
        "award_id": r.award_id,
        "employment_type_id": r.employment_type_id,
        "classification_level": r.classification_level,
        "classification_name": r.classification_name,
        "base_hourly_rate": _num(r.base_hourly_rate),
        "base_weekly_rate": _num(r.base_weekly_rate),
        "base_annual_rate": _num(r.base_annual_rate),
        "is_active": r.is_active,
        "operative_from": _iso(r.operative_from),
        "operative_to": _iso(r.operative_to),
    }


def _penalty_row(r: PenaltyRate) -> dict:
    return {
        "id": r.id,
        "award_id": r.award_id,
        "penalty_code": r.penalty_code,
        "penalty_name": r.penalty_name,
        "penalty_category": r.penalty_category,
        "rate_multiplier": _num(r.rate_multiplier),
        "applicable_days": r.applicable_days,
        "applicable_hours": r.applicable_hours,
        "clause_reference": r.clause_reference,
        "is_active": r.is_active,
        "operative_from": _iso(r.operative_from),
        "operative_to": _iso(r.operative_to),
    }


def _allowance_row(r: Allowance) -> dict:
    return {
        "id": r.id,
        "award_id": r.award_id,
        "allowance_code": r.allowance_code,
        "allowance_name": r.allowance_name,
        "allowance_type": r.allowance_type,
        "amount": _num(r.amount),
        "unit": r.unit,
        "rate_percent": _num(r.rate_percent),
        "is_all_purpose": r.is_all_purpose,
        "clause_reference": r.clause_reference,
        "is_active": r.is_active,
        "operative_from": _iso(r.operative_from),
        "operative_to": _iso(r.operative_to),
    }


def _tag_row(r: Tag) -> dict:
    return {
        "id": r.id,
        "tag_code": r.tag_code,
        "tag_name": r.tag_name,
        "tag_category": r.tag_category,
        "affects_penalties": r.affects_penalties,
        "affects_allowances": r.affects_allowances,
        "is_active": r.is_active,
    }


def _page(query, row_fn, limit: int, offset: int) -> dict:
    total = query.count()
    rows = query.offset(offset).limit(limit).all()
    return {"total": total, "rows": [row_fn(r) for r in rows], "offset": offset, "limit": limit}


def _empty(limit: int, offset: int) -> dict:
    return {"total": 0, "rows": [], "offset": offset, "limit": limit}


@router.get("/summary")
async def get_summary(db: Optional[Session] = Depends(get_db_optional)):
    if not db:
        return {
            "database_connected": False,
            "awards": 0, "employment_types": 0, "classifications": 0,
            "penalty_rates": 0, "allowances": 0, "tags": 0, "computed_pay_rules": 0,
        }
    return {
        "database_connected": True,
        "awards": db.query(Award).count(),
        "employment_types": db.query(EmploymentType).count(),
        "classifications": db.query(Classification).count(),
        "penalty_rates": db.query(PenaltyRate).count(),
        "allowances": db.query(Allowance).count(),
        "tags": db.query(Tag).count(),
        "computed_pay_rules": db.query(ComputedPayRule).count(),
    }


@router.get("/awards")
async def get_awards(
    active_only: bool = False,
    limit: int = Query(default=500, le=1000),
    offset: int = Query(default=0),
    db: Optional[Session] = Depends(get_db_optional),
):
    if not db:
        return _empty(limit, offset)
    query = db.query(Award).order_by(Award.award_code)
    if active_only:
        query = query.filter(Award.is_active.is_(True))
    return _page(query, _award_row, limit, offset)


@router.get("/employment-types")
async def get_employment_types(
    limit: int = Query(default=100, le=500),
    offset: int = Query(default=0),
    db: Optional[Session] = Depends(get_db_optional),
):
    if not db:
        return _empty(limit, offset)
    query = db.query(EmploymentType).order_by(EmploymentType.code)
    return _page(query, _employment_type_row, limit, offset)


@router.get("/classifications")
async def get_classifications(
    award_id: Optional[int] = None,
    as_of: Optional[date] = None,
    limit: int = Query(default=5000, le=25000),
    offset: int = Query(default=0),
    db: Optional[Session] = Depends(get_db_optional),
):
    if not db:
        return _empty(limit, offset)
    query = db.query(Classification).order_by(
        Classification.award_id, Classification.classification_level, Classification.id
    )
    if award_id is not None:
        query = query.filter(Classification.award_id == award_id)
    if as_of is not None:
        query = effective_on(query, Classification, as_of)
    return _page(query, _classification_row, limit, offset)


@router.get("/penalty-rates")
async def get_penalty_rates(
    award_id: Optional[int] = None,
    as_of: Optional[date] = None,
    limit: int = Query(default=5000, le=25000),
    offset: int = Query(default=0),
    db: Optional[Session] = Depends(get_db_optional),
):
    if not db:
        return _empty(limit, offset)
    query = db.query(PenaltyRate).order_by(PenaltyRate.award_id, PenaltyRate.id)
    if award_id is not None:
        query = query.filter(PenaltyRate.award_id == award_id)
    if as_of is not None:
        query = effective_on(query, PenaltyRate, as_of)
    return _page(query, _penalty_row, limit, offset)


@router.get("/allowances")
async def get_allowances(
    award_id: Optional[int] = None,
    as_of: Optional[date] = None,
    limit: int = Query(default=3000, le=5000),
    offset: int = Query(default=0),
    db: Optional[Session] = Depends(get_db_optional),
):
    if not db:
        return _empty(limit, offset)
    query = db.query(Allowance).order_by(Allowance.award_id, Allowance.id)
    if award_id is not None:
        query = query.filter(Allowance.award_id == award_id)
    if as_of is not None:
        query = effective_on(query, Allowance, as_of)
    return _page(query, _allowance_row, limit, offset)


@router.get("/tags")
async def get_tags(
    limit: int = Query(default=500, le=1000),
    offset: int = Query(default=0),
    db: Optional[Session] = Depends(get_db_optional),
):
    if not db:
        return _empty(limit, offset)
    query = db.query(Tag).order_by(Tag.tag_category, Tag.tag_code)
    return _page(query, _tag_row, limit, offset)
