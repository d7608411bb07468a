from sqlalchemy.orm import Session

from app.models.schemas import PayRateCalculationRequest
from app.services.db_rates import award_exists, get_employment_type


def validate_conditions(db: Session, request: PayRateCalculationRequest) -> dict:
    """Check a calculation request, collecting every problem rather than stopping at the first."""
    errors: list[str] = []

    if not award_exists(db, request.award_id, active_only=True):
        errors.append(f"Award {request.award_id} not found or inactive")

    if not request.employment_type_code:
        errors.append("Employment type code is required")
    elif get_employment_type(db, request.employment_type_code, active_only=True) is None:
        errors.append(f"Employment type {request.employment_type_code} not found or inactive")

    if request.classification_level < 1:
        errors.append("Classification level must be greater than 0")

    return {"is_valid": not errors, "errors": errors}
