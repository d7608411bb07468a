import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_clock
from app.errors import InvalidRequestError
from app.models.schemas import (
    PayRateCalculationRequest,
    PayRateCalculationResponse,
    ValidationResult,
)
from app.services.calculator import calculate_pay_rates
from app.services.validation import validate_conditions

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/payrates", tags=["pay-rates"])


@router.post("/calculate", response_model=PayRateCalculationResponse)
async def calculate(
    request: PayRateCalculationRequest,
    db: Session = Depends(get_db),
    clock=Depends(get_clock),
):
    """Calculate base pay, penalty lines and allowances for the given conditions."""
    logger.info(
        "Calculating pay rates for award %s, employment type %s, level %s",
        request.award_id, request.employment_type_code, request.classification_level,
    )
    try:
        result = calculate_pay_rates(db, request, clock=clock)
    except InvalidRequestError as exc:
        logger.warning("Invalid pay rate calculation request: %s", exc.message)
        raise HTTPException(status_code=400, detail=exc.message)
    except Exception:
        logger.exception("Error calculating pay rates")
        raise HTTPException(status_code=500, detail="An error occurred while calculating pay rates")
    return result


@router.post("/validate", response_model=ValidationResult)
async def validate(
    request: PayRateCalculationRequest,
    db: Session = Depends(get_db),
):
    """Report every problem with a calculation request without calculating."""
    return validate_conditions(db, request)
