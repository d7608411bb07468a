from pydantic import BaseModel
from typing import Optional
from datetime import date, datetime


# --- Pay rate calculation ---

class PayRateCalculationRequest(BaseModel):
    award_id: int
    employment_type_code: str = ""
    classification_level: int
    allowance_ids: list[int] = []
    tag_ids: list[int] = []
    tenant_id: Optional[int] = None          # accepted, not used in the calculation
    effective_date: Optional[date] = None    # defaults to today


class EmploymentTypeSummary(BaseModel):
    code: str
    name: str


class ClassificationSummary(BaseModel):
    level: int
    name: str


class BasePay(BaseModel):
    hourly_rate: float
    weekly_rate: float
    annual_rate: float


class PenaltyRateLine(BaseModel):
    name: str
    multiplier: float
    hourly_rate: float
    weekly_rate: float


class AllowanceLine(BaseModel):
    name: str
    amount: float
    unit: str
    weekly_equivalent: Optional[float] = None


class PayRateCalculationResponse(BaseModel):
    award_code: str
    award_name: str
    employment_type: EmploymentTypeSummary
    classification: ClassificationSummary
    base_pay: BasePay
    penalty_rates: list[PenaltyRateLine]
    allowances: list[AllowanceLine]
    total_allowances_per_week: float
    total_weekly_pay: float
    applied_tags: list[str]
    effective_date: date


class ValidationResult(BaseModel):
    is_valid: bool
    errors: list[str] = []


# --- Rule generation ---

class RuleGenerationResponse(BaseModel):
    award_id: int
    generated_rules_count: int
    effective_from: date
    generated_at: datetime


class AwardRegenerationResult(BaseModel):
    award_id: int
    generated_rules_count: int
    succeeded: bool
    error: Optional[str] = None


class RuleRegenerationResponse(BaseModel):
    generated_rules_count: int
    effective_from: date
    generated_at: datetime
    failed_award_ids: list[int] = []
    results: list[AwardRegenerationResult] = []


class ComputedRule(BaseModel):
    rule_id: int
    employment_type_id: int
    classification_id: int
    penalty_rate_id: Optional[int] = None
    base_hourly_rate: float
    penalty_multiplier: float
    calculated_hourly_rate: float
    calculated_weekly_rate: float
    calculated_annual_rate: float
    effective_from: date
    effective_to: Optional[date] = None
    generated_at: Optional[datetime] = None
    generated_by: str


class ComputedRulesResponse(BaseModel):
    award_id: int
    as_of: date
    total: int
    rules: list[ComputedRule]


class HealthResponse(BaseModel):
    status: str
    environment: str
    database_connected: bool = False
