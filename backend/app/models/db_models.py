from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from app.database import Base
from app.services.award_rules import (
    penalty_annual_rate,
    penalty_hourly_rate,
    penalty_weekly_rate,
)


class Industry(Base):
    __tablename__ = "industries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    industry_code = Column(String(50), unique=True, index=True, nullable=False)
    name = Column(String(200), nullable=False)
    description = Column(String(500), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    awards = relationship("Award", back_populates="industry")


class Award(Base):
    __tablename__ = "awards"

    id = Column(Integer, primary_key=True, autoincrement=True)
    award_code = Column(String(20), unique=True, index=True, nullable=False)
    award_name = Column(String(200), nullable=False)
    industry_id = Column(Integer, ForeignKey("industries.id"), nullable=False)
    operative_from = Column(Date, nullable=False)
    operative_to = Column(Date, nullable=True)
    version_number = Column(Integer, default=1, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    modified_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    industry = relationship("Industry", back_populates="awards")
    classifications = relationship("Classification", back_populates="award")
    allowances = relationship("Allowance", back_populates="award")
    penalty_rates = relationship("PenaltyRate", back_populates="award")


class EmploymentType(Base):
    __tablename__ = "employment_types"

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(10), unique=True, index=True, nullable=False)
    name = Column(String(50), nullable=False)
    rate_type_code = Column(String(5), nullable=False)
    casual_loading_percent = Column(Numeric(5, 2), nullable=True)
    description = Column(String(500), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)


class Classification(Base):
    __tablename__ = "classifications"
    __table_args__ = (
        UniqueConstraint(
            "award_id", "classification_level", "employment_type_id", "operative_from",
            name="uq_classifications_award_level_type_from",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    award_id = Column(Integer, ForeignKey("awards.id"), index=True, nullable=False)
    employment_type_id = Column(Integer, ForeignKey("employment_types.id"), nullable=False)
    classification_level = Column(Integer, nullable=False)
    classification_name = Column(String(200), nullable=False)
    base_hourly_rate = Column(Numeric(10, 4), nullable=False)
    base_weekly_rate = Column(Numeric(10, 2), nullable=False)
    base_annual_rate = Column(Numeric(12, 2), nullable=True)
    operative_from = Column(Date, nullable=False)
    operative_to = Column(Date, nullable=True)
    version_number = Column(Integer, default=1, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    award = relationship("Award", back_populates="classifications")
    employment_type = relationship("EmploymentType")


class PenaltyRate(Base):
    __tablename__ = "penalty_rates"

    id = Column(Integer, primary_key=True, autoincrement=True)
    award_id = Column(Integer, ForeignKey("awards.id"), index=True, nullable=False)
    penalty_code = Column(String(50), nullable=False)
    penalty_name = Column(String(200), nullable=False)
    penalty_category = Column(String(50), nullable=False)
    rate_multiplier = Column(Numeric(5, 2), nullable=False)
    applicable_days = Column(String(50), nullable=True)
    applicable_hours = Column(String(50), nullable=True)
    clause_reference = Column(String(50), nullable=True)
    operative_from = Column(Date, nullable=False)
    operative_to = Column(Date, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    award = relationship("Award", back_populates="penalty_rates")


class Allowance(Base):
    __tablename__ = "allowances"

    id = Column(Integer, primary_key=True, autoincrement=True)
    award_id = Column(Integer, ForeignKey("awards.id"), index=True, nullable=False)
    allowance_code = Column(String(50), nullable=False)
    allowance_name = Column(String(200), nullable=False)
    allowance_type = Column(String(20), nullable=False)      # EXPENSE / WAGE / FLAT
    amount = Column(Numeric(10, 4), nullable=False)
    unit = Column(String(20), nullable=False)                # per_hour / per_week / per_occasion / per_km
    rate_percent = Column(Numeric(5, 2), nullable=True)
    is_all_purpose = Column(Boolean, default=False, nullable=False)
    clause_reference = Column(String(50), nullable=True)
    operative_from = Column(Date, nullable=False)
    operative_to = Column(Date, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    award = relationship("Award", back_populates="allowances")


class Tag(Base):
    __tablename__ = "tags"

    id = Column(Integer, primary_key=True, autoincrement=True)
    tag_code = Column(String(50), unique=True, index=True, nullable=False)
    tag_name = Column(String(100), nullable=False)
    tag_category = Column(String(50), nullable=False)
    description = Column(String(500), nullable=True)
    affects_penalties = Column(Boolean, default=False, nullable=False)
    affects_allowances = Column(Boolean, default=False, nullable=False)
    created_by = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    is_active = Column(Boolean, default=True, nullable=False)


class TagPenaltyMapping(Base):
    __tablename__ = "tag_penalty_mappings"

    tag_id = Column(Integer, ForeignKey("tags.id"), primary_key=True)
    penalty_rate_id = Column(Integer, ForeignKey("penalty_rates.id"), primary_key=True)


class TagAllowanceMapping(Base):
    __tablename__ = "tag_allowance_mappings"

    tag_id = Column(Integer, ForeignKey("tags.id"), primary_key=True)
    allowance_id = Column(Integer, ForeignKey("allowances.id"), primary_key=True)


class Tenant(Base):
    __tablename__ = "tenants"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    abn = Column(String(50), nullable=True)
    industry_id = Column(Integer, ForeignKey("industries.id"), nullable=False)
    primary_contact_name = Column(String(100), nullable=True)
    primary_contact_email = Column(String(100), nullable=True)
    phone_number = Column(String(20), nullable=True)
    billing_address = Column(String(500), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    modified_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    is_active = Column(Boolean, default=True, nullable=False)

    tenant_awards = relationship("TenantAward", back_populates="tenant")


class TenantAward(Base):
    __tablename__ = "tenant_awards"

    id = Column(Integer, primary_key=True, autoincrement=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id"), index=True, nullable=False)
    award_id = Column(Integer, ForeignKey("awards.id"), nullable=False)
    effective_from = Column(Date, nullable=False)
    effective_to = Column(Date, nullable=True)
    configuration = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    modified_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    tenant = relationship("Tenant", back_populates="tenant_awards")


class ComputedPayRule(Base):
    """One pre-computed (classification x penalty) combination.

    Only the base rate and multiplier are stored; the derived hourly, weekly
    and annual figures are computed on read.
    """

    __tablename__ = "computed_pay_rules"
    __table_args__ = (
        Index(
            "ix_computed_pay_rules_lookup",
            "award_id", "employment_type_id", "classification_id", "effective_from",
        ),
    )

    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    award_id = Column(Integer, ForeignKey("awards.id"), nullable=False)
    employment_type_id = Column(Integer, ForeignKey("employment_types.id"), nullable=False)
    classification_id = Column(Integer, ForeignKey("classifications.id"), nullable=False)
    penalty_rate_id = Column(Integer, ForeignKey("penalty_rates.id"), nullable=True)
    base_hourly_rate = Column(Numeric(10, 4), nullable=False)
    penalty_multiplier = Column(Numeric(5, 2), default=Decimal("1.00"), nullable=False)
    effective_from = Column(Date, nullable=False)
    effective_to = Column(Date, nullable=True)
    generated_at = Column(DateTime, default=datetime.utcnow)
    generated_by = Column(String(100), default="SYSTEM", nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    classification = relationship("Classification")
    employment_type = relationship("EmploymentType")
    penalty_rate = relationship("PenaltyRate")
    rule_allowances = relationship("ComputedRuleAllowance", back_populates="rule")
    rule_tags = relationship("ComputedRuleTag", back_populates="rule")

    @property
    def calculated_hourly_rate(self) -> Decimal:
        return penalty_hourly_rate(self.base_hourly_rate, self.penalty_multiplier)

    @property
    def calculated_weekly_rate(self) -> Decimal:
        return penalty_weekly_rate(self.base_hourly_rate, self.penalty_multiplier)

    @property
    def calculated_annual_rate(self) -> Decimal:
        return penalty_annual_rate(self.base_hourly_rate, self.penalty_multiplier)


class ComputedRuleAllowance(Base):
    __tablename__ = "computed_rule_allowances"

    rule_id = Column(
        BigInteger().with_variant(Integer, "sqlite"),
        ForeignKey("computed_pay_rules.id"),
        primary_key=True,
    )
    allowance_id = Column(Integer, ForeignKey("allowances.id"), primary_key=True)
    allowance_amount = Column(Numeric(10, 4), nullable=False)

    rule = relationship("ComputedPayRule", back_populates="rule_allowances")


class ComputedRuleTag(Base):
    __tablename__ = "computed_rule_tags"

    rule_id = Column(
        BigInteger().with_variant(Integer, "sqlite"),
        ForeignKey("computed_pay_rules.id"),
        primary_key=True,
    )
    tag_id = Column(Integer, ForeignKey("tags.id"), primary_key=True)

    rule = relationship("ComputedPayRule", back_populates="rule_tags")
