# Add backend to path so "from app...." works when running pytest from project root
import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

_backend = Path(__file__).resolve().parent.parent / "backend"
if str(_backend) not in sys.path:
    sys.path.insert(0, str(_backend))

from app.database import Base  # noqa: E402
from app.models.db_models import (  # noqa: E402
    Allowance,
    Award,
    Classification,
    EmploymentType,
    Industry,
    PenaltyRate,
    Tag,
    TagPenaltyMapping,
)
from app.services.clock import FixedClock  # noqa: E402

TODAY = date(2025, 3, 1)
OPERATIVE_FROM = date(2024, 7, 1)


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def clock():
    return FixedClock(TODAY)


@pytest.fixture
def reference_data(db):
    """
    Award 1 (MA000004, active):
      FT level 1 ($23.00/hr, no annual), FT level 2 ($25.00/hr), CAS level 1,
      plus an FT level 3 that expired before TODAY.
      Penalties: SAT x1.5 (tag 10), SUN x2.0, an inactive OT and an expired PH.
      Allowances: per_hour 5.00, per_occasion 50.00, per_week 20.00, per_km 0.95,
      and an expired per_week allowance.
    Award 2 (MA000009) is inactive. Award 3 (MA000010) is active with one
    classification and no penalty rates.
    """
    db.add(Industry(id=1, industry_code="RET", name="Retail"))
    db.add_all([
        Award(id=1, award_code="MA000004", award_name="General Retail Industry Award 2020",
              industry_id=1, operative_from=OPERATIVE_FROM),
        Award(id=2, award_code="MA000009", award_name="Hospitality Industry (General) Award 2020",
              industry_id=1, operative_from=OPERATIVE_FROM, is_active=False),
        Award(id=3, award_code="MA000010", award_name="Manufacturing and Associated Industries Award 2020",
              industry_id=1, operative_from=OPERATIVE_FROM),
    ])
    db.add_all([
        EmploymentType(id=1, code="FT", name="Full time", rate_type_code="AD"),
        EmploymentType(id=2, code="CAS", name="Casual", rate_type_code="CA",
                       casual_loading_percent=Decimal("25.00")),
        EmploymentType(id=3, code="PT", name="Part time", rate_type_code="AD", is_active=False),
    ])
    db.add_all([
        Classification(id=1, award_id=1, employment_type_id=1, classification_level=1,
                       classification_name="Retail Employee Level 1",
                       base_hourly_rate=Decimal("23.0000"), base_weekly_rate=Decimal("874.00"),
                       operative_from=OPERATIVE_FROM),
        Classification(id=2, award_id=1, employment_type_id=1, classification_level=2,
                       classification_name="Retail Employee Level 2",
                       base_hourly_rate=Decimal("25.0000"), base_weekly_rate=Decimal("950.00"),
                       base_annual_rate=Decimal("49400.00"), operative_from=OPERATIVE_FROM),
        Classification(id=3, award_id=1, employment_type_id=2, classification_level=1,
                       classification_name="Retail Employee Level 1",
                       base_hourly_rate=Decimal("28.7500"), base_weekly_rate=Decimal("1092.50"),
                       operative_from=OPERATIVE_FROM),
        Classification(id=4, award_id=1, employment_type_id=1, classification_level=3,
                       classification_name="Retail Employee Level 3",
                       base_hourly_rate=Decimal("26.0000"), base_weekly_rate=Decimal("988.00"),
                       operative_from=date(2023, 7, 1), operative_to=date(2024, 7, 1)),
        Classification(id=5, award_id=3, employment_type_id=1, classification_level=1,
                       classification_name="Production Employee C14",
                       base_hourly_rate=Decimal("24.1000"), base_weekly_rate=Decimal("915.80"),
                       operative_from=OPERATIVE_FROM),
    ])
    db.add_all([
        PenaltyRate(id=1, award_id=1, penalty_code="SAT", penalty_name="Saturday",
                    penalty_category="WEEKEND", rate_multiplier=Decimal("1.50"),
                    applicable_days="SAT", operative_from=OPERATIVE_FROM),
        PenaltyRate(id=2, award_id=1, penalty_code="SUN", penalty_name="Sunday",
                    penalty_category="WEEKEND", rate_multiplier=Decimal("2.00"),
                    applicable_days="SUN", operative_from=OPERATIVE_FROM),
        PenaltyRate(id=3, award_id=1, penalty_code="OT", penalty_name="Overtime",
                    penalty_category="OVERTIME", rate_multiplier=Decimal("1.50"),
                    operative_from=OPERATIVE_FROM, is_active=False),
        PenaltyRate(id=4, award_id=1, penalty_code="PH", penalty_name="Public holiday",
                    penalty_category="HOLIDAY", rate_multiplier=Decimal("2.25"),
                    operative_from=date(2023, 7, 1), operative_to=date(2024, 7, 1)),
    ])
    db.add_all([
        Allowance(id=1, award_id=1, allowance_code="FIRST_AID", allowance_name="First aid allowance",
                  allowance_type="WAGE", amount=Decimal("5.0000"), unit="per_hour",
                  operative_from=OPERATIVE_FROM),
        Allowance(id=2, award_id=1, allowance_code="MEAL", allowance_name="Meal allowance",
                  allowance_type="EXPENSE", amount=Decimal("50.0000"), unit="per_occasion",
                  operative_from=OPERATIVE_FROM),
        Allowance(id=3, award_id=1, allowance_code="TOOL", allowance_name="Tool allowance",
                  allowance_type="FLAT", amount=Decimal("20.0000"), unit="per_week",
                  operative_from=OPERATIVE_FROM),
        Allowance(id=4, award_id=1, allowance_code="VEHICLE", allowance_name="Vehicle allowance",
                  allowance_type="EXPENSE", amount=Decimal("0.9500"), unit="per_km",
                  operative_from=OPERATIVE_FROM),
        Allowance(id=5, award_id=1, allowance_code="OLD_TOOL", allowance_name="Old tool allowance",
                  allowance_type="FLAT", amount=Decimal("15.0000"), unit="per_week",
                  operative_from=date(2023, 7, 1), operative_to=date(2024, 7, 1)),
    ])
    db.add_all([
        Tag(id=10, tag_code="WEEKEND", tag_name="Weekend work", tag_category="SHIFT",
            affects_penalties=True),
        Tag(id=11, tag_code="REMOTE", tag_name="Remote location", tag_category="LOCATION",
            affects_allowances=True),
    ])
    db.add(TagPenaltyMapping(tag_id=10, penalty_rate_id=1))
    db.commit()
    return db


@pytest.fixture
def client(reference_data, clock, monkeypatch):
    from fastapi.testclient import TestClient

    from app.config import settings
    from app.database import get_db, get_db_optional
    from app.dependencies import get_clock
    from app.main import app

    monkeypatch.setattr(settings, "admin_secret", "test-secret")

    def _db():
        yield reference_data

    app.dependency_overrides[get_db] = _db
    app.dependency_overrides[get_db_optional] = _db
    app.dependency_overrides[get_clock] = lambda: clock
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
