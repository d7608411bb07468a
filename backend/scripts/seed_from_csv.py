"""
Seed the reference tables from CSV exports.
Run from the project root:
  python backend/scripts/seed_from_csv.py [--source DIR] [--skip-if-populated]

Each CSV is named after its table (awards.csv, penalty_rates.csv, ...) and
uses the column names of that table as headers. Columns missing from a file
fall back to the model defaults. Seeding replaces the current contents of
every seeded table, and clears computed pay rules since they reference the
old rows.
"""

import argparse
import csv
import logging
import os
import sys
from datetime import datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from dotenv import load_dotenv
load_dotenv(os.path.join(os.path.dirname(__file__), '..', '.env'))
load_dotenv()

from sqlalchemy import Boolean, Date, DateTime, Integer, Numeric
from sqlalchemy.orm import sessionmaker

from app.database import engine, Base
from app.models.db_models import (
    Allowance,
    Award,
    Classification,
    ComputedPayRule,
    ComputedRuleAllowance,
    ComputedRuleTag,
    EmploymentType,
    Industry,
    PenaltyRate,
    Tag,
    TagAllowanceMapping,
    TagPenaltyMapping,
)

logger = logging.getLogger("seed_from_csv")

DEFAULT_SOURCE = Path(__file__).resolve().parent.parent.parent / 'data' / 'source'

# Load order follows foreign keys; deletes run in reverse
SEED_MODELS = [
    Industry,
    Award,
    EmploymentType,
    Classification,
    PenaltyRate,
    Allowance,
    Tag,
    TagPenaltyMapping,
    TagAllowanceMapping,
]
DERIVED_MODELS = [ComputedRuleAllowance, ComputedRuleTag, ComputedPayRule]


def parse_date(val):
    if not val or val.strip() == '':
        return None
    for fmt in ('%Y-%m-%dT%H:%M:%S', '%Y-%m-%d', '%d/%m/%Y'):
        try:
            return datetime.strptime(val.strip(), fmt).date()
        except ValueError:
            continue
    return None


def parse_datetime(val):
    if not val or val.strip() == '':
        return None
    for fmt in ('%Y-%m-%dT%H:%M:%S', '%Y-%m-%d %H:%M:%S', '%Y-%m-%d'):
        try:
            return datetime.strptime(val.strip(), fmt)
        except ValueError:
            continue
    return None


def parse_decimal(val):
    if not val or val.strip() == '':
        return None
    try:
        cleaned = val.strip().replace(',', '').replace('$', '')
        return Decimal(cleaned)
    except InvalidOperation:
        return None


def parse_int(val):
    if not val or val.strip() == '':
        return None
    try:
        return int(float(val.strip()))
    except ValueError:
        return None


def parse_bool(val):
    if not val or val.strip() == '':
        return None
    return val.strip().lower() in ('1', 'true', 'yes', 'y')


def parse_text(val):
    if val is None or val.strip() == '':
        return None
    return val.strip()


def _parser_for(column):
    if isinstance(column.type, Boolean):
        return parse_bool
    if isinstance(column.type, DateTime):
        return parse_datetime
    if isinstance(column.type, Date):
        return parse_date
    if isinstance(column.type, Numeric):
        return parse_decimal
    if isinstance(column.type, Integer):
        return parse_int
    return parse_text


def row_to_values(model, row: dict) -> dict:
    """Convert one CSV row into column values for ``model``, skipping blanks."""
    values = {}
    for column in model.__table__.columns:
        if column.name not in row:
            continue
        value = _parser_for(column)(row[column.name])
        if value is not None:
            values[column.name] = value
    return values


def seed_table(session, model, csv_path) -> int:
    logger.info("Seeding %s from %s", model.__tablename__, csv_path)
    count = 0
    with open(csv_path, newline='', encoding='utf-8-sig') as f:
        reader = csv.DictReader(f)
        for row in reader:
            values = row_to_values(model, row)
            if not values:
                continue
            session.add(model(**values))
            count += 1
            if count % 5000 == 0:
                session.flush()
    session.flush()
    logger.info("  -> %d %s seeded", count, model.__tablename__)
    return count


def seed_all(session, source_dir) -> dict:
    """Replace every reference table that has a CSV in ``source_dir``. Commits once."""
    source_dir = Path(source_dir)
    present = [m for m in SEED_MODELS if (source_dir / f"{m.__tablename__}.csv").exists()]
    counts = {}
    try:
        for model in DERIVED_MODELS:
            session.query(model).delete()
        for model in reversed(present):
            session.query(model).delete()
        for model in present:
            counts[model.__tablename__] = seed_table(
                session, model, source_dir / f"{model.__tablename__}.csv"
            )
        session.commit()
    except Exception:
        session.rollback()
        raise
    return counts


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Seed reference data from CSV exports.")
    parser.add_argument('--source', default=str(DEFAULT_SOURCE), help="directory holding the CSV files")
    parser.add_argument('--skip-if-populated', action='store_true',
                        help="do nothing when awards already exist")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    if not engine:
        logger.error("DATABASE_URL not set. Set it in backend/.env or environment.")
        return 1

    logger.info("Creating tables if they don't exist...")
    Base.metadata.create_all(bind=engine)

    session = sessionmaker(bind=engine)()
    try:
        if args.skip_if_populated:
            award_count = session.query(Award).count()
            if award_count > 0:
                logger.info("Database already contains %d awards, skipping seed.", award_count)
                return 0
        counts = seed_all(session, args.source)
    finally:
        session.close()

    if not counts:
        logger.error("No CSV files found in %s", args.source)
        return 1
    logger.info("All done. Database seeded successfully.")
    return 0


if __name__ == '__main__':
    sys.exit(main())
