"""Initial schema: reference data, tag mappings, tenants and computed pay rules.

Revision ID: 001
Revises:
Create Date: 2025-03-10

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _rule_id_type():
    return sa.BigInteger().with_variant(sa.Integer(), "sqlite")


def upgrade() -> None:
    op.create_table(
        "industries",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("industry_code", sa.String(50), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.String(500), nullable=True),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_industries_industry_code"), "industries", ["industry_code"], unique=True)

    op.create_table(
        "awards",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("award_code", sa.String(20), nullable=False),
        sa.Column("award_name", sa.String(200), nullable=False),
        sa.Column("industry_id", sa.Integer(), nullable=False),
        sa.Column("operative_from", sa.Date(), nullable=False),
        sa.Column("operative_to", sa.Date(), nullable=True),
        sa.Column("version_number", sa.Integer(), server_default=sa.text("1"), nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("modified_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["industry_id"], ["industries.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_awards_award_code"), "awards", ["award_code"], unique=True)

    op.create_table(
        "employment_types",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("code", sa.String(10), nullable=False),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("rate_type_code", sa.String(5), nullable=False),
        sa.Column("casual_loading_percent", sa.Numeric(5, 2), nullable=True),
        sa.Column("description", sa.String(500), nullable=True),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_employment_types_code"), "employment_types", ["code"], unique=True)

    op.create_table(
        "classifications",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("award_id", sa.Integer(), nullable=False),
        sa.Column("employment_type_id", sa.Integer(), nullable=False),
        sa.Column("classification_level", sa.Integer(), nullable=False),
        sa.Column("classification_name", sa.String(200), nullable=False),
        sa.Column("base_hourly_rate", sa.Numeric(10, 4), nullable=False),
        sa.Column("base_weekly_rate", sa.Numeric(10, 2), nullable=False),
        sa.Column("base_annual_rate", sa.Numeric(12, 2), nullable=True),
        sa.Column("operative_from", sa.Date(), nullable=False),
        sa.Column("operative_to", sa.Date(), nullable=True),
        sa.Column("version_number", sa.Integer(), server_default=sa.text("1"), nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.ForeignKeyConstraint(["award_id"], ["awards.id"]),
        sa.ForeignKeyConstraint(["employment_type_id"], ["employment_types.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "award_id", "classification_level", "employment_type_id", "operative_from",
            name="uq_classifications_award_level_type_from",
        ),
    )
    op.create_index(op.f("ix_classifications_award_id"), "classifications", ["award_id"], unique=False)

    op.create_table(
        "penalty_rates",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("award_id", sa.Integer(), nullable=False),
        sa.Column("penalty_code", sa.String(50), nullable=False),
        sa.Column("penalty_name", sa.String(200), nullable=False),
        sa.Column("penalty_category", sa.String(50), nullable=False),
        sa.Column("rate_multiplier", sa.Numeric(5, 2), nullable=False),
        sa.Column("applicable_days", sa.String(50), nullable=True),
        sa.Column("applicable_hours", sa.String(50), nullable=True),
        sa.Column("clause_reference", sa.String(50), nullable=True),
        sa.Column("operative_from", sa.Date(), nullable=False),
        sa.Column("operative_to", sa.Date(), nullable=True),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.ForeignKeyConstraint(["award_id"], ["awards.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_penalty_rates_award_id"), "penalty_rates", ["award_id"], unique=False)

    op.create_table(
        "allowances",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("award_id", sa.Integer(), nullable=False),
        sa.Column("allowance_code", sa.String(50), nullable=False),
        sa.Column("allowance_name", sa.String(200), nullable=False),
        sa.Column("allowance_type", sa.String(20), nullable=False),
        sa.Column("amount", sa.Numeric(10, 4), nullable=False),
        sa.Column("unit", sa.String(20), nullable=False),
        sa.Column("rate_percent", sa.Numeric(5, 2), nullable=True),
        sa.Column("is_all_purpose", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("clause_reference", sa.String(50), nullable=True),
        sa.Column("operative_from", sa.Date(), nullable=False),
        sa.Column("operative_to", sa.Date(), nullable=True),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.ForeignKeyConstraint(["award_id"], ["awards.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_allowances_award_id"), "allowances", ["award_id"], unique=False)

    op.create_table(
        "tags",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("tag_code", sa.String(50), nullable=False),
        sa.Column("tag_name", sa.String(100), nullable=False),
        sa.Column("tag_category", sa.String(50), nullable=False),
        sa.Column("description", sa.String(500), nullable=True),
        sa.Column("affects_penalties", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("affects_allowances", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("created_by", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_tags_tag_code"), "tags", ["tag_code"], unique=True)

    op.create_table(
        "tag_penalty_mappings",
        sa.Column("tag_id", sa.Integer(), nullable=False),
        sa.Column("penalty_rate_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["tag_id"], ["tags.id"]),
        sa.ForeignKeyConstraint(["penalty_rate_id"], ["penalty_rates.id"]),
        sa.PrimaryKeyConstraint("tag_id", "penalty_rate_id"),
    )

    op.create_table(
        "tag_allowance_mappings",
        sa.Column("tag_id", sa.Integer(), nullable=False),
        sa.Column("allowance_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["tag_id"], ["tags.id"]),
        sa.ForeignKeyConstraint(["allowance_id"], ["allowances.id"]),
        sa.PrimaryKeyConstraint("tag_id", "allowance_id"),
    )

    op.create_table(
        "tenants",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("abn", sa.String(50), nullable=True),
        sa.Column("industry_id", sa.Integer(), nullable=False),
        sa.Column("primary_contact_name", sa.String(100), nullable=True),
        sa.Column("primary_contact_email", sa.String(100), nullable=True),
        sa.Column("phone_number", sa.String(20), nullable=True),
        sa.Column("billing_address", sa.String(500), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("modified_at", sa.DateTime(), nullable=True),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.ForeignKeyConstraint(["industry_id"], ["industries.id"]),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "tenant_awards",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("tenant_id", sa.Integer(), nullable=False),
        sa.Column("award_id", sa.Integer(), nullable=False),
        sa.Column("effective_from", sa.Date(), nullable=False),
        sa.Column("effective_to", sa.Date(), nullable=True),
        sa.Column("configuration", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("modified_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"]),
        sa.ForeignKeyConstraint(["award_id"], ["awards.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_tenant_awards_tenant_id"), "tenant_awards", ["tenant_id"], unique=False)

    op.create_table(
        "computed_pay_rules",
        sa.Column("id", _rule_id_type(), autoincrement=True, nullable=False),
        sa.Column("award_id", sa.Integer(), nullable=False),
        sa.Column("employment_type_id", sa.Integer(), nullable=False),
        sa.Column("classification_id", sa.Integer(), nullable=False),
        sa.Column("penalty_rate_id", sa.Integer(), nullable=True),
        sa.Column("base_hourly_rate", sa.Numeric(10, 4), nullable=False),
        sa.Column("penalty_multiplier", sa.Numeric(5, 2), server_default=sa.text("1.00"), nullable=False),
        sa.Column("effective_from", sa.Date(), nullable=False),
        sa.Column("effective_to", sa.Date(), nullable=True),
        sa.Column("generated_at", sa.DateTime(), nullable=True),
        sa.Column("generated_by", sa.String(100), server_default=sa.text("'SYSTEM'"), nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.ForeignKeyConstraint(["award_id"], ["awards.id"]),
        sa.ForeignKeyConstraint(["employment_type_id"], ["employment_types.id"]),
        sa.ForeignKeyConstraint(["classification_id"], ["classifications.id"]),
        sa.ForeignKeyConstraint(["penalty_rate_id"], ["penalty_rates.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_computed_pay_rules_lookup",
        "computed_pay_rules",
        ["award_id", "employment_type_id", "classification_id", "effective_from"],
        unique=False,
    )

    op.create_table(
        "computed_rule_allowances",
        sa.Column("rule_id", _rule_id_type(), nullable=False),
        sa.Column("allowance_id", sa.Integer(), nullable=False),
        sa.Column("allowance_amount", sa.Numeric(10, 4), nullable=False),
        sa.ForeignKeyConstraint(["rule_id"], ["computed_pay_rules.id"]),
        sa.ForeignKeyConstraint(["allowance_id"], ["allowances.id"]),
        sa.PrimaryKeyConstraint("rule_id", "allowance_id"),
    )

    op.create_table(
        "computed_rule_tags",
        sa.Column("rule_id", _rule_id_type(), nullable=False),
        sa.Column("tag_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["rule_id"], ["computed_pay_rules.id"]),
        sa.ForeignKeyConstraint(["tag_id"], ["tags.id"]),
        sa.PrimaryKeyConstraint("rule_id", "tag_id"),
    )


def downgrade() -> None:
    op.drop_table("computed_rule_tags")
    op.drop_table("computed_rule_allowances")
    op.drop_index("ix_computed_pay_rules_lookup", table_name="computed_pay_rules")
    op.drop_table("computed_pay_rules")
    op.drop_index(op.f("ix_tenant_awards_tenant_id"), table_name="tenant_awards")
    op.drop_table("tenant_awards")
    op.drop_table("tenants")
    op.drop_table("tag_allowance_mappings")
    op.drop_table("tag_penalty_mappings")
    op.drop_index(op.f("ix_tags_tag_code"), table_name="tags")
    op.drop_table("tags")
    op.drop_index(op.f("ix_allowances_award_id"), table_name="allowances")
    op.drop_table("allowances")
    op.drop_index(op.f("ix_penalty_rates_award_id"), table_name="penalty_rates")
    op.drop_table("penalty_rates")
    op.drop_index(op.f("ix_classifications_award_id"), table_name="classifications")
    op.drop_table("classifications")
    op.drop_index(op.f("ix_employment_types_code"), table_name="employment_types")
    op.drop_table("employment_types")
    op.drop_index(op.f("ix_awards_award_code"), table_name="awards")
    op.drop_table("awards")
    op.drop_index(op.f("ix_industries_industry_code"), table_name="industries")
    op.drop_table("industries")
