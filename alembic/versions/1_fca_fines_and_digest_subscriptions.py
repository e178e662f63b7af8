"""Create fca_fines and digest_subscriptions tables."""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "1_fines_and_digest"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create both tables, skipping any that already exist."""
    conn = op.get_bind()
    inspector = sa.inspect(conn)
    existing_tables = inspector.get_table_names()

    if "fca_fines" not in existing_tables:
        op.create_table(
            "fca_fines",
            sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
            sa.Column("fine_reference", sa.String(100), nullable=True),
            sa.Column("firm_individual", sa.String(500), nullable=False),
            sa.Column("firm_category", sa.String(200), nullable=True),
            sa.Column("regulator", sa.String(20), nullable=False, server_default="FCA"),
            sa.Column("final_notice_url", sa.Text(), nullable=False),
            sa.Column("summary", sa.Text(), nullable=False, server_default=""),
            sa.Column("breach_type", sa.String(200), nullable=True),
            sa.Column(
                "breach_categories",
                postgresql.JSONB(),
                nullable=False,
                server_default=sa.text("'[]'::jsonb"),
            ),
            sa.Column("amount", sa.Numeric(15, 2), nullable=False),
            sa.Column("date_issued", sa.Date(), nullable=False),
            sa.Column("year_issued", sa.Integer(), nullable=False),
            sa.Column("month_issued", sa.Integer(), nullable=False),
            sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("final_notice_url", "firm_individual", name="uq_fca_fines_notice_firm"),
            sa.CheckConstraint("amount >= 0", name="ck_fca_fines_amount_non_negative"),
        )

        op.create_index("ix_fca_fines_firm_individual", "fca_fines", ["firm_individual"])
        op.create_index("idx_fca_fines_date_issued", "fca_fines", ["date_issued"])
        op.create_index("idx_fca_fines_year_issued", "fca_fines", ["year_issued"])

    if "digest_subscriptions" not in existing_tables:
        op.create_table(
            "digest_subscriptions",
            sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
            sa.Column("email", sa.String(320), nullable=False),
            sa.Column("frequency", sa.String(20), nullable=False, server_default="weekly"),
            sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
            sa.Column("email_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column("verification_token", sa.String(255), nullable=True),
            sa.Column("verification_expires_at", sa.DateTime(timezone=True), nullable=True),
            sa.Column(
                "unsubscribe_token",
                sa.String(255),
                nullable=True,
                server_default=sa.text("gen_random_uuid()::text"),
            ),
            sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
            sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("email", "frequency", name="uq_digest_subscriptions_email_frequency"),
            sa.UniqueConstraint("verification_token", name="uq_digest_subscriptions_verification_token"),
            sa.UniqueConstraint("unsubscribe_token", name="uq_digest_subscriptions_unsubscribe_token"),
            sa.CheckConstraint(
                "frequency IN ('daily', 'weekly', 'monthly')",
                name="ck_digest_subscriptions_frequency",
            ),
            sa.CheckConstraint(
                "status IN ('pending', 'active', 'unsubscribed', 'expired')",
                name="ck_digest_subscriptions_status",
            ),
        )

        op.create_index("ix_digest_subscriptions_email", "digest_subscriptions", ["email"])
        op.create_index("idx_digest_subscriptions_status", "digest_subscriptions", ["status"])


def downgrade() -> None:
    """Drop both tables."""
    op.drop_table("digest_subscriptions", if_exists=True)
    op.drop_table("fca_fines", if_exists=True)
