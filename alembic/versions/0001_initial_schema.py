"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19 09:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

SOFT_DELETE_TABLES = (
    "candidates",
    "documents",
    "payments",
    "required_documents",
    "employers",
    "job_orders",
    "placements",
    "passport_tracking",
    "visa_tracking",
    "medical_tracking",
    "interview_tracking",
    "travel_tracking",
)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def _entity_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "is_deleted",
            sa.Boolean(),
            server_default=sa.text("0"),
            nullable=False,
        ),
        *_timestamps(),
    ]


def _candidate_fk() -> sa.Column:
    return sa.Column(
        "candidate_id",
        sa.String(36),
        sa.ForeignKey("candidates.id"),
        nullable=False,
    )


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("username", sa.String(50), nullable=False, unique=True),
        sa.Column(
            "role",
            sa.String(20),
            server_default=sa.text("'staff'"),
            nullable=False,
        ),
        sa.Column(
            "supervisor_id",
            sa.String(36),
            sa.ForeignKey("users.id"),
            nullable=True,
        ),
        sa.Column("features", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_table(
        "admin_feature_assignments",
        sa.Column(
            "admin_id",
            sa.String(36),
            sa.ForeignKey("users.id"),
            primary_key=True,
        ),
        sa.Column("feature_key", sa.String(50), primary_key=True),
        sa.Column("enabled", sa.Boolean(), server_default=sa.text("0"), nullable=False),
        *_timestamps(),
    )
    op.create_table(
        "staff_feature_grants",
        sa.Column(
            "staff_id",
            sa.String(36),
            sa.ForeignKey("users.id"),
            primary_key=True,
        ),
        sa.Column("feature_key", sa.String(50), primary_key=True),
        sa.Column("admin_id", sa.String(36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("enabled", sa.Boolean(), server_default=sa.text("0"), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "candidates",
        *_entity_columns(),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("position", sa.String(100)),
        sa.Column("passport_no", sa.String(20), unique=True),
        sa.Column("contact", sa.String(200)),
        sa.Column("status", sa.String(30), server_default=sa.text("'New'"), nullable=False),
        sa.Column("notes", sa.Text()),
    )
    op.create_table(
        "documents",
        *_entity_columns(),
        _candidate_fk(),
        sa.Column("file_name", sa.String(255), nullable=False),
        sa.Column("file_type", sa.String(50)),
        sa.Column("file_path", sa.String(500), unique=True),
        sa.Column(
            "category",
            sa.String(50),
            server_default=sa.text("'Uncategorized'"),
            nullable=False,
        ),
    )
    op.create_table(
        "payments",
        *_entity_columns(),
        _candidate_fk(),
        sa.Column("description", sa.String(200), nullable=False),
        sa.Column("total_amount", sa.Float(), nullable=False),
        sa.Column("amount_paid", sa.Float(), server_default=sa.text("0"), nullable=False),
        sa.Column(
            "status",
            sa.String(30),
            server_default=sa.text("'Pending'"),
            nullable=False,
        ),
        sa.Column("due_date", sa.String(10)),
    )
    op.create_table(
        "required_documents",
        *_entity_columns(),
        sa.Column("name", sa.String(100), nullable=False, unique=True),
    )

    op.create_table(
        "employers",
        *_entity_columns(),
        sa.Column("company_name", sa.String(150), nullable=False),
        sa.Column("country", sa.String(60)),
        sa.Column("contact_person", sa.String(100)),
        sa.Column("contact_email", sa.String(150)),
        sa.Column("notes", sa.Text()),
    )
    op.create_table(
        "job_orders",
        *_entity_columns(),
        sa.Column(
            "employer_id",
            sa.String(36),
            sa.ForeignKey("employers.id"),
            nullable=False,
        ),
        sa.Column("position_title", sa.String(100), nullable=False),
        sa.Column("country", sa.String(60)),
        sa.Column(
            "openings_count",
            sa.Integer(),
            server_default=sa.text("1"),
            nullable=False,
        ),
        sa.Column("status", sa.String(20), server_default=sa.text("'Open'"), nullable=False),
    )
    op.create_table(
        "placements",
        *_entity_columns(),
        _candidate_fk(),
        sa.Column(
            "job_order_id",
            sa.String(36),
            sa.ForeignKey("job_orders.id"),
            nullable=False,
        ),
        sa.Column(
            "status",
            sa.String(30),
            server_default=sa.text("'Assigned'"),
            nullable=False,
        ),
        sa.UniqueConstraint("candidate_id", "job_order_id"),
    )

    op.create_table(
        "passport_tracking",
        *_entity_columns(),
        _candidate_fk(),
        sa.Column(
            "movement_type",
            sa.Enum("RECEIVE", "SEND", name="passport_movement"),
            nullable=False,
        ),
        sa.Column("method", sa.String(50)),
        sa.Column("courier_number", sa.String(50)),
        sa.Column("movement_date", sa.String(10)),
        sa.Column("notes", sa.Text()),
    )
    op.create_table(
        "visa_tracking",
        *_entity_columns(),
        _candidate_fk(),
        sa.Column("country", sa.String(60), nullable=False),
        sa.Column("visa_type", sa.String(50)),
        sa.Column("application_date", sa.String(10)),
        sa.Column(
            "status",
            sa.String(30),
            server_default=sa.text("'Pending'"),
            nullable=False,
        ),
    )
    op.create_table(
        "medical_tracking",
        *_entity_columns(),
        _candidate_fk(),
        sa.Column("test_date", sa.String(10)),
        sa.Column("certificate_path", sa.String(500)),
        sa.Column(
            "status",
            sa.String(30),
            server_default=sa.text("'Pending'"),
            nullable=False,
        ),
    )
    op.create_table(
        "interview_tracking",
        *_entity_columns(),
        _candidate_fk(),
        sa.Column(
            "job_order_id",
            sa.String(36),
            sa.ForeignKey("job_orders.id"),
            nullable=True,
        ),
        sa.Column("interview_date", sa.String(10), nullable=False),
        sa.Column("round", sa.String(30)),
        sa.Column(
            "status",
            sa.String(30),
            server_default=sa.text("'Scheduled'"),
            nullable=False,
        ),
    )
    op.create_table(
        "travel_tracking",
        *_entity_columns(),
        _candidate_fk(),
        sa.Column("pnr", sa.String(20)),
        sa.Column("travel_date", sa.String(10)),
        sa.Column("departure_city", sa.String(60)),
        sa.Column("arrival_city", sa.String(60)),
    )

    op.create_table(
        "audit_log",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.String(36)),
        sa.Column("username", sa.String(50)),
        sa.Column("action", sa.String(50), nullable=False),
        sa.Column("target_type", sa.String(50)),
        sa.Column("target_id", sa.String(36)),
        sa.Column("details", sa.Text()),
        *_timestamps(),
    )
    op.create_index("ix_audit_log_user_id", "audit_log", ["user_id"])

    for table in SOFT_DELETE_TABLES:
        op.create_index(f"ix_{table}_is_deleted", table, ["is_deleted"])
    for table in (
        "documents",
        "payments",
        "placements",
        "passport_tracking",
        "visa_tracking",
        "medical_tracking",
        "interview_tracking",
        "travel_tracking",
    ):
        op.create_index(f"ix_{table}_candidate_id", table, ["candidate_id"])
    op.create_index("ix_job_orders_employer_id", "job_orders", ["employer_id"])
    op.create_index("ix_placements_job_order_id", "placements", ["job_order_id"])


def downgrade() -> None:
    for table in (
        "audit_log",
        "travel_tracking",
        "interview_tracking",
        "medical_tracking",
        "visa_tracking",
        "passport_tracking",
        "placements",
        "job_orders",
        "employers",
        "required_documents",
        "payments",
        "documents",
        "candidates",
        "staff_feature_grants",
        "admin_feature_assignments",
        "users",
    ):
        op.drop_table(table)
