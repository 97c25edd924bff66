"""container tracker schema

Revision ID: 0001_container_tracker
Revises:
Create Date: 2026-10-17
"""

from alembic import op
import sqlalchemy as sa

revision = "0001_container_tracker"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("username", sa.String(length=128), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("full_name", sa.String(length=255), nullable=False),
        sa.Column("role", sa.Enum("admin", "manager", "user", name="user_role"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "container_types",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=128), nullable=False, unique=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        "containers",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("container_number", sa.String(length=64), nullable=False),
        sa.Column("container_type_id", sa.Integer(), sa.ForeignKey("container_types.id"), nullable=False),
        sa.Column("source", sa.String(length=128), nullable=False),
        sa.Column(
            "status",
            sa.Enum("planned", "in_transit", "arrived", "departed", name="container_status"),
            nullable=False,
            server_default="planned",
        ),
        sa.Column("planned_date", sa.Date(), nullable=True),
        sa.Column("expected_arrival_date", sa.Date(), nullable=True),
        sa.Column("actual_arrival_date", sa.Date(), nullable=True),
        sa.Column("departure_date", sa.Date(), nullable=True),
        sa.Column("destination", sa.String(length=255), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_by", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("updated_by", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False, server_default=sa.text("1")),
    )
    op.create_index("ix_containers_container_number", "containers", ["container_number"], unique=True)
    op.create_index("ix_containers_status", "containers", ["status"])
    op.create_index("ix_containers_expected_arrival_date", "containers", ["expected_arrival_date"])

    op.create_table(
        "container_history",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "container_id",
            sa.Integer(),
            sa.ForeignKey("containers.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("field_name", sa.String(length=64), nullable=False),
        sa.Column("old_value", sa.Text(), nullable=True),
        sa.Column("new_value", sa.Text(), nullable=True),
        sa.Column("changed_by", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("changed_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_container_history_container_id", "container_history", ["container_id"])
    op.create_index("ix_container_history_changed_by", "container_history", ["changed_by"])


def downgrade() -> None:
    op.drop_index("ix_container_history_changed_by", table_name="container_history")
    op.drop_index("ix_container_history_container_id", table_name="container_history")
    op.drop_table("container_history")

    op.drop_index("ix_containers_expected_arrival_date", table_name="containers")
    op.drop_index("ix_containers_status", table_name="containers")
    op.drop_index("ix_containers_container_number", table_name="containers")
    op.drop_table("containers")

    op.drop_table("container_types")

    op.drop_index("ix_users_email", table_name="users")
    op.drop_index("ix_users_username", table_name="users")
    op.drop_table("users")
