"""Initial faculty performance schema."""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa

revision = "20250114_000001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "teachers",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("teacher_id", sa.String(length=64), nullable=False),
        sa.Column("first_name", sa.String(length=255), nullable=False),
        sa.Column("last_name", sa.String(length=255), nullable=False),
        sa.Column("middle_name", sa.String(length=255), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("department", sa.String(length=255), nullable=False),
        sa.Column("position", sa.String(length=255), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="Active"),
        sa.Column("zone", sa.String(length=16), nullable=False, server_default="green"),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("enrolled_students", sa.Integer(), nullable=True),
        sa.Column("p1_failed", sa.Integer(), nullable=True),
        sa.Column("p1_percent", sa.Float(), nullable=True),
        sa.Column("p1_category", sa.String(length=32), nullable=True),
        sa.Column("p2_failed", sa.Integer(), nullable=True),
        sa.Column("p2_percent", sa.Float(), nullable=True),
        sa.Column("p2_category", sa.String(length=32), nullable=True),
        sa.Column("p3_failed", sa.Integer(), nullable=True),
        sa.Column("p3_percent", sa.Float(), nullable=True),
        sa.Column("p3_category", sa.String(length=32), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("teacher_id", name="uq_teachers_teacher_id"),
    )
    op.create_index(op.f("ix_teachers_teacher_id"), "teachers", ["teacher_id"], unique=True)
    op.create_index(op.f("ix_teachers_department"), "teachers", ["department"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_teachers_department"), table_name="teachers")
    op.drop_index(op.f("ix_teachers_teacher_id"), table_name="teachers")
    op.drop_table("teachers")
