"""create lab cie tables

Revision ID: 3a7d9e21b0c4
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "3a7d9e21b0c4"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "users",
        sa.Column("user_id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("username", sa.String(length=50), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("role", sa.Enum("admin", "faculty", "student", name="user_role"), nullable=False),
        sa.Column("department", sa.String(length=100), nullable=True),
        sa.Column("semester", sa.Integer(), nullable=True),
        sa.Column("section", sa.String(length=10), nullable=True),
        sa.Column("batch", sa.String(length=10), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=True, server_default=sa.text("1")),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True),
    )
    op.create_table(
        "labs",
        sa.Column("lab_id", sa.Integer(), primary_key=True),
        sa.Column("lab_code", sa.String(length=20), nullable=False),
        sa.Column("lab_name", sa.String(length=100), nullable=False),
        sa.Column("semester", sa.Integer(), nullable=False),
        sa.Column("department", sa.String(length=100), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True),
    )
    op.create_table(
        "lab_assignments",
        sa.Column("assignment_id", sa.Integer(), primary_key=True),
        sa.Column("lab_id", sa.Integer(), nullable=False),
        sa.Column("faculty_id", sa.Integer(), nullable=False),
        sa.Column("section", sa.String(length=10), nullable=False),
        sa.Column("batch", sa.String(length=10), nullable=False),
        sa.Column("academic_year", sa.String(length=9), nullable=False),
        sa.Column("semester_type", sa.String(length=10), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("day_of_week", sa.String(length=10), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True),
        sa.ForeignKeyConstraint(["lab_id"], ["labs.lab_id"]),
        sa.ForeignKeyConstraint(["faculty_id"], ["users.user_id"]),
    )
    op.create_table(
        "lab_sessions",
        sa.Column("session_id", sa.Integer(), primary_key=True),
        sa.Column("assignment_id", sa.Integer(), nullable=False),
        sa.Column("week_number", sa.Integer(), nullable=False),
        sa.Column("session_date", sa.Date(), nullable=False),
        sa.ForeignKeyConstraint(["assignment_id"], ["lab_assignments.assignment_id"]),
        sa.UniqueConstraint("assignment_id", "session_date", name="unique_assignment_date"),
        sa.UniqueConstraint("assignment_id", "week_number", name="unique_assignment_week"),
    )
    op.create_table(
        "mark_ledgers",
        sa.Column("ledger_id", sa.Integer(), primary_key=True),
        sa.Column("student_id", sa.Integer(), nullable=False),
        sa.Column("assignment_id", sa.Integer(), nullable=False),
        sa.Column("entered_by", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["student_id"], ["users.user_id"]),
        sa.ForeignKeyConstraint(["assignment_id"], ["lab_assignments.assignment_id"]),
        sa.ForeignKeyConstraint(["entered_by"], ["users.user_id"]),
        sa.UniqueConstraint("student_id", "assignment_id", name="unique_student_assignment"),
    )
    op.create_table(
        "week_entries",
        sa.Column("entry_id", sa.Integer(), primary_key=True),
        sa.Column("ledger_id", sa.Integer(), nullable=False),
        sa.Column("session_date", sa.Date(), nullable=False),
        sa.Column("pr", sa.Float(), nullable=True),
        sa.Column("pe", sa.Float(), nullable=True),
        sa.Column("p", sa.Float(), nullable=True),
        sa.Column("r", sa.Float(), nullable=True),
        sa.Column("c", sa.Float(), nullable=True),
        sa.Column("total", sa.Float(), nullable=True),
        sa.Column("entered_by", sa.Integer(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["ledger_id"], ["mark_ledgers.ledger_id"]),
        sa.ForeignKeyConstraint(["entered_by"], ["users.user_id"]),
        sa.UniqueConstraint("ledger_id", "session_date", name="unique_ledger_date"),
    )


def downgrade():
    op.drop_table("week_entries")
    op.drop_table("mark_ledgers")
    op.drop_table("lab_sessions")
    op.drop_table("lab_assignments")
    op.drop_table("labs")
    op.drop_table("users")
