"""create users and employees tables

Revision ID: 0001_users_employees
Revises:
Create Date: 2026-10-19 14:30:00
"""
from alembic import op
import sqlalchemy as sa

revision = "0001_users_employees"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("username", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("password_hash", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "employees",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("first_name", sa.String(), nullable=False),
        sa.Column("last_name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("gender", sa.String(), nullable=True),
        sa.Column("designation", sa.String(), nullable=False),
        sa.Column("salary", sa.Float(), nullable=False),
        sa.Column("date_of_joining", sa.Date(), nullable=False),
        sa.Column("department", sa.String(), nullable=False),
        sa.Column("employee_photo", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_employees"),
        sa.UniqueConstraint("email", name="uq_employees_email"),
        sa.CheckConstraint("salary >= 1000", name="ck_employees_salary_minimum"),
        sa.CheckConstraint(
            "gender IS NULL OR gender IN ('Male', 'Female', 'Other')",
            name="ck_employees_gender_allowed",
        ),
    )
    op.create_index("ix_employees_designation", "employees", ["designation"])
    op.create_index("ix_employees_department", "employees", ["department"])
    op.create_index(
        "ix_emp_designation_department", "employees", ["designation", "department"]
    )


def downgrade() -> None:
    op.drop_index("ix_emp_designation_department", table_name="employees")
    op.drop_index("ix_employees_department", table_name="employees")
    op.drop_index("ix_employees_designation", table_name="employees")
    op.drop_table("employees")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_index("ix_users_username", table_name="users")
    op.drop_table("users")
