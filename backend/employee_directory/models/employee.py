"""Employee model for the directory."""
from datetime import date

from sqlalchemy import CheckConstraint, Date, Float, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, RecordMixin

MINIMUM_SALARY = 1000
GENDERS = ("Male", "Female", "Other")


class Employee(RecordMixin, Base):
    """Directory record; salary and email constraints live in the table too."""

    __tablename__ = "employees"

    first_name: Mapped[str] = mapped_column(String, nullable=False)
    last_name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    gender: Mapped[str | None] = mapped_column(String, nullable=True)
    designation: Mapped[str] = mapped_column(String, index=True, nullable=False)
    salary: Mapped[float] = mapped_column(Float, nullable=False)
    date_of_joining: Mapped[date] = mapped_column(Date, nullable=False)
    department: Mapped[str] = mapped_column(String, index=True, nullable=False)
    employee_photo: Mapped[str | None] = mapped_column(String, nullable=True)

    __table_args__ = (
        CheckConstraint(f"salary >= {MINIMUM_SALARY}", name="salary_minimum"),
        CheckConstraint(
            "gender IS NULL OR gender IN ({})".format(", ".join(f"'{g}'" for g in GENDERS)),
            name="gender_allowed",
        ),
        Index("ix_emp_designation_department", "designation", "department"),
    )
