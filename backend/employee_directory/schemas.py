"""Pydantic schemas used across the directory API."""
from datetime import date, datetime
from typing import Annotated, Literal

from pydantic import BaseModel, Field, ValidationError

from .models import MINIMUM_SALARY, Employee, User

NonEmptyStr = Annotated[str, Field(min_length=1)]


def render_datetime(value: datetime) -> str:
    """ISO-8601 UTC timestamp with millisecond precision."""
    return value.isoformat(timespec="milliseconds") + "Z"


def parse_date(value: str | date) -> date:
    """Parse a calendar date, accepting either a date or a full timestamp."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        raise ValueError(f'Invalid date_of_joining: "{value}"') from None


def describe_validation_error(exc: ValidationError) -> str:
    """Flatten a pydantic ValidationError into a single client-facing line."""

    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()))
        parts.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(parts)


class TokenData(BaseModel):
    """Information encoded into JWTs."""

    user_id: str
    iat: int
    exp: int


class UserRead(BaseModel):
    """Public representation of a user."""

    id: str
    username: str
    email: str
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_model(cls, user: User) -> "UserRead":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            created_at=render_datetime(user.created_at),
            updated_at=render_datetime(user.updated_at),
        )


class EmployeeRead(BaseModel):
    """Employee representation returned by the API."""

    id: str
    first_name: str
    last_name: str
    email: str
    gender: str | None = None
    designation: str
    salary: float
    date_of_joining: str
    department: str
    employee_photo: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_model(cls, employee: Employee) -> "EmployeeRead":
        return cls(
            id=employee.id,
            first_name=employee.first_name,
            last_name=employee.last_name,
            email=employee.email,
            gender=employee.gender,
            designation=employee.designation,
            salary=employee.salary,
            date_of_joining=employee.date_of_joining.isoformat(),
            department=employee.department,
            employee_photo=employee.employee_photo,
            created_at=render_datetime(employee.created_at),
            updated_at=render_datetime(employee.updated_at),
        )


class EmployeeCreate(BaseModel):
    """Fully validated employee record, checked before it reaches the store."""

    first_name: NonEmptyStr
    last_name: NonEmptyStr
    email: NonEmptyStr
    gender: Literal["Male", "Female", "Other"] | None = None
    designation: NonEmptyStr
    salary: float = Field(ge=MINIMUM_SALARY)
    date_of_joining: date
    department: NonEmptyStr
    employee_photo: str | None = None


# -- envelopes ---------------------------------------------------------------


class LoginResponse(BaseModel):
    success: bool
    token: str | None = None
    message: str | None = None


class UserResponse(BaseModel):
    success: bool
    user: UserRead | None = None
    message: str | None = None


class EmployeeResponse(BaseModel):
    success: bool
    employee: EmployeeRead | None = None
    message: str | None = None


class DeleteResponse(BaseModel):
    success: bool
    message: str | None = None


# -- operation arguments -----------------------------------------------------


class Arguments(BaseModel):
    """Typed arguments of a single operation; unknown names are rejected."""

    model_config = {
        "populate_by_name": True,
        "extra": "forbid",
    }


class NoArgs(Arguments):
    pass


class SignupArgs(Arguments):
    username: str
    email: str
    password: str


class LoginArgs(Arguments):
    username_or_email: str = Field(alias="usernameOrEmail")
    password: str


class EidArgs(Arguments):
    eid: str


class EmployeeSearchArgs(Arguments):
    designation: str | None = None
    department: str | None = None


class EmployeeInput(Arguments):
    """Arguments of addNewEmployee, typed but not yet range-checked."""

    first_name: str
    last_name: str
    email: str
    gender: str | None = None
    designation: str
    salary: float
    date_of_joining: str
    department: str
    employee_photo: str | None = None


class EmployeeUpdate(Arguments):
    """One optional slot per updatable field; only supplied slots are applied."""

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    gender: str | None = None
    designation: str | None = None
    salary: float | None = None
    date_of_joining: str | None = None
    department: str | None = None
    employee_photo: str | None = None

    def supplied(self) -> dict:
        """Fields the caller actually sent, explicit nulls included."""
        return self.model_dump(exclude_unset=True)


class UpdateEmployeeArgs(Arguments):
    eid: str
    input: EmployeeUpdate
