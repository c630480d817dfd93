"""Operations exposed by the directory API.

Each public method is one operation. Mutations (and login) answer with an
envelope and never raise for bad input or store failures; the three employee
read queries raise OperationError instead, which the transport reports as a
protocol-level error.
"""
from __future__ import annotations

import logging
from typing import Any

from .auth import hash_password, issue_access_token, verify_password
from .config import Settings
from .database import Database
from .models import MINIMUM_SALARY, Employee, User, utcnow
from .repositories import EmployeeRepository, UserRepository
from .result import Result, capture
from .schemas import (
    DeleteResponse,
    EmployeeCreate,
    EmployeeInput,
    EmployeeRead,
    EmployeeResponse,
    EmployeeUpdate,
    LoginResponse,
    UserRead,
    UserResponse,
    parse_date,
)

logger = logging.getLogger("employee_directory.resolvers")

SALARY_TOO_LOW = f"Salary must be at least {MINIMUM_SALARY}."
EMPLOYEE_NOT_FOUND = "Employee not found."


class Resolvers:
    """Stateless operation handlers bound to a database handle."""

    def __init__(self, database: Database, settings: Settings) -> None:
        self.database = database
        self.settings = settings

    # -- users ---------------------------------------------------------------

    async def signup(self, username: str, email: str, password: str) -> UserResponse:
        result = await capture("signup", lambda: self._signup(username, email, password))
        return result.to_envelope(UserResponse, "user")

    async def _signup(self, username: str, email: str, password: str) -> Result[UserRead]:
        if not username or not email or not password:
            return Result.fail("All fields are required.")

        async with self.database.session() as session:
            users = UserRepository(session)
            if await users.find_conflicting(username, email) is not None:
                return Result.fail("Username or email already exists.")

            now = utcnow()
            user = await users.insert(
                User(
                    username=username,
                    email=email,
                    password_hash=hash_password(password),
                    created_at=now,
                    updated_at=now,
                )
            )

        logger.info("Created user %s", user.id)
        return Result.ok(UserRead.from_model(user), "User created successfully.")

    async def login(self, username_or_email: str, password: str) -> LoginResponse:
        result = await capture("login", lambda: self._login(username_or_email, password))
        return result.to_envelope(LoginResponse, "token")

    async def _login(self, username_or_email: str, password: str) -> Result[str]:
        async with self.database.session() as session:
            user = await UserRepository(session).find_by_login(username_or_email)
        if user is None:
            return Result.fail("User not found.")
        if not verify_password(password, user.password_hash):
            logger.info("Rejected login for user %s", user.id)
            return Result.fail("Invalid credentials.")

        token = issue_access_token(user, self.settings.secret_key)
        logger.info("User %s logged in", user.id)
        return Result.ok(token, "Login successful.")

    # -- employee queries ----------------------------------------------------

    async def get_all_employees(self) -> list[EmployeeRead]:
        result = await capture("getAllEmployees", self._get_all_employees)
        return result.unwrap()

    async def _get_all_employees(self) -> Result[list[EmployeeRead]]:
        async with self.database.session() as session:
            employees = await EmployeeRepository(session).find_many()
        return Result.ok([EmployeeRead.from_model(emp) for emp in employees])

    async def search_employee_by_eid(self, eid: str) -> EmployeeRead | None:
        result = await capture("searchEmployeeByEid", lambda: self._search_employee_by_eid(eid))
        return result.unwrap()

    async def _search_employee_by_eid(self, eid: str) -> Result[EmployeeRead | None]:
        async with self.database.session() as session:
            employee = await EmployeeRepository(session).find_by_id(eid)
        return Result.ok(EmployeeRead.from_model(employee) if employee is not None else None)

    async def search_employee_by_designation_or_department(
        self, designation: str | None = None, department: str | None = None
    ) -> list[EmployeeRead]:
        result = await capture(
            "searchEmployeeByDesignationOrDepartment",
            lambda: self._search_employee_by_designation_or_department(designation, department),
        )
        return result.unwrap()

    async def _search_employee_by_designation_or_department(
        self, designation: str | None, department: str | None
    ) -> Result[list[EmployeeRead]]:
        if not designation and not department:
            return Result.fail("Please provide either designation or department to search.")

        filters = {}
        if designation:
            filters["designation"] = designation
        if department:
            filters["department"] = department
        async with self.database.session() as session:
            employees = await EmployeeRepository(session).find_many(**filters)
        return Result.ok([EmployeeRead.from_model(emp) for emp in employees])

    # -- employee mutations --------------------------------------------------

    async def add_new_employee(self, **fields: Any) -> EmployeeResponse:
        result = await capture("addNewEmployee", lambda: self._add_new_employee(fields))
        return result.to_envelope(EmployeeResponse, "employee")

    async def _add_new_employee(self, fields: dict[str, Any]) -> Result[EmployeeRead]:
        args = EmployeeInput(**fields)
        # Checked ahead of the schema for a clearer message.
        if args.salary < MINIMUM_SALARY:
            return Result.fail(SALARY_TOO_LOW)

        record = EmployeeCreate.model_validate(
            {**args.model_dump(), "date_of_joining": parse_date(args.date_of_joining)}
        )
        now = utcnow()
        async with self.database.session() as session:
            employee = await EmployeeRepository(session).insert(
                Employee(**record.model_dump(), created_at=now, updated_at=now)
            )

        logger.info("Added employee %s", employee.id)
        return Result.ok(EmployeeRead.from_model(employee), "Employee added successfully.")

    async def update_employee_by_eid(
        self, eid: str, input: EmployeeUpdate | dict[str, Any]
    ) -> EmployeeResponse:
        result = await capture("updateEmployeeByEid", lambda: self._update_employee_by_eid(eid, input))
        return result.to_envelope(EmployeeResponse, "employee")

    async def _update_employee_by_eid(
        self, eid: str, input: EmployeeUpdate | dict[str, Any]
    ) -> Result[EmployeeRead]:
        async with self.database.session() as session:
            employees = EmployeeRepository(session)
            employee = await employees.find_by_id(eid)
            if employee is None:
                return Result.fail(EMPLOYEE_NOT_FOUND)

            changes = EmployeeUpdate.model_validate(input).supplied()
            if changes.get("date_of_joining") is not None:
                changes["date_of_joining"] = parse_date(changes["date_of_joining"])
            if self.settings.validate_partial_updates:
                rejection = await self._check_update(employees, employee, changes)
                if rejection is not None:
                    return rejection

            for field, value in changes.items():
                setattr(employee, field, value)
            employee.updated_at = utcnow()
            employee = await employees.update(employee)

        logger.info("Updated employee %s (%s)", employee.id, ", ".join(sorted(changes)) or "no fields")
        return Result.ok(EmployeeRead.from_model(employee), "Employee updated successfully.")

    async def _check_update(
        self, employees: EmployeeRepository, employee: Employee, changes: dict[str, Any]
    ) -> Result[EmployeeRead] | None:
        """Re-apply the creation rules to the record as it would look after the update."""

        salary = changes.get("salary")
        if salary is not None and salary < MINIMUM_SALARY:
            return Result.fail(SALARY_TOO_LOW)

        merged = {field: getattr(employee, field) for field in EmployeeCreate.model_fields}
        merged.update(changes)
        EmployeeCreate.model_validate(merged)

        email = changes.get("email")
        if email is not None and await employees.email_taken(email, exclude_id=employee.id):
            return Result.fail("Email already exists.")
        return None

    async def delete_employee_by_eid(self, eid: str) -> DeleteResponse:
        result = await capture("deleteEmployeeByEid", lambda: self._delete_employee_by_eid(eid))
        return result.to_envelope(DeleteResponse)

    async def _delete_employee_by_eid(self, eid: str) -> Result[None]:
        async with self.database.session() as session:
            deleted = await EmployeeRepository(session).delete(eid)
        if not deleted:
            return Result.fail(EMPLOYEE_NOT_FOUND)

        logger.info("Deleted employee %s", eid)
        return Result.ok(None, "Employee deleted successfully.")
