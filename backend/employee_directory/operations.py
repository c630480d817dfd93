"""Table of operations reachable through the API endpoint."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Mapping

from .exceptions import UnknownOperation
from .resolvers import Resolvers
from .schemas import (
    Arguments,
    EidArgs,
    EmployeeInput,
    EmployeeSearchArgs,
    LoginArgs,
    NoArgs,
    SignupArgs,
    UpdateEmployeeArgs,
)


@dataclass(frozen=True)
class Operation:
    name: str
    arguments: type[Arguments]
    handler: Callable[[Resolvers, Any], Awaitable[Any]]


OPERATIONS: dict[str, Operation] = {
    op.name: op
    for op in (
        Operation(
            "signup",
            SignupArgs,
            lambda r, a: r.signup(a.username, a.email, a.password),
        ),
        Operation(
            "login",
            LoginArgs,
            lambda r, a: r.login(a.username_or_email, a.password),
        ),
        Operation(
            "getAllEmployees",
            NoArgs,
            lambda r, a: r.get_all_employees(),
        ),
        Operation(
            "searchEmployeeByEid",
            EidArgs,
            lambda r, a: r.search_employee_by_eid(a.eid),
        ),
        Operation(
            "searchEmployeeByDesignationOrDepartment",
            EmployeeSearchArgs,
            lambda r, a: r.search_employee_by_designation_or_department(a.designation, a.department),
        ),
        Operation(
            "addNewEmployee",
            EmployeeInput,
            lambda r, a: r.add_new_employee(**a.model_dump()),
        ),
        Operation(
            "updateEmployeeByEid",
            UpdateEmployeeArgs,
            lambda r, a: r.update_employee_by_eid(a.eid, a.input),
        ),
        Operation(
            "deleteEmployeeByEid",
            EidArgs,
            lambda r, a: r.delete_employee_by_eid(a.eid),
        ),
    )
}


async def execute(resolvers: Resolvers, name: str, variables: Mapping[str, Any] | None = None) -> Any:
    """Check the arguments of operation `name` and run it.

    Raises UnknownOperation, pydantic.ValidationError for bad arguments, or
    whatever the operation itself raises.
    """

    operation = OPERATIONS.get(name)
    if operation is None:
        raise UnknownOperation(name)
    arguments = operation.arguments.model_validate(dict(variables or {}))
    return await operation.handler(resolvers, arguments)
