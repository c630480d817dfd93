"""Employee queries and mutations."""
from datetime import date, datetime

import pytest

from employee_directory.exceptions import OperationError
from employee_directory.resolvers import Resolvers


def parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


async def add(resolvers, payload, **overrides):
    response = await resolvers.add_new_employee(**{**payload, **overrides})
    assert response.success is True, response.message
    return response.employee


# -- add -----------------------------------------------------------------------


@pytest.mark.asyncio
async def test_add_rejects_salary_below_minimum(resolvers, employee_payload) -> None:
    response = await resolvers.add_new_employee(**{**employee_payload, "salary": 999})

    assert response.success is False
    assert response.employee is None
    assert response.message == "Salary must be at least 1000."
    assert await resolvers.get_all_employees() == []


@pytest.mark.asyncio
async def test_add_accepts_minimum_salary(resolvers, employee_payload) -> None:
    response = await resolvers.add_new_employee(**{**employee_payload, "salary": 1000})

    assert response.success is True
    assert response.message == "Employee added successfully."
    assert response.employee.salary == 1000
    assert response.employee.created_at == response.employee.updated_at


@pytest.mark.asyncio
async def test_added_fields_read_back_identically(resolvers, employee_payload) -> None:
    payload = {**employee_payload, "email": "Ada.Lovelace@Example.COM"}
    created = await add(resolvers, payload)

    found = await resolvers.search_employee_by_eid(created.id)

    assert found is not None
    for field, value in payload.items():
        assert getattr(found, field) == value, field


@pytest.mark.asyncio
async def test_add_accepts_email_without_domain_dot(resolvers, employee_payload) -> None:
    employee = await add(resolvers, employee_payload, email="ada@localhost")

    assert employee.email == "ada@localhost"


@pytest.mark.asyncio
async def test_add_parses_timestamp_form_of_joining_date(resolvers, employee_payload) -> None:
    employee = await add(resolvers, employee_payload, date_of_joining="2024-01-15T00:00:00Z")

    assert employee.date_of_joining == "2024-01-15"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides, fragment",
    [
        ({"gender": "Unknown"}, "gender"),
        ({"first_name": ""}, "first_name"),
        ({"email": ""}, "email"),
        ({"date_of_joining": "someday"}, "Invalid date_of_joining"),
    ],
)
async def test_add_reports_validation_failures(resolvers, employee_payload, overrides, fragment) -> None:
    response = await resolvers.add_new_employee(**{**employee_payload, **overrides})

    assert response.success is False
    assert fragment in response.message
    assert await resolvers.get_all_employees() == []


@pytest.mark.asyncio
async def test_add_reports_missing_required_field(resolvers, employee_payload) -> None:
    payload = dict(employee_payload)
    del payload["department"]

    response = await resolvers.add_new_employee(**payload)

    assert response.success is False
    assert "department" in response.message


@pytest.mark.asyncio
async def test_add_rejects_duplicate_email(resolvers, employee_payload) -> None:
    await add(resolvers, employee_payload)

    response = await resolvers.add_new_employee(**{**employee_payload, "first_name": "Other"})

    assert response.success is False
    assert "UNIQUE constraint failed" in response.message
    assert len(await resolvers.get_all_employees()) == 1


@pytest.mark.asyncio
async def test_add_allows_missing_optional_fields(resolvers, employee_payload) -> None:
    payload = dict(employee_payload)
    del payload["gender"]
    del payload["employee_photo"]

    employee = await add(resolvers, payload)

    assert employee.gender is None
    assert employee.employee_photo is None


# -- queries -------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.parametrize("count", [0, 1, 3])
async def test_get_all_employees_renders_iso_dates(resolvers, employee_payload, count) -> None:
    for index in range(count):
        await add(resolvers, employee_payload, email=f"person{index}@example.com")

    employees = await resolvers.get_all_employees()

    assert len(employees) == count
    for employee in employees:
        assert date.fromisoformat(employee.date_of_joining) == date(2024, 1, 15)
        parse_timestamp(employee.created_at)
        parse_timestamp(employee.updated_at)
        assert employee.created_at.endswith("Z")


@pytest.mark.asyncio
async def test_search_by_eid_returns_none_when_missing(resolvers) -> None:
    assert await resolvers.search_employee_by_eid("0" * 32) is None


@pytest.mark.asyncio
async def test_search_by_eid_raises_for_malformed_id(resolvers) -> None:
    with pytest.raises(OperationError, match="Cast to id failed"):
        await resolvers.search_employee_by_eid("not-an-id")


@pytest.mark.asyncio
async def test_search_requires_a_filter(resolvers) -> None:
    with pytest.raises(OperationError, match="Please provide either designation or department"):
        await resolvers.search_employee_by_designation_or_department()

    with pytest.raises(OperationError):
        await resolvers.search_employee_by_designation_or_department("", "")


@pytest.mark.asyncio
async def test_search_by_designation_and_department(resolvers, employee_payload) -> None:
    await add(resolvers, employee_payload, email="a@example.com", designation="Engineer", department="R&D")
    await add(resolvers, employee_payload, email="b@example.com", designation="Engineer", department="Sales")
    await add(resolvers, employee_payload, email="c@example.com", designation="Manager", department="Sales")

    engineers = await resolvers.search_employee_by_designation_or_department(designation="Engineer")
    sales = await resolvers.search_employee_by_designation_or_department(department="Sales")
    both = await resolvers.search_employee_by_designation_or_department("Engineer", "Sales")

    assert sorted(e.email for e in engineers) == ["a@example.com", "b@example.com"]
    assert sorted(e.email for e in sales) == ["b@example.com", "c@example.com"]
    assert [e.email for e in both] == ["b@example.com"]


# -- update --------------------------------------------------------------------


@pytest.mark.asyncio
async def test_update_unknown_employee(resolvers, employee_payload) -> None:
    existing = await add(resolvers, employee_payload)

    response = await resolvers.update_employee_by_eid("f" * 32, {"department": "Sales"})

    assert response.success is False
    assert response.message == "Employee not found."
    assert (await resolvers.search_employee_by_eid(existing.id)) == existing


@pytest.mark.asyncio
async def test_update_unknown_employee_reports_not_found_before_input_errors(resolvers) -> None:
    response = await resolvers.update_employee_by_eid("f" * 32, {"nickname": "Ada"})

    assert response.success is False
    assert response.message == "Employee not found."


@pytest.mark.asyncio
async def test_update_changes_only_supplied_field(resolvers, employee_payload, monkeypatch) -> None:
    before = await add(resolvers, employee_payload)
    monkeypatch.setattr("employee_directory.resolvers.utcnow", lambda: datetime(2030, 1, 1, 12, 0))

    response = await resolvers.update_employee_by_eid(before.id, {"department": "Sales"})

    assert response.success is True
    assert response.message == "Employee updated successfully."
    after = response.employee.model_dump()
    expected = before.model_dump()
    expected["department"] = "Sales"
    expected["updated_at"] = "2030-01-01T12:00:00.000Z"
    assert after == expected
    assert (await resolvers.search_employee_by_eid(before.id)).model_dump() == expected


@pytest.mark.asyncio
async def test_update_reparses_joining_date(resolvers, employee_payload) -> None:
    employee = await add(resolvers, employee_payload)

    response = await resolvers.update_employee_by_eid(employee.id, {"date_of_joining": "2025-03-01"})

    assert response.success is True
    assert response.employee.date_of_joining == "2025-03-01"


@pytest.mark.asyncio
async def test_update_stores_email_as_given(resolvers, employee_payload) -> None:
    employee = await add(resolvers, employee_payload)

    response = await resolvers.update_employee_by_eid(employee.id, {"email": "Ada.L@Example.COM"})

    assert response.success is True
    assert (await resolvers.search_employee_by_eid(employee.id)).email == "Ada.L@Example.COM"


@pytest.mark.asyncio
async def test_update_can_clear_optional_field(resolvers, employee_payload) -> None:
    employee = await add(resolvers, employee_payload)

    response = await resolvers.update_employee_by_eid(employee.id, {"employee_photo": None})

    assert response.success is True
    assert response.employee.employee_photo is None
    assert response.employee.gender == "Female"


@pytest.mark.asyncio
async def test_update_rejects_unknown_fields(resolvers, employee_payload) -> None:
    employee = await add(resolvers, employee_payload)

    response = await resolvers.update_employee_by_eid(employee.id, {"id": "x", "salary": 6000})

    assert response.success is False
    assert "id" in response.message
    assert (await resolvers.search_employee_by_eid(employee.id)).salary == 5000


@pytest.mark.asyncio
async def test_update_with_malformed_id_returns_envelope(resolvers) -> None:
    response = await resolvers.update_employee_by_eid("???", {"department": "Sales"})

    assert response.success is False
    assert "Cast to id failed" in response.message


@pytest.mark.asyncio
async def test_update_revalidates_salary(resolvers, employee_payload) -> None:
    employee = await add(resolvers, employee_payload)

    response = await resolvers.update_employee_by_eid(employee.id, {"salary": 999})

    assert response.success is False
    assert response.message == "Salary must be at least 1000."
    assert (await resolvers.search_employee_by_eid(employee.id)).salary == 5000


@pytest.mark.asyncio
async def test_update_revalidates_gender(resolvers, employee_payload) -> None:
    employee = await add(resolvers, employee_payload)

    response = await resolvers.update_employee_by_eid(employee.id, {"gender": "Robot"})

    assert response.success is False
    assert "gender" in response.message


@pytest.mark.asyncio
async def test_update_revalidates_email_uniqueness(resolvers, employee_payload) -> None:
    first = await add(resolvers, employee_payload, email="first@example.com")
    second = await add(resolvers, employee_payload, email="second@example.com")

    response = await resolvers.update_employee_by_eid(second.id, {"email": "first@example.com"})
    unchanged = await resolvers.update_employee_by_eid(first.id, {"email": "first@example.com"})

    assert response.success is False
    assert response.message == "Email already exists."
    assert unchanged.success is True
    assert (await resolvers.search_employee_by_eid(second.id)).email == "second@example.com"


@pytest.fixture
def unchecked_resolvers(database, settings):
    return Resolvers(database, settings.model_copy(update={"validate_partial_updates": False}))


@pytest.mark.asyncio
async def test_store_rejects_low_salary_when_update_checks_are_off(
    unchecked_resolvers, employee_payload
) -> None:
    employee = await add(unchecked_resolvers, employee_payload)

    response = await unchecked_resolvers.update_employee_by_eid(employee.id, {"salary": 999})

    assert response.success is False
    assert "CHECK constraint failed" in response.message
    assert (await unchecked_resolvers.search_employee_by_eid(employee.id)).salary == 5000


@pytest.mark.asyncio
async def test_store_rejects_duplicate_email_when_update_checks_are_off(
    unchecked_resolvers, employee_payload
) -> None:
    await add(unchecked_resolvers, employee_payload, email="first@example.com")
    second = await add(unchecked_resolvers, employee_payload, email="second@example.com")

    response = await unchecked_resolvers.update_employee_by_eid(second.id, {"email": "first@example.com"})

    assert response.success is False
    assert "UNIQUE constraint failed" in response.message
    assert (await unchecked_resolvers.search_employee_by_eid(second.id)).email == "second@example.com"


@pytest.mark.asyncio
async def test_store_rejects_unknown_gender_when_update_checks_are_off(
    unchecked_resolvers, employee_payload
) -> None:
    employee = await add(unchecked_resolvers, employee_payload)

    response = await unchecked_resolvers.update_employee_by_eid(employee.id, {"gender": "Robot"})

    assert response.success is False
    assert "CHECK constraint failed" in response.message


# -- delete --------------------------------------------------------------------


@pytest.mark.asyncio
async def test_delete_twice(resolvers, employee_payload) -> None:
    employee = await add(resolvers, employee_payload)

    first = await resolvers.delete_employee_by_eid(employee.id)
    second = await resolvers.delete_employee_by_eid(employee.id)

    assert first.success is True
    assert first.message == "Employee deleted successfully."
    assert second.success is False
    assert second.message == "Employee not found."
    assert await resolvers.search_employee_by_eid(employee.id) is None


@pytest.mark.asyncio
async def test_delete_with_malformed_id_returns_envelope(resolvers) -> None:
    response = await resolvers.delete_employee_by_eid("nope")

    assert response.success is False
    assert "Cast to id failed" in response.message
