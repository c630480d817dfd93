"""Per-collection data access over an AsyncSession.

Resolvers never build SQL themselves; they go through one repository per
collection. Each write commits immediately, so a repository call is the unit
of atomicity and nothing spans two calls.
"""
from __future__ import annotations

import logging
import uuid
from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import delete, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .exceptions import ConstraintViolation, InvalidIdentifier
from .models import Base, Employee, User

logger = logging.getLogger("employee_directory.repositories")

ModelT = TypeVar("ModelT", bound=Base)


def parse_record_id(value: Any) -> str:
    """Normalise a client-supplied id, raising InvalidIdentifier if malformed."""

    try:
        return uuid.UUID(str(value)).hex
    except ValueError:
        raise InvalidIdentifier(value) from None


class Repository(Generic[ModelT]):
    """find-one / find-by-id / find-many / insert / update / delete for one model."""

    model: type[ModelT]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_one(self, *criteria: Any) -> ModelT | None:
        result = await self.session.execute(select(self.model).where(*criteria).limit(1))
        return result.scalar_one_or_none()

    async def find_by_id(self, record_id: Any) -> ModelT | None:
        return await self.session.get(self.model, parse_record_id(record_id))

    async def find_many(self, **filters: Any) -> Sequence[ModelT]:
        """Return every record whose columns equal the given values."""

        statement = select(self.model).filter_by(**filters).order_by(self.model.created_at)
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def insert(self, record: ModelT) -> ModelT:
        self.session.add(record)
        await self._commit()
        await self.session.refresh(record)
        return record

    async def update(self, record: ModelT) -> ModelT:
        """Persist pending changes on a record loaded from this session."""

        await self._commit()
        await self.session.refresh(record)
        return record

    async def delete(self, record_id: Any) -> bool:
        """Remove a record permanently; False when nothing matched."""

        result = await self.session.execute(
            delete(self.model).where(self.model.id == parse_record_id(record_id))
        )
        await self._commit()
        return result.rowcount > 0

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            logger.warning("%s write rejected: %s", self.model.__tablename__, exc.orig)
            raise ConstraintViolation(str(exc.orig)) from exc


class UserRepository(Repository[User]):
    model = User

    async def find_by_login(self, identifier: str) -> User | None:
        """Find the user whose username or email equals `identifier`."""

        return await self.find_one(or_(User.username == identifier, User.email == identifier))

    async def find_conflicting(self, username: str, email: str) -> User | None:
        return await self.find_one(or_(User.username == username, User.email == email))


class EmployeeRepository(Repository[Employee]):
    model = Employee

    async def email_taken(self, email: str, exclude_id: str | None = None) -> bool:
        criteria = [Employee.email == email]
        if exclude_id is not None:
            criteria.append(Employee.id != exclude_id)
        return await self.find_one(*criteria) is not None
