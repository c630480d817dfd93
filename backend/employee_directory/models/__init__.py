"""SQLAlchemy models exposed by the employee directory."""
from .base import Base, new_record_id, utcnow
from .employee import GENDERS, MINIMUM_SALARY, Employee
from .user import User

__all__ = ["Base", "Employee", "GENDERS", "MINIMUM_SALARY", "User", "new_record_id", "utcnow"]
