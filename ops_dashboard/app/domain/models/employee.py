from __future__ import annotations

from datetime import date
from enum import Enum
from typing import ClassVar

from pydantic import Field, field_validator

from ops_dashboard.app.domain.models.base import EntityForm, EntityRecord


class Arrangement(str, Enum):
    FULL_TIME = "full-time"
    PART_TIME = "part-time"
    CONTRACT = "contract"
    INTERNSHIP = "internship"


class EmployeeStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SUCCESS = "success"
    FAILED = "failed"


class Employee(EntityRecord):
    kind: ClassVar[str] = "employee"

    name: str | None = None
    number: str | None = None
    position: str | None = None
    arrangement: str | None = None
    status: str = EmployeeStatus.PENDING.value
    start_date: str | None = None

    @field_validator("status", mode="before")
    @classmethod
    def _default_status(cls, value: object) -> object:
        return value or EmployeeStatus.PENDING.value


class EmployeeForm(EntityForm):
    name: str = Field(min_length=1, max_length=255)
    number: str = Field(min_length=1, max_length=32)
    position: str = Field(min_length=1, max_length=255)
    arrangement: Arrangement
    start_date: date
    status: EmployeeStatus = EmployeeStatus.PENDING
