from __future__ import annotations

from datetime import date
from enum import Enum
from typing import ClassVar

from pydantic import Field

from ops_dashboard.app.domain.models.base import EntityForm, EntityRecord


class StudentStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class SetaType(str, Enum):
    FPM_SETA = "fpm-seta"
    WR_SETA = "wr-seta"


class Student(EntityRecord):
    kind: ClassVar[str] = "student"

    name: str | None = Field(default=None, alias="student_name")
    number: str | None = Field(default=None, alias="student_number")
    position: str | None = None
    arrangement: str | None = None
    status: str = StudentStatus.ACTIVE.value
    start_date: str | None = None
    seta_type: str | None = None


class StudentForm(EntityForm):
    name: str = Field(min_length=1, max_length=255, alias="student_name")
    number: str = Field(min_length=1, max_length=32, alias="student_number")
    position: str | None = None
    arrangement: str | None = None
    status: StudentStatus = StudentStatus.ACTIVE
    start_date: date
    seta_type: SetaType
