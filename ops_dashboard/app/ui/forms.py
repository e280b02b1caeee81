from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, TypeVar

from pydantic import ValidationError as PydanticValidationError

from ops_dashboard.app.domain.errors import ValidationError, ValidationIssue
from ops_dashboard.app.domain.models.base import EntityForm

FormT = TypeVar("FormT", bound=EntityForm)


class FormStatus(str, Enum):
    IDLE = "idle"
    DIRTY = "dirty"
    VALID = "valid"


@dataclass
class FormResult:
    values: dict[str, Any]
    field_errors: dict[str, str]

    @property
    def first_invalid_field(self) -> str | None:
        return next(iter(self.field_errors), None)

    @property
    def is_valid(self) -> bool:
        return len(self.field_errors) == 0


@dataclass
class FormState:
    status: FormStatus = FormStatus.IDLE
    submit_enabled: bool = False
    submit_disabled_reason: str = "Fill in the required fields."


def _issues_from(error: PydanticValidationError) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    for item in error.errors():
        location = item.get("loc") or ()
        field = str(location[-1]) if location else "form"
        issues.append(ValidationIssue(field=field, reason=str(item.get("msg") or "invalid value")))
    return issues


def parse_form(form_cls: type[FormT], fields: Mapping[str, Any]) -> FormT:
    """Validate raw form input, raising the domain ValidationError on bad fields."""
    try:
        return form_cls.model_validate(dict(fields))
    except PydanticValidationError as error:
        raise ValidationError(_issues_from(error)) from error


def validate_form(form_cls: type[EntityForm], fields: Mapping[str, Any]) -> FormResult:
    try:
        form = parse_form(form_cls, fields)
    except ValidationError as error:
        return FormResult(values=dict(fields), field_errors=error.field_errors)
    return FormResult(values=form.to_record(), field_errors={})


def build_form_state(result: FormResult) -> FormState:
    if result.is_valid:
        return FormState(status=FormStatus.VALID, submit_enabled=True, submit_disabled_reason="")

    first_invalid_field = result.first_invalid_field or "form"
    return FormState(
        status=FormStatus.DIRTY,
        submit_enabled=False,
        submit_disabled_reason=f"Fix '{first_invalid_field}' before submitting.",
    )

