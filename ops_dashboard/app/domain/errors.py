from __future__ import annotations

from dataclasses import dataclass


class DashboardError(Exception):
    """Base class for failures surfaced by the table engine and its use cases."""


@dataclass(frozen=True)
class ValidationIssue:
    field: str
    reason: str


class ValidationError(DashboardError):
    def __init__(self, issues: list[ValidationIssue]) -> None:
        self.issues = issues
        super().__init__(self._format_message())

    @property
    def field_errors(self) -> dict[str, str]:
        return {issue.field: issue.reason for issue in self.issues}

    def _format_message(self) -> str:
        if not self.issues:
            return "Validation failed"
        issue = self.issues[0]
        return f"{issue.field}: {issue.reason}"


class PersistenceError(DashboardError):
    def __init__(self, message: str, *, code: str = "PERSISTENCE_ERROR", trace_id: str | None = None) -> None:
        self.message = message
        self.code = code
        self.trace_id = trace_id
        super().__init__(message)


class NotFoundError(DashboardError):
    def __init__(self, row_id: str) -> None:
        self.row_id = row_id
        super().__init__(f"Row {row_id} is no longer present")
