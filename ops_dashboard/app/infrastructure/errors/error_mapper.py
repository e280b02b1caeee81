from ops_backend_sdk.exceptions import ApiError

from ops_dashboard.app.domain.errors import NotFoundError, PersistenceError, ValidationError


class ErrorMapper:
    _KNOWN_CODES = {
        "SESSION_MISSING": ("You are not signed in.", "Sign in again to continue."),
        "SESSION_INVALID": ("Your session is no longer valid.", "Sign in again to continue."),
        "ROLE_NOT_ALLOWED": ("Your role cannot open this page.", "Ask an administrator for access."),
        "RECORD_NOT_FOUND": ("The record no longer exists.", "Reload the list to see the current data."),
        "ROW_NOT_FOUND": ("The row is no longer present.", "Reload the list to see the current data."),
        "VALIDATION_ERROR": ("Some fields are invalid.", "Check the required fields and their format."),
        "TRANSPORT_ERROR": ("The backend could not be reached.", "Check your network connection and try again."),
    }

    _STATUS_HINTS = {
        401: ("SESSION_INVALID", "Your session is no longer valid.", "Sign in again to continue."),
        403: ("PERMISSION_DENIED", "Permission denied for this operation.", "Ask an administrator for access."),
        409: ("CONFLICT", "The record conflicts with existing data.", "Check for duplicates and try again."),
        422: ("VALIDATION_ERROR", "The backend rejected the submitted fields.", "Review the fields and their format."),
        429: ("RATE_LIMITED", "Too many requests.", "Wait a moment before retrying."),
        500: ("INTERNAL_ERROR", "The backend failed to process the request.", "Retry and share the trace_id if it persists."),
    }

    @classmethod
    def to_payload(cls, error: Exception) -> dict:
        if isinstance(error, ApiError):
            status_code = error.status_code or -1
            mapped = cls._STATUS_HINTS.get(status_code)
            if mapped is None and status_code >= 500:
                mapped = cls._STATUS_HINTS[500]
            if mapped is not None:
                code, message, suggestion = mapped
            else:
                message, suggestion = cls._KNOWN_CODES.get(
                    error.code,
                    (error.message, "Contact support with the trace_id."),
                )
                code = error.code
            return {
                "code": code,
                "message": message,
                "details": error.details,
                "trace_id": error.trace_id,
                "suggestion": suggestion,
            }
        if isinstance(error, ValidationError):
            _, suggestion = cls._KNOWN_CODES["VALIDATION_ERROR"]
            return {
                "code": "VALIDATION_ERROR",
                "message": str(error),
                "details": error.field_errors,
                "trace_id": None,
                "suggestion": suggestion,
            }
        if isinstance(error, NotFoundError):
            message, suggestion = cls._KNOWN_CODES["ROW_NOT_FOUND"]
            return {
                "code": "ROW_NOT_FOUND",
                "message": message,
                "details": {"id": error.row_id},
                "trace_id": None,
                "suggestion": suggestion,
            }
        if isinstance(error, PersistenceError):
            _, suggestion = cls._KNOWN_CODES.get(error.code, (None, "Retry and share the trace_id if it persists."))
            return {
                "code": error.code,
                "message": error.message,
                "details": None,
                "trace_id": error.trace_id,
                "suggestion": suggestion,
            }
        return {
            "code": "INTERNAL_ERROR",
            "message": str(error),
            "details": None,
            "trace_id": None,
            "suggestion": "Retry and report the incident if it persists.",
        }

    @classmethod
    def to_persistence_error(cls, error: ApiError) -> PersistenceError:
        payload = cls.to_payload(error)
        return PersistenceError(payload["message"], code=payload["code"], trace_id=error.trace_id)

    @classmethod
    def to_display_message(cls, error: Exception) -> str:
        payload = cls.to_payload(error)
        if payload["trace_id"]:
            return f"[{payload['code']}] {payload['message']} (trace_id={payload['trace_id']})"
        return f"[{payload['code']}] {payload['message']}"
