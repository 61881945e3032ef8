from typing import List, Optional


class RahatError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500
    detail = "Internal error"

    def __init__(self, detail: Optional[str] = None):
        if detail:
            self.detail = detail
        super().__init__(self.detail)


class ReportValidationError(RahatError):
    """Submitted form data is missing fields or fails a field rule."""

    status_code = 400
    detail = "Invalid report submission"

    def __init__(self, errors: List[dict], detail: Optional[str] = None):
        self.errors = errors
        super().__init__(detail)


class PermissionDenied(RahatError):
    status_code = 403
    detail = "Your role cannot perform this action"


class RecordNotFound(RahatError):
    status_code = 404
    detail = "Report not found"


class InvalidReportKind(RahatError):
    status_code = 404
    detail = "Unknown report kind"


class AlreadyTerminal(RahatError):
    status_code = 409
    detail = "Report has already been closed"


class StoreUnavailable(RahatError):
    status_code = 503
    detail = "Report store is unavailable, please try again"


class AuthUnavailable(RahatError):
    status_code = 503
    detail = "Identity service is unavailable, please try again"
