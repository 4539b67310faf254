from __future__ import annotations

from typing import Any


class PortfolioAPIError(RuntimeError):
    status_code = 500

    def __init__(self, message: str, *, status_code: int | None = None, details: Any = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details

    def to_body(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(PortfolioAPIError):
    """Malformed or missing request field."""

    status_code = 400


class InvalidActionError(PortfolioAPIError):
    """Unrecognised tool action."""

    status_code = 400


class UpstreamError(PortfolioAPIError):
    """A chat provider or the data store reported a failure."""

    status_code = 500


class TableNotFoundError(UpstreamError):
    status_code = 404


class UnexpectedError(PortfolioAPIError):
    status_code = 500

    def __init__(self, message: str = "Internal server error", **kwargs: Any):
        super().__init__(message, **kwargs)
