from __future__ import annotations

from fastapi import status


class GatewayError(Exception):
    """Failure that maps onto a structured `{error, details?, errorId?}` response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "Internal server error"
    details: str | None = None

    def __init__(
        self,
        details: str | None = None,
        *,
        error_id: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        if details is not None:
            self.details = details
        self.error_id = error_id
        self.headers = headers or {}
        super().__init__(self.details or self.error)


class InvalidInput(GatewayError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "Invalid input"
    details = "Validation failed"


class InvalidContentType(GatewayError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "Invalid Content-Type. Expected application/json"


class OriginRejected(GatewayError):
    status_code = status.HTTP_403_FORBIDDEN
    error = "Forbidden: Invalid origin"


class MethodNotAllowed(GatewayError):
    status_code = status.HTTP_405_METHOD_NOT_ALLOWED
    error = "Method not allowed"


class GatewayTimeout(GatewayError):
    status_code = status.HTTP_408_REQUEST_TIMEOUT
    error = "Request timeout"


class UploadTooLarge(GatewayError):
    status_code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    error = "File too large"


class UnsupportedUpload(GatewayError):
    status_code = status.HTTP_415_UNSUPPORTED_MEDIA_TYPE
    error = "Unsupported file type"


class RateLimited(GatewayError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    error = "Too many requests"


class ServiceUnavailable(GatewayError):
    error = "Service temporarily unavailable"


class UpstreamError(GatewayError):
    error = "External service error"
    details = "The analysis service is temporarily unavailable"


class AnalysisFailed(GatewayError):
    error = "Analysis failed"
    details = "Unable to process the text analysis"


class AnalysisParseError(GatewayError):
    error = "Analysis processing failed"
    details = "Unable to parse the analysis results"


class InternalGatewayError(GatewayError):
    details = "An unexpected error occurred while processing your request"


class ClientDisconnected(GatewayError):
    status_code = 499
    error = "Client disconnected"
