from enum import Enum
from typing import Optional

from code_corrector.domain.models import ErrorResponse


class StatusCategory(Enum):
    """Outcome categories of a correction request, with HTTP status and user message."""

    SUCCESS = ("success", 200, "")
    CONFIGURATION = (
        "configuration",
        500,
        "Groq API key not configured. Please add GROQ_API_KEY to your environment variables.",
    )
    INVALID_INPUT = ("invalid_input", 400, "Code is required")
    AUTH = (
        "auth",
        401,
        "Invalid Groq API key. Please check your GROQ_API_KEY in environment variables.",
    )
    RATE_LIMIT = (
        "rate_limit",
        429,
        "Groq API rate limit exceeded. Please try again in a moment.",
    )
    TIMEOUT = (
        "timeout",
        504,
        "Network timeout. Please check your connection and try again.",
    )
    MALFORMED_PROVIDER_RESPONSE = (
        "malformed_provider_response",
        500,
        "Groq returned an invalid response format. Please try again.",
    )
    UNKNOWN = (
        "unknown",
        500,
        "Failed to analyze code with Groq API. Please try again.",
    )

    def __init__(self, label: str, status_code: int, message: str):
        self.label = label
        self.status_code = status_code
        self.message = message


class CorrectionError(Exception):
    def __init__(
        self,
        category: StatusCategory,
        message: Optional[str] = None,
        details: Optional[str] = None,
    ):
        self.category = category
        self.message = message or category.message
        self.details = details
        super().__init__(self.message)

    def to_body(self) -> dict:
        response = ErrorResponse(error=self.message, details=self.details or None)
        return response.model_dump(exclude_none=True)


class ProviderError(CorrectionError):
    """Failure reported by (or while talking to) the completion provider."""

    def __init__(self, category: StatusCategory, details: str):
        super().__init__(category, details=details)
