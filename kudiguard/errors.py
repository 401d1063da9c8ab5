"""Error taxonomy for the decision engine and the envelope returned to callers."""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from kudiguard.config import settings
from kudiguard.logger import get_logger

logger = get_logger("kudiguard.errors")

# Severity levels
LOW = "LOW"        # user error, invalid input
MEDIUM = "MEDIUM"  # recoverable upstream issue
HIGH = "HIGH"      # store failure, engine defect

SENSITIVE_KEYS = {"password", "email", "authHeader", "access_token", "refresh_token", "jwt", "api_key"}


class KudiGuardError(Exception):
    """Base error carrying everything needed to build the error envelope."""

    code = "UNHANDLED_EXCEPTION"
    severity = HIGH
    status_code = 500
    retryable = False

    def __init__(self, message: str, details: Optional[str] = None, *, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details or message
        if code:
            self.code = code


class InputValidationError(KudiGuardError):
    """Malformed request or an answer the user has to correct."""

    code = "INVALID_INPUT"
    severity = LOW
    status_code = 400

    def __init__(self, message: str, details: Optional[str] = None, field: Optional[str] = None):
        super().__init__(message, details)
        self.field = field


class UpstreamDataMissingError(KudiGuardError):
    """No financial snapshot or profile on file for the user."""

    code = "FINANCIAL_DATA_NOT_FOUND"
    severity = LOW
    status_code = 404


class InvariantViolationError(KudiGuardError):
    """Resolver reported completion but the evaluator could not use the inputs."""

    code = "MISSING_REQUIRED_FIELD"
    severity = HIGH
    status_code = 500

    # shown to the user instead of the internal details
    public_message = "Something went wrong while evaluating your decision. Please restart the conversation."


class PersistenceError(KudiGuardError):
    """The external store failed to fetch or save. Safe to resubmit."""

    code = "PERSISTENCE_FAILED"
    severity = HIGH
    status_code = 503
    retryable = True

    public_message = "We could not reach your saved data right now. Please try again."


def redact_sensitive_data(data: Any) -> Any:
    """Simple PII redaction for logging."""
    if isinstance(data, dict):
        return {
            key: "[REDACTED]" if key in SENSITIVE_KEYS and value else redact_sensitive_data(value)
            for key, value in data.items()
        }
    if isinstance(data, list):
        return [redact_sensitive_data(item) for item in data]
    return data


def response_meta(request_id: str) -> Dict[str, str]:
    return {
        "requestId": request_id,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": settings.API_VERSION,
    }


def handle_error(error: Exception, request_id: str, user_id: Optional[str] = None,
                 request_payload: Any = None) -> Dict[str, Any]:
    """Log ``error`` and turn it into the structured failure envelope."""
    if isinstance(error, KudiGuardError):
        known = error
    else:
        known = KudiGuardError(f"An unexpected error occurred: {error}")

    log = logger.error if known.severity == HIGH else logger.warning
    log(
        "[%s] %s (user=%s, code=%s): %s | payload=%s",
        request_id, type(error).__name__, user_id, known.code, known.details,
        redact_sensitive_data(request_payload),
        exc_info=known.severity == HIGH,
    )

    # Internal details never leave the engine for HIGH severity errors
    details = getattr(known, "public_message", None) or known.details
    if type(known) is KudiGuardError:
        details = "An unexpected error occurred. Please try again later."

    return {
        "success": False,
        "data": None,
        "error": {
            "code": known.code,
            "severity": known.severity,
            "details": details,
            "retryable": known.retryable,
        },
        "meta": response_meta(request_id),
    }
