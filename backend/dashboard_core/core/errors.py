"""
Error message constants and utilities for user-friendly error handling.
"""
from typing import Dict, Optional

# Error codes
class ErrorCodes:
    INVALID_DATA_FORMAT = "INVALID_DATA_FORMAT"
    TOO_MANY_ROWS = "TOO_MANY_ROWS"
    SUGGESTION_FAILED = "SUGGESTION_FAILED"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
    TIMEOUT = "TIMEOUT"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"

# User-friendly error messages
ERROR_MESSAGES: Dict[str, Dict[str, str]] = {
    ErrorCodes.INVALID_DATA_FORMAT: {
        "message": "Invalid data format",
        "detail": "The request body must contain a 'data' field holding a list of rows.",
        "suggestion": "Send rows as a JSON array of objects, e.g. {\"data\": [{\"region\": \"North\", \"total\": 10}]}."
    },
    ErrorCodes.TOO_MANY_ROWS: {
        "message": "Too many rows",
        "detail": "The dataset is larger than this service accepts in a single request.",
        "suggestion": "Aggregate the data before sending it, or send a sample of the rows."
    },
    ErrorCodes.SUGGESTION_FAILED: {
        "message": "Failed to generate suggestions",
        "detail": "Something went wrong while analyzing the dataset.",
        "suggestion": "Check that every row is a flat object of text, number or boolean values and try again."
    },
    ErrorCodes.RATE_LIMIT_EXCEEDED: {
        "message": "Too many requests",
        "detail": "You are sending requests faster than the service allows.",
        "suggestion": "Wait a minute and try again."
    },
    ErrorCodes.TIMEOUT: {
        "message": "This is taking longer than expected",
        "detail": "The dataset took too long to analyze.",
        "suggestion": "Try again with fewer rows or pre-aggregated data."
    },
    ErrorCodes.UNKNOWN_ERROR: {
        "message": "Hmm, something unexpected happened",
        "detail": "We encountered an issue we weren't expecting.",
        "suggestion": "Give it another try in a moment."
    }
}

def get_error_response(error_code: str, additional_detail: Optional[str] = None) -> Dict[str, str]:
    """
    Get user-friendly error response for an error code.

    Args:
        error_code: One of the ErrorCodes constants
        additional_detail: Optional additional detail to append

    Returns:
        Dictionary with code, message, detail, and suggestion
    """
    error_info = ERROR_MESSAGES.get(error_code, ERROR_MESSAGES[ErrorCodes.UNKNOWN_ERROR])

    response = {
        "code": error_code,
        "message": error_info["message"],
        "detail": error_info["detail"],
        "suggestion": error_info["suggestion"]
    }

    if additional_detail:
        response["detail"] = f"{response['detail']} {additional_detail}"

    return response


def error_body(error_code: str, correlation_id: str, additional_detail: Optional[str] = None) -> Dict[str, object]:
    """Failure envelope returned by the suggestion endpoints."""
    error_info = get_error_response(error_code, additional_detail)
    error_info["correlation_id"] = correlation_id
    return {"success": False, "error": error_info}
