# app/errors.py
from typing import Any, Dict, Optional

# Raised by route logic and dependencies; translated into the JSON error
# envelope by the exception handlers registered in app.main.

DEFAULT_ERROR_MESSAGE = "Something went wrong on the server"


class ApiError(Exception):
    status_code: int = 500
    message: str = DEFAULT_ERROR_MESSAGE

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.message
        super().__init__(self.message)


class BadRequest(ApiError):
    status_code = 400
    message = "Bad request"


class ValidationError(BadRequest):
    message = "Invalid product payload"


class Unauthorized(ApiError):
    status_code = 401
    message = "Unauthorized: Invalid API key"


class NotFound(ApiError):
    status_code = 404
    message = "Product not found"


def error_envelope(status: int, message: str) -> Dict[str, Any]:
    return {"error": {"status": status, "message": message or DEFAULT_ERROR_MESSAGE}}
