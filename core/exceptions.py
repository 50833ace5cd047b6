"""
Domain errors raised by the order services.

Services raise these; main.py maps them to HTTP responses.
"""


class OrderServiceError(Exception):
    """Base class for every error the order services raise on purpose."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(OrderServiceError):
    """
    Input failed one or more business rules.

    Carries every violation, not just the first one, so the caller
    can fix the whole request in one round trip.
    """

    def __init__(self, errors: list[dict]):
        self.errors = errors
        summary = " | ".join(f"{e['field']}: {e['message']}" for e in errors)
        super().__init__(f"Validation failed: {summary}")


class DuplicateKeyError(OrderServiceError):
    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Order code already exists: {code}")


class AllocationExhaustedError(OrderServiceError):
    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"Could not allocate a unique order code after {attempts} attempts")


class NotFoundError(OrderServiceError):
    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Order not found: {code}")


class InvalidStatusError(OrderServiceError):
    def __init__(self, status: str, allowed: list[str]):
        self.status = status
        self.allowed = allowed
        super().__init__(f"Invalid status: {status}. Allowed: {', '.join(allowed)}")
