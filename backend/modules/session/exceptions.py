"""
Session module exceptions.
"""

from shared.exceptions import AuthorizationError


class InvalidTransitionError(AuthorizationError):
    """Raised when an operation is not allowed in the current session state."""

    def __init__(self, operation: str, reason: str):
        super().__init__(
            f"Cannot {operation}: {reason}",
            code="INVALID_TRANSITION",
            details={"operation": operation, "reason": reason},
        )
