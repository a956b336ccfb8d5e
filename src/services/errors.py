"""
Domain errors

Raised by services on requests that cannot be served; the API layer turns
them into JSON error responses (see api.middleware.error_handler). The
transition engine itself never raises.
"""

from typing import Optional


class DomainError(Exception):
    """Base class for domain-specific errors"""
    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict] = None,
        status_code: int = 400
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        self.status_code = status_code
        super().__init__(message)


class TransitionTargetNotFoundError(DomainError):
    """Named attribute, state, configuration or impulse doesn't exist"""
    def __init__(self, kind: str, name: str):
        super().__init__(
            code=f"{kind.upper()}_NOT_FOUND",
            message=f"{kind.capitalize()} '{name}' not found",
            details={"kind": kind, "name": name},
            status_code=404
        )
        self.kind = kind
        self.name = name


class InvalidActionError(DomainError):
    """MIDI pad action target can't be parsed"""
    def __init__(self, target: str):
        super().__init__(
            code="INVALID_ACTION",
            message=f"Action target '{target}' is not supported",
            details={
                "target": target,
                "valid_forms": ["configuration:<name>", "impulse:<name>", "state:<name>:<delta>", "reset"]
            },
            status_code=422
        )
