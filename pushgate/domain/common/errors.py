"""Domain error types."""
from typing import Optional


class DomainError(Exception):
    """Base domain error."""
    pass


class ValidationError(DomainError):
    """Request failed minimal validation before reaching the vendor."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class SendError(DomainError):
    """Vendor send call failed. Carries the vendor error string verbatim."""
    def __init__(self, detail: str, token: Optional[str] = None):
        self.detail = detail
        self.token = token
        super().__init__(detail)


class CredentialsError(DomainError):
    """Vendor client could not be initialised from the service account."""
    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        self.message = f"Cannot load service account {path}: {reason}"
        super().__init__(self.message)
