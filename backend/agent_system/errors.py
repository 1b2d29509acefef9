from typing import Any, Optional

class RemoteAPIError(Exception):
    """GitHub answered with a non-success status, or the call never completed."""

    def __init__(self, message: str, status_code: Optional[int] = None, payload: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"{self.message} (status={self.status_code})"

class ValidationError(Exception):
    def __init__(self, field: str):
        super().__init__(f"Missing required field: {field}")
        self.field = field
