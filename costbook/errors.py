"""
Domain errors raised before any state change.

Routers translate these into HTTP responses; the core never catches them.
"""

from typing import List, Optional


class InputError(ValueError):
    """User input failed a presence/positivity check."""

    def __init__(self, message: str, fields: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.fields = list(fields or [])

    def to_detail(self) -> dict:
        return {"message": self.message, "fields": self.fields}


class ConfirmationRequired(Exception):
    """A destructive operation was requested without confirmation."""

    def __init__(self, prompt: str):
        super().__init__(prompt)
        self.prompt = prompt

    def to_detail(self) -> dict:
        return {"message": self.prompt}
