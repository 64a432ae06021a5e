# errors.py
from typing import Any, Dict


class InvalidInput(Exception):
    """
    Raised when a request names an origin, destination or material that is
    missing or cannot be resolved against the reference tables.

    Extra keyword arguments are carried as structured details and merged
    into the error body returned to API clients, e.g.:

        {"error": "Invalid cities", "received": {...}, "available": [...]}
    """

    def __init__(self, message: str, **details: Any):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.message}
        body.update(self.details)
        return body
