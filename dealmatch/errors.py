"""
Exceptions raised by the matching engine.

Only integration mistakes are raised. Missing or messy record fields are
absorbed by the resolver and never show up here.
"""

from typing import List, Optional


class MatchingError(Exception):
    """Base class for all engine errors."""
    pass


class InvalidFilterConfiguration(MatchingError, ValueError):
    """Raised when a filter set names an unknown criterion or holds a non-bool."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("Invalid filter configuration: " + "; ".join(self.errors))


class UnknownRecordKind(MatchingError, ValueError):
    """Raised for a record-kind discriminator other than investor/incubator."""

    def __init__(self, kind: object, errors: Optional[List[str]] = None):
        self.kind = kind
        self.errors = list(errors or [])
        super().__init__(f"Unknown record kind: {kind!r}")


class InvalidWeightConfiguration(MatchingError, ValueError):
    """Raised when a weight table breaks the scoring constraints."""
    pass


class BatchCancelled(MatchingError):
    """Raised when a batch is cancelled between scoring tasks."""

    def __init__(self, completed: int, total: int):
        self.completed = completed
        self.total = total
        super().__init__(f"Batch cancelled after {completed}/{total} candidates")
