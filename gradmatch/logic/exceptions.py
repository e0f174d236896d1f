"""
Typed failures raised by the scoring engine and its catalog collaborators.

None of these are retried inside the engine; callers decide how to surface them.
"""

from typing import Dict, Optional


class GradMatchError(Exception):
    """Base class for all engine failures."""


class ValidationError(GradMatchError):
    """Raw input outside its documented domain, or a missing required preference."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        message = "; ".join(f"{field}: {msg}" for field, msg in self.errors.items())
        super().__init__(message or "Invalid input")

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationError":
        return cls({field: message})


class EmptyResultError(GradMatchError):
    """Catalog query or filter yielded zero institutions."""

    def __init__(self, message: str = "No universities found matching your criteria."):
        super().__init__(message)


class UpstreamUnavailableError(GradMatchError):
    """Remote catalog unreachable or returned no usable records."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)
