from __future__ import annotations


class ReviewError(ValueError):
    """Base class for caller-correctable review validation errors."""


class InvalidMediaType(ReviewError):
    """Media type is not one of movie, show or game."""


class MissingField(ReviewError):
    """A required review field is absent or blank."""

    def __init__(self, field: str, message: str | None = None):
        self.field = field
        super().__init__(message or f"{field} is required")


class InvalidRating(ReviewError):
    """Rating value cannot be normalized on the given scale."""


class InvalidReviewUrl(ReviewError):
    """Review URL is empty or cannot be parsed."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid review URL: {reason}")


class CatalogError(RuntimeError):
    """Catalog search or lookup failed."""
