from fabricpop.core.builder import ReviewBuilder, build_review
from fabricpop.core.errors import (
    CatalogError,
    InvalidMediaType,
    InvalidRating,
    InvalidReviewUrl,
    MissingField,
    ReviewError,
)
from fabricpop.core.models import MediaType, Platform, RatingScale, Review, ReviewFields
from fabricpop.transform.normalizers import describe_scale, letter_grades, normalize
from fabricpop.transform.validators import classify_review_url
from fabricpop.transform.views import review_digest, to_compact_form, to_compact_json, to_summary_text

__all__ = [
    "CatalogError",
    "InvalidMediaType",
    "InvalidRating",
    "InvalidReviewUrl",
    "MediaType",
    "MissingField",
    "Platform",
    "RatingScale",
    "Review",
    "ReviewBuilder",
    "ReviewError",
    "ReviewFields",
    "build_review",
    "classify_review_url",
    "describe_scale",
    "letter_grades",
    "normalize",
    "review_digest",
    "to_compact_form",
    "to_compact_json",
    "to_summary_text",
]
