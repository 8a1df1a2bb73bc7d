"""
Derived, side-effect free projections of a Review.

The compact form is the minimal payload meant for hashing and on-chain storage.
Its key names and order are part of the record format.
"""

from __future__ import annotations

from typing import Any, Dict

from fabricpop.core.models import Review
from fabricpop.utils.hashing import canonical_json, sha256_hex
from fabricpop.utils.time import short_date


def to_compact_form(review: Review) -> Dict[str, Any]:
    """Short-keyed projection: m(edia), r(ating), l(ink), a(ddress), d(ate)."""
    return {
        "m": {
            "t": review.media.type.value,
            "i": review.media.id,
            "n": review.media.title,
            "y": review.media.year,
        },
        "r": {
            "n": review.rating.normalized,
            "o": {
                "value": review.rating.original.value,
                "scale": review.rating.original.scale.value,
            },
        },
        "l": review.review.url,
        "a": review.reviewer.address,
        "d": review.metadata.created_at,
    }


def to_compact_json(review: Review) -> str:
    return canonical_json(to_compact_form(review))


def review_digest(review: Review) -> str:
    """SHA-256 of the compact JSON; identical reviews always hash the same."""
    return sha256_hex(to_compact_json(review))


def to_summary_text(review: Review) -> str:
    """Human-readable multi-line summary."""
    year = review.media.year if review.media.year else "N/A"
    lines = [
        f'{review.media.type.label} Review: "{review.media.title}" ({year})',
        f"Rating: {review.rating.stars5_display}/5.0 stars ({review.rating.percentage}%)",
        f"Reviewed by: {review.reviewer.name}",
        f"Platform: {review.review.platform.value}",
        f"URL: {review.review.url}",
        f"Created: {short_date(review.metadata.created_at)}",
    ]
    return "\n".join(lines)
