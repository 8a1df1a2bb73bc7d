from __future__ import annotations

from typing import Any, Protocol, Sequence, Tuple
from urllib.parse import urlsplit

from fabricpop.core.models import Platform, ReviewFields, ReviewUrlInfo, ValidationResult

# Checked in order; the first marker found in the hostname wins.
PLATFORM_MARKERS: Tuple[Tuple[str, Platform], ...] = (
    ("youtube.com", Platform.YOUTUBE),
    ("youtu.be", Platform.YOUTUBE),
    ("medium.com", Platform.MEDIUM),
    ("substack.com", Platform.SUBSTACK),
    ("spotify.com", Platform.PODCAST),
    ("podcasts.apple.com", Platform.PODCAST),
    ("soundcloud.com", Platform.PODCAST),
    ("letterboxd.com", Platform.LETTERBOXD),
    ("imdb.com", Platform.IMDB),
    ("rottentomatoes.com", Platform.ROTTENTOMATOES),
)

REQUIRED_REVIEW_FIELDS: Tuple[str, ...] = ("media_id", "media_title", "rating_value", "rating_scale")

_FIELD_LABELS = {
    "media_id": "Media ID",
    "media_title": "Media title",
    "rating_value": "Rating value",
    "rating_scale": "Rating scale",
}


class Validator(Protocol):
    """Protocol for review field validators."""

    def validate(self, fields: ReviewFields, required: Sequence[str]) -> ValidationResult: ...


class RequiredFieldsValidator:
    """Validator that checks required fields in order, stopping at the first gap."""

    def validate(self, fields: ReviewFields, required: Sequence[str] = REQUIRED_REVIEW_FIELDS) -> ValidationResult:
        """Validate that required fields are present and non-blank."""
        for f in required:
            v = getattr(fields, f, None)
            if v is None or (isinstance(v, str) and v.strip() == ""):
                label = _FIELD_LABELS.get(f, f)
                return ValidationResult(False, f"{label} is required", field=f)
        return ValidationResult(True, "")


def _parse_strict(url: str) -> str:
    """
    Return the lower-cased hostname of an absolute URL or raise ValueError.

    Whitespace is an error in the scheme and authority only; path, query and
    fragment may carry it.
    """
    parts = urlsplit(url)
    if not parts.scheme or not parts.netloc:
        raise ValueError("not an absolute URL")
    if any(c.isspace() for c in parts.scheme + parts.netloc):
        raise ValueError("whitespace in scheme or host")
    host = parts.hostname
    if not host:
        raise ValueError("missing hostname")
    # raises ValueError on a malformed port
    parts.port
    return host.lower()


def platform_for_host(hostname: str) -> Platform:
    """Classify a hostname by the ordered platform markers."""
    host = hostname.lower()
    for marker, platform in PLATFORM_MARKERS:
        if marker in host:
            return platform
    return Platform.OTHER


def classify_review_url(url: Any) -> ReviewUrlInfo:
    """
    Validate a review URL and detect the platform hosting it.

    Never raises; failures are reported through ReviewUrlInfo.error.
    """
    if url is None or not str(url).strip():
        return ReviewUrlInfo(valid=False, error="URL is required")

    trimmed = str(url).strip()
    try:
        host = _parse_strict(trimmed)
    except ValueError:
        return ReviewUrlInfo(valid=False, error="Invalid URL format")

    return ReviewUrlInfo(valid=True, platform=platform_for_host(host), url=trimmed)
