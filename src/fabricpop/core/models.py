from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Union

from fabricpop.core.errors import InvalidMediaType, InvalidRating


class MediaType(str, Enum):
    """Kinds of media a review can target."""

    MOVIE = "movie"
    SHOW = "show"
    GAME = "game"

    @classmethod
    def parse(cls, raw: Any) -> "MediaType":
        """Resolve a raw tag into a MediaType."""
        if isinstance(raw, cls):
            return raw
        try:
            return cls(raw)
        except (TypeError, ValueError):
            valid = ", ".join(m.value for m in cls)
            raise InvalidMediaType(f"Invalid media type. Must be one of: {valid}") from None

    @property
    def label(self) -> str:
        return {"movie": "Movie", "show": "TV Show", "game": "Video Game"}[self.value]


class RatingScale(str, Enum):
    """Supported rating scales."""

    STARS_5 = "stars5"
    STARS_10 = "stars10"
    NUMERIC_10 = "numeric10"
    NUMERIC_100 = "numeric100"
    LETTER_GRADE = "letterGrade"
    FLOAT = "float"

    @classmethod
    def parse(cls, raw: Any) -> "RatingScale":
        """Resolve an exact tag (current or legacy snake_case) into a RatingScale."""
        if isinstance(raw, cls):
            return raw
        scale = _SCALE_ALIASES.get(raw) if isinstance(raw, str) else None
        if scale is None:
            raise InvalidRating(f"Unknown rating scale: {raw}")
        return scale


_SCALE_ALIASES: Dict[str, RatingScale] = {s.value: s for s in RatingScale}
_SCALE_ALIASES.update(
    {
        "letter_grade": RatingScale.LETTER_GRADE,
        "stars_5": RatingScale.STARS_5,
        "stars_10": RatingScale.STARS_10,
        "numeric_10": RatingScale.NUMERIC_10,
        "numeric_100": RatingScale.NUMERIC_100,
    }
)


class Platform(str, Enum):
    """Hosting platform of an external review."""

    YOUTUBE = "youtube"
    MEDIUM = "medium"
    SUBSTACK = "substack"
    PODCAST = "podcast"
    LETTERBOXD = "letterboxd"
    IMDB = "imdb"
    ROTTENTOMATOES = "rottentomatoes"
    OTHER = "other"


RawRating = Union[int, float, str]


@dataclass(frozen=True)
class ScaleMetadata:
    """Display metadata for a rating scale."""

    scale: RatingScale
    label: str
    formatter: Callable[[Any], str]
    min: Optional[float] = None
    max: Optional[float] = None
    step: Optional[float] = None
    options: Tuple[str, ...] = ()

    def format(self, value: Any) -> str:
        return self.formatter(value)


@dataclass(frozen=True)
class ReviewUrlInfo:
    """Result of review URL classification."""

    valid: bool
    platform: Optional[Platform] = None
    url: Optional[str] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class ReviewFields:
    """Raw, caller-supplied fields for a review. Nothing here is validated yet."""

    media_type: Any = None
    media_id: Any = None
    media_title: Any = None
    media_year: Optional[int] = None
    media_metadata: Optional[Mapping[str, Any]] = None
    rating_value: Any = None
    rating_scale: Any = None
    review_url: Optional[str] = None
    reviewer_name: Optional[str] = None
    reviewer_address: Optional[str] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class ValidationResult:
    """Result of field validation."""

    ok: bool
    reason: str = ""
    field: str = ""


@dataclass(frozen=True)
class MediaReference:
    """Catalog item the review is about. Trusted as supplied by the caller."""

    type: MediaType
    id: Union[int, str]
    title: str
    year: Optional[int] = None
    metadata: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))


@dataclass(frozen=True)
class OriginalRating:
    value: RawRating
    scale: RatingScale


@dataclass(frozen=True)
class RatingInfo:
    normalized: float
    original: OriginalRating
    percentage: int
    stars5_display: str
    stars10_display: str


@dataclass(frozen=True)
class ReviewLink:
    url: str
    platform: Platform


@dataclass(frozen=True)
class Reviewer:
    name: str = "Anonymous"
    address: Optional[str] = None


@dataclass(frozen=True)
class ReviewMetadata:
    created_at: str
    notes: Optional[str] = None


@dataclass(frozen=True)
class Review:
    """A fully validated review record, ready for submission."""

    media: MediaReference
    rating: RatingInfo
    review: ReviewLink
    reviewer: Reviewer
    metadata: ReviewMetadata

    def to_dict(self) -> Dict[str, Any]:
        """Full JSON-compatible representation of the review."""
        return {
            "media": {
                "type": self.media.type.value,
                "id": self.media.id,
                "title": self.media.title,
                "year": self.media.year,
                "metadata": dict(self.media.metadata),
            },
            "rating": {
                "normalized": self.rating.normalized,
                "original": {
                    "value": self.rating.original.value,
                    "scale": self.rating.original.scale.value,
                },
                "percentage": self.rating.percentage,
                "stars5": self.rating.stars5_display,
                "stars10": self.rating.stars10_display,
            },
            "review": {"url": self.review.url, "platform": self.review.platform.value},
            "reviewer": {"name": self.reviewer.name, "address": self.reviewer.address},
            "metadata": {"created": self.metadata.created_at, "notes": self.metadata.notes},
        }


@dataclass(frozen=True)
class CatalogItem:
    """A search hit from an external catalog, reduced to what a review needs."""

    media_type: MediaType
    id: Union[int, str]
    title: str
    year: Optional[int] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
