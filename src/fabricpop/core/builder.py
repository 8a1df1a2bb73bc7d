from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from types import MappingProxyType
from typing import Any, Callable, Optional

from fabricpop.core.errors import InvalidReviewUrl, MissingField, ReviewError
from fabricpop.core.models import (
    MediaReference,
    MediaType,
    OriginalRating,
    RatingInfo,
    RatingScale,
    Review,
    Reviewer,
    ReviewFields,
    ReviewLink,
    ReviewMetadata,
)
from fabricpop.transform.normalizers import DefaultRatingNormalizer, RatingNormalizer
from fabricpop.transform.validators import (
    REQUIRED_REVIEW_FIELDS,
    RequiredFieldsValidator,
    Validator,
    classify_review_url,
)
from fabricpop.utils.logging import get_logger
from fabricpop.utils.time import utc_now_iso

ANONYMOUS = "Anonymous"


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def _one_decimal(x: float) -> str:
    """Format to one decimal place, exact binary ties rounding up."""
    return str(Decimal(x).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


class ReviewBuilder:
    """
    Validates raw review fields and assembles an immutable Review.

    Validation is fail-fast: the first violated rule raises and nothing is built.
    """

    def __init__(
        self,
        normalizer: Optional[RatingNormalizer] = None,
        validator: Optional[Validator] = None,
        clock: Callable[[], str] = utc_now_iso,
    ):
        self.normalizer = normalizer or DefaultRatingNormalizer()
        self.validator = validator or RequiredFieldsValidator()
        self.clock = clock
        self.log = get_logger("fabricpop.builder")

    def build(self, fields: ReviewFields) -> Review:
        """
        Build a review from raw fields.

        Raises:
            InvalidMediaType, MissingField, InvalidRating, InvalidReviewUrl
        """
        try:
            review = self._build(fields)
        except ReviewError as e:
            self.log.warning("Review rejected: %s", e)
            raise

        self.log.debug(
            "Built review: media=%s:%s normalized=%s platform=%s",
            review.media.type.value,
            review.media.id,
            review.rating.normalized,
            review.review.platform.value,
        )
        return review

    def _build(self, fields: ReviewFields) -> Review:
        media_type = MediaType.parse(fields.media_type)

        result = self.validator.validate(fields, REQUIRED_REVIEW_FIELDS)
        if not result.ok:
            raise MissingField(result.field, result.reason)

        scale = RatingScale.parse(fields.rating_scale)
        normalized = self.normalizer.normalize(fields.rating_value, scale)

        url_info = classify_review_url(fields.review_url)
        if not url_info.valid:
            raise InvalidReviewUrl(url_info.error or "Invalid URL format")

        media = MediaReference(
            type=media_type,
            id=fields.media_id,
            title=fields.media_title,
            year=fields.media_year or None,
            metadata=MappingProxyType(dict(fields.media_metadata or {})),
        )

        rating = RatingInfo(
            normalized=normalized,
            original=OriginalRating(value=fields.rating_value, scale=scale),
            percentage=_round_half_up(normalized * 100),
            stars5_display=_one_decimal(normalized * 5),
            stars10_display=_one_decimal(normalized * 10),
        )

        return Review(
            media=media,
            rating=rating,
            review=ReviewLink(url=url_info.url, platform=url_info.platform),
            reviewer=Reviewer(name=fields.reviewer_name or ANONYMOUS, address=fields.reviewer_address or None),
            metadata=ReviewMetadata(created_at=self.clock(), notes=fields.notes or None),
        )


def build_review(builder: Optional[ReviewBuilder] = None, **fields: Any) -> Review:
    """Build a review from keyword fields, e.g. ``build_review(media_type="movie", ...)``."""
    return (builder or ReviewBuilder()).build(ReviewFields(**fields))
