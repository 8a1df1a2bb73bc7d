from __future__ import annotations

import math
from typing import Any, Dict, List, Optional, Protocol

from fabricpop.core.errors import InvalidRating
from fabricpop.core.models import RatingScale, ScaleMetadata

LETTER_GRADES: Dict[str, float] = {
    "A+": 1.0, "A": 0.95, "A-": 0.9,
    "B+": 0.87, "B": 0.83, "B-": 0.8,
    "C+": 0.77, "C": 0.73, "C-": 0.7,
    "D+": 0.67, "D": 0.63, "D-": 0.6,
    "F": 0.0,
}

# divisor applied before clamping
_DIVISORS: Dict[RatingScale, float] = {
    RatingScale.STARS_5: 5.0,
    RatingScale.STARS_10: 10.0,
    RatingScale.NUMERIC_10: 10.0,
    RatingScale.NUMERIC_100: 100.0,
    RatingScale.FLOAT: 1.0,
}


class RatingNormalizer(Protocol):
    """Protocol for rating normalizers."""

    def normalize(self, value: Any, scale: Any) -> float: ...


def _number(v: Any) -> str:
    """Render a number at full precision, dropping a trailing .0 for whole floats."""
    if isinstance(v, float):
        text = repr(v)
        return text[:-2] if text.endswith(".0") else text
    return str(v).strip()


def _stars(v: Any) -> str:
    return f"{_number(v)} ★"


def _fixed2(v: Any) -> str:
    try:
        return f"{float(v):.2f}"
    except (TypeError, ValueError):
        return str(v)


def letter_grades() -> List[str]:
    """Letter grades ordered from best to worst."""
    return sorted(LETTER_GRADES, key=lambda g: LETTER_GRADES[g], reverse=True)


SCALE_INFO: Dict[RatingScale, ScaleMetadata] = {
    RatingScale.STARS_5: ScaleMetadata(
        scale=RatingScale.STARS_5, label="5 Stars", min=0, max=5, step=0.5, formatter=_stars
    ),
    RatingScale.STARS_10: ScaleMetadata(
        scale=RatingScale.STARS_10, label="10 Stars", min=0, max=10, step=0.5, formatter=_stars
    ),
    RatingScale.NUMERIC_10: ScaleMetadata(
        scale=RatingScale.NUMERIC_10,
        label="Score (0-10)",
        min=0,
        max=10,
        step=0.1,
        formatter=lambda v: f"{_number(v)}/10",
    ),
    RatingScale.NUMERIC_100: ScaleMetadata(
        scale=RatingScale.NUMERIC_100,
        label="Score (0-100)",
        min=0,
        max=100,
        step=1,
        formatter=lambda v: f"{_number(v)}/100",
    ),
    RatingScale.LETTER_GRADE: ScaleMetadata(
        scale=RatingScale.LETTER_GRADE,
        label="Letter Grade",
        options=tuple(letter_grades()),
        formatter=lambda v: str(v).strip().upper(),
    ),
    RatingScale.FLOAT: ScaleMetadata(
        scale=RatingScale.FLOAT, label="Float (0.0-1.0)", min=0, max=1, step=0.01, formatter=_fixed2
    ),
}


class DefaultRatingNormalizer:
    """Converts ratings on any supported scale into a float in [0, 1]."""

    def normalize(self, value: Any, scale: Any) -> float:
        """
        Normalize a raw rating.

        Args:
            value: Raw rating; a number (or numeric string) or a letter grade.
            scale: RatingScale or its tag.

        Returns:
            The normalized rating in [0.0, 1.0].

        Raises:
            InvalidRating: unknown scale, unparseable number or unknown grade.
        """
        s = RatingScale.parse(scale)
        if s == RatingScale.LETTER_GRADE:
            return self.parse_grade(value)

        number = self.parse_number(value)
        return max(0.0, min(1.0, number / _DIVISORS[s]))

    def parse_number(self, raw: Any) -> float:
        """Parse a real number, rejecting booleans, NaN and digit-group underscores."""
        if isinstance(raw, bool) or raw is None or (isinstance(raw, str) and "_" in raw):
            raise InvalidRating(f"Invalid rating value: {raw!r}")
        try:
            number = float(raw.strip() if isinstance(raw, str) else raw)
        except (TypeError, ValueError):
            raise InvalidRating(f"Invalid rating value: {raw!r}") from None
        if math.isnan(number):
            raise InvalidRating(f"Invalid rating value: {raw!r}")
        return number

    def parse_grade(self, raw: Any) -> float:
        """Look up a letter grade (case-insensitive, trimmed)."""
        key = str(raw).strip().upper() if raw is not None else ""
        if key not in LETTER_GRADES:
            raise InvalidRating(f"Invalid letter grade: {raw}")
        return LETTER_GRADES[key]


_default = DefaultRatingNormalizer()


def normalize(value: Any, scale: Any) -> float:
    """Normalize a rating with the default normalizer."""
    return _default.normalize(value, scale)


def describe_scale(scale: Any) -> Optional[ScaleMetadata]:
    """Display metadata for a scale, or None when the tag is not recognized."""
    try:
        return SCALE_INFO[RatingScale.parse(scale)]
    except InvalidRating:
        return None
