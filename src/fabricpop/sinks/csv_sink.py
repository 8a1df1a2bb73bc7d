from __future__ import annotations

import csv
import os
from typing import Any, Dict, List

from fabricpop.core.models import Review
from fabricpop.sinks.base import ReviewSink, ensure_parent_dir, resolve_file_mode
from fabricpop.transform.views import review_digest
from fabricpop.utils.logging import get_logger

COLUMNS = [
    "created_at",
    "media_type",
    "media_id",
    "title",
    "year",
    "normalized",
    "percentage",
    "scale",
    "original_value",
    "platform",
    "url",
    "reviewer_name",
    "reviewer_address",
    "digest",
]


class CsvSink(ReviewSink):
    """Sink that writes one flat row per review to a CSV file."""

    def __init__(self):
        self.log = get_logger("fabricpop.sink.csv")

    def write(self, reviews: List[Review], config: Dict[str, Any]) -> None:
        path = config.get("path", "output/reviews.csv")
        file_mode = resolve_file_mode(config)
        ensure_parent_dir(path)

        write_header = file_mode == "w" or not self._file_has_content(path)
        with open(path, file_mode, newline="", encoding="utf-8") as f:
            w = csv.DictWriter(f, fieldnames=COLUMNS)
            if write_header:
                w.writeheader()
            for r in reviews:
                w.writerow(self.row(r))

        self.log.info("CSV write: path=%s rows=%d file_mode=%s", path, len(reviews), file_mode)

    def row(self, review: Review) -> Dict[str, Any]:
        return {
            "created_at": review.metadata.created_at,
            "media_type": review.media.type.value,
            "media_id": review.media.id,
            "title": review.media.title,
            "year": review.media.year if review.media.year is not None else "",
            "normalized": review.rating.normalized,
            "percentage": review.rating.percentage,
            "scale": review.rating.original.scale.value,
            "original_value": review.rating.original.value,
            "platform": review.review.platform.value,
            "url": review.review.url,
            "reviewer_name": review.reviewer.name,
            "reviewer_address": review.reviewer.address or "",
            "digest": review_digest(review),
        }

    def _file_has_content(self, path: str) -> bool:
        return os.path.exists(path) and os.path.getsize(path) > 0
