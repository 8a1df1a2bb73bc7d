import json
from typing import Any, Dict, List
from fabricpop.core.models import Review
from fabricpop.sinks.base import ReviewSink, ensure_parent_dir, resolve_file_mode
from fabricpop.transform.views import to_compact_form
from fabricpop.utils.logging import get_logger


class JsonlSink(ReviewSink):
    """Sink that writes reviews to a JSONL (JSON Lines) file."""

    def __init__(self):
        self.log = get_logger("fabricpop.sink.jsonl")

    def write(self, reviews: List[Review], config: Dict[str, Any]) -> None:
        """Write one review per line, compact form unless ``form: full``."""
        path = config.get("path", "output/reviews.jsonl")
        form = str(config.get("form", "compact")).lower()
        if form not in {"compact", "full"}:
            raise ValueError("jsonl sink form must be 'compact' or 'full'")
        file_mode = resolve_file_mode(config)

        ensure_parent_dir(path)
        with open(path, file_mode, encoding="utf-8") as f:
            for r in reviews:
                payload = to_compact_form(r) if form == "compact" else r.to_dict()
                f.write(json.dumps(payload, ensure_ascii=False) + "\n")

        self.log.info("JSONL write: path=%s reviews=%d form=%s file_mode=%s", path, len(reviews), form, file_mode)
