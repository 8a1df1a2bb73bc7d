from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, List, Protocol
from fabricpop.core.models import Review


class ReviewSink(Protocol):
    """Protocol for review output sinks."""

    def write(self, reviews: List[Review], config: Dict[str, Any]) -> None: ...


def ensure_parent_dir(path: str) -> None:
    parent = Path(path).parent
    if str(parent) not in {"", "."}:
        parent.mkdir(parents=True, exist_ok=True)


def resolve_file_mode(config: Dict[str, Any]) -> str:
    write_mode = str(config.get("write_mode", "append")).lower()
    if write_mode not in {"overwrite", "append"}:
        raise ValueError("sink write_mode must be 'overwrite' or 'append'")
    return "w" if write_mode == "overwrite" else "a"
