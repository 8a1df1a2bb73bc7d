import hashlib
import json
from typing import Any


def canonical_json(payload: Any) -> str:
    """Serialize without whitespace, preserving key order."""
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"), allow_nan=False)


def sha256_hex(text: str) -> str:
    """SHA-256 hex digest of UTF-8 text."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()
