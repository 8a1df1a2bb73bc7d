from __future__ import annotations

from typing import Any, Dict, List, Protocol

from fabricpop.core.errors import CatalogError
from fabricpop.core.models import CatalogItem
from fabricpop.http.response import HttpResponse


class Catalog(Protocol):
    """Protocol for external media catalogs."""

    name: str

    def search(self, query: str) -> List[CatalogItem]: ...


def media_fields(item: CatalogItem) -> Dict[str, Any]:
    """ReviewFields keyword arguments describing a catalog item."""
    return {
        "media_type": item.media_type.value,
        "media_id": item.id,
        "media_title": item.title,
        "media_year": item.year,
        "media_metadata": dict(item.metadata),
    }


def require_query(query: str) -> str:
    q = (query or "").strip()
    if not q:
        raise CatalogError("Search query cannot be empty")
    return q


def check_response(provider: str, resp: HttpResponse) -> Any:
    """Return the JSON body of a successful response or raise CatalogError."""
    if not resp.ok:
        raise CatalogError(f"{provider} API error: {resp.status_code}")
    if resp.json is None:
        raise CatalogError(f"{provider} API returned a non-JSON body")
    return resp.json
