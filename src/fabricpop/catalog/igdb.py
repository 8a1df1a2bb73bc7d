from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fabricpop.core.errors import CatalogError
from fabricpop.core.models import CatalogItem, MediaType
from fabricpop.catalog.base import check_response, require_query
from fabricpop.http.client import HttpClient, RequestSpec
from fabricpop.utils.logging import get_logger

DEFAULT_PROXY_URL = "http://localhost:3000/api/igdb"

SEARCH_FIELDS = (
    "name, cover.url, cover.image_id, first_release_date, rating, rating_count, "
    "summary, platforms.name, genres.name, involved_companies.company.name"
)
BROWSE_FIELDS = (
    "name, cover.url, cover.image_id, first_release_date, rating, rating_count, "
    "summary, platforms.name, genres.name"
)
DETAIL_FIELDS = (
    "name, cover.url, cover.image_id, first_release_date, rating, rating_count, "
    "summary, storyline, platforms.name, genres.name, themes.name, "
    "involved_companies.company.name, involved_companies.developer, "
    "involved_companies.publisher, websites.*, aggregated_rating, aggregated_rating_count"
)

TWO_YEARS_S = 2 * 365 * 24 * 60 * 60


def _year(ts: Any) -> Optional[int]:
    if ts is None:
        return None
    try:
        return datetime.fromtimestamp(int(ts), tz=timezone.utc).year
    except (TypeError, ValueError, OverflowError, OSError):
        return None


def _names(entries: Any) -> List[str]:
    return [e["name"] for e in entries or [] if isinstance(e, dict) and e.get("name")]


class IgdbCatalog:
    """
    Game search against IGDB v4 through a credential-holding proxy.

    The proxy owns the OAuth client secret; requests carry only Apicalypse text.
    """

    name = "igdb"

    def __init__(self, client: HttpClient, proxy_url: str = DEFAULT_PROXY_URL):
        self.client = client
        self.proxy_url = proxy_url.rstrip("/")
        self.log = get_logger("fabricpop.catalog.igdb")

    def search(self, query: str, limit: int = 10) -> List[CatalogItem]:
        q = require_query(query).replace('"', '\\"')
        body = f'search "{q}"; fields {SEARCH_FIELDS}; where version_parent = null; limit {int(limit)};'
        data = self.request("games", body)
        items = [self.to_item(g) for g in data]
        self.log.info("IGDB search: query=%r results=%d", q, len(items))
        return items

    def popular_games(self, limit: int = 20, now: Optional[float] = None) -> List[CatalogItem]:
        """Most-rated games released in the last two years."""
        since = int(now if now is not None else time.time()) - TWO_YEARS_S
        body = (
            f"fields {BROWSE_FIELDS}; where rating_count > 10 & first_release_date > {since}; "
            f"sort rating_count desc; limit {int(limit)};"
        )
        return [self.to_item(g) for g in self.request("games", body)]

    def top_rated_games(self, limit: int = 20) -> List[CatalogItem]:
        body = f"fields {BROWSE_FIELDS}; where rating_count > 50 & rating != null; sort rating desc; limit {int(limit)};"
        return [self.to_item(g) for g in self.request("games", body)]

    def games_by_genre(self, genre_name: str, limit: int = 20) -> List[CatalogItem]:
        """Best-rated games in the first genre matching ``genre_name``; empty when no genre matches."""
        q = require_query(genre_name).replace('"', '\\"')
        genres = self.request("genres", f'search "{q}"; fields name; limit 1;')
        if not genres:
            return []
        body = (
            f"fields {BROWSE_FIELDS}; where genres = [{int(genres[0]['id'])}] & rating_count > 5; "
            f"sort rating desc; limit {int(limit)};"
        )
        return [self.to_item(g) for g in self.request("games", body)]

    def game_details(self, game_id: int) -> Dict[str, Any]:
        data = self.request("games", f"fields {DETAIL_FIELDS}; where id = {int(game_id)};")
        if not data:
            raise CatalogError(f"IGDB game not found: {game_id}")
        return data[0]

    def request(self, endpoint: str, body: str) -> List[Dict[str, Any]]:
        """POST an Apicalypse query to the proxy."""
        req = RequestSpec(
            url=f"{self.proxy_url}/{endpoint}",
            method="POST",
            headers={"Content-Type": "text/plain"},
            body=body,
        )
        data = check_response("IGDB", self.client.send(req))
        if not isinstance(data, list):
            raise CatalogError("IGDB API returned an unexpected payload")
        return data

    def to_item(self, raw: Dict[str, Any]) -> CatalogItem:
        """Map a raw IGDB game to a CatalogItem."""
        return CatalogItem(
            media_type=MediaType.GAME,
            id=raw.get("id"),
            title=raw.get("name") or "",
            year=_year(raw.get("first_release_date")),
            metadata={
                "source": self.name,
                "summary": raw.get("summary"),
                "rating": raw.get("rating"),
                "rating_count": raw.get("rating_count"),
                "genres": _names(raw.get("genres")),
                "platforms": _names(raw.get("platforms")),
            },
        )
