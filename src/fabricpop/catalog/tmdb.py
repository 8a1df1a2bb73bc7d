from __future__ import annotations

from typing import Any, Dict, List, Optional

from fabricpop.core.errors import CatalogError
from fabricpop.core.models import CatalogItem, MediaType
from fabricpop.catalog.base import check_response, require_query
from fabricpop.http.client import HttpClient, RequestSpec
from fabricpop.utils.logging import get_logger

TMDB_BASE_URL = "https://api.themoviedb.org/3"

_KINDS = {"multi", "movie", "tv"}


def _year(date: Optional[str]) -> Optional[int]:
    if not date or len(date) < 4 or not date[:4].isdigit():
        return None
    return int(date[:4])


class TmdbCatalog:
    """Movie and TV search against The Movie Database (v3, bearer auth)."""

    name = "tmdb"

    def __init__(self, client: HttpClient, read_token: str, base_url: str = TMDB_BASE_URL):
        self.client = client
        self.base_url = base_url.rstrip("/")
        self.headers = {
            "Authorization": f"Bearer {read_token}",
            "Content-Type": "application/json;charset=utf-8",
        }
        self.log = get_logger("fabricpop.catalog.tmdb")

    def search(self, query: str, kind: str = "multi") -> List[CatalogItem]:
        """
        Search movies and/or TV shows.

        Args:
            query: Free-text title query.
            kind: "multi" (movies and TV), "movie" or "tv".

        Returns:
            Matching items; multi searches drop people and other result types.
        """
        q = require_query(query)
        if kind not in _KINDS:
            raise CatalogError(f"Unknown TMDB search type: {kind}")

        data = self._get(
            f"/search/{kind}",
            {"query": q, "include_adult": "false", "language": "en-US", "page": 1},
        )
        results = data.get("results") or []
        if kind == "multi":
            results = [r for r in results if r.get("media_type") in ("movie", "tv")]
        else:
            results = [{**r, "media_type": kind} for r in results]

        items = [self.to_item(r) for r in results]
        self.log.info("TMDB search: query=%r kind=%s results=%d", q, kind, len(items))
        return items

    def trending(self, media_type: str = "all", time_window: str = "week") -> List[CatalogItem]:
        """Trending movies and/or TV shows for the given window ("day" or "week")."""
        if media_type not in ("all", "movie", "tv"):
            raise CatalogError(f"Unknown TMDB trending type: {media_type}")
        if time_window not in ("day", "week"):
            raise CatalogError(f"Unknown TMDB time window: {time_window}")

        data = self._get(f"/trending/{media_type}/{time_window}", {"language": "en-US"})
        results = [r for r in data.get("results") or [] if r.get("media_type") in ("movie", "tv")]
        return [self.to_item(r) for r in results]

    def popular_movies(self) -> List[CatalogItem]:
        data = self._get("/movie/popular", {"language": "en-US", "page": 1})
        return [self.to_item({**r, "media_type": "movie"}) for r in data.get("results") or []]

    def movie_details(self, movie_id: int) -> Dict[str, Any]:
        return self._get(
            f"/movie/{movie_id}",
            {"language": "en-US", "append_to_response": "credits,videos,release_dates"},
        )

    def tv_details(self, tv_id: int) -> Dict[str, Any]:
        return self._get(f"/tv/{tv_id}", {"language": "en-US", "append_to_response": "credits,videos"})

    def to_item(self, raw: Dict[str, Any]) -> CatalogItem:
        """Map a raw TMDB result to a CatalogItem."""
        is_movie = raw.get("media_type") == "movie" or ("title" in raw and raw.get("media_type") != "tv")
        title = raw.get("title") if is_movie else raw.get("name")
        return CatalogItem(
            media_type=MediaType.MOVIE if is_movie else MediaType.SHOW,
            id=raw.get("id"),
            title=title or "",
            year=_year(raw.get("release_date") if is_movie else raw.get("first_air_date")),
            metadata={
                "source": self.name,
                "original_title": raw.get("original_title") if is_movie else raw.get("original_name"),
                "overview": raw.get("overview"),
                "vote_average": raw.get("vote_average"),
                "vote_count": raw.get("vote_count"),
                "popularity": raw.get("popularity"),
                "genre_ids": raw.get("genre_ids") or [],
            },
        )

    def _get(self, path: str, params: Dict[str, Any]) -> Dict[str, Any]:
        req = RequestSpec(url=f"{self.base_url}{path}", headers=dict(self.headers), params=params)
        return check_response("TMDB", self.client.send(req))
