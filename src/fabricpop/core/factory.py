from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from fabricpop.catalog.base import Catalog
from fabricpop.catalog.igdb import IgdbCatalog
from fabricpop.catalog.tmdb import TmdbCatalog
from fabricpop.config_models import CatalogConfig, ReviewConfig, SinkConfig
from fabricpop.core.builder import ReviewBuilder
from fabricpop.core.errors import CatalogError
from fabricpop.http.client import RequestsHttpClient
from fabricpop.sinks.base import ReviewSink
from fabricpop.sinks.csv_sink import CsvSink
from fabricpop.sinks.jsonl_sink import JsonlSink


@dataclass(frozen=True)
class BuiltComponents:
    builder: ReviewBuilder
    sink: ReviewSink
    catalog: Optional[Catalog]


class ComponentFactory:
    """Wires the builder, sink and (when a lookup is requested) a catalog from config."""

    def build(self, config: ReviewConfig) -> BuiltComponents:
        catalog = self._catalog(config.catalog, config.lookup.provider) if config.lookup else None
        return BuiltComponents(
            builder=self._builder(),
            sink=self._sink(config.sink),
            catalog=catalog,
        )

    # ---------- Builders (private) ----------

    def _builder(self) -> ReviewBuilder:
        return ReviewBuilder()

    def _sink(self, sink: SinkConfig) -> ReviewSink:
        if sink.type == "csv":
            return CsvSink()
        return JsonlSink()

    def _catalog(self, cfg: CatalogConfig, provider: str) -> Catalog:
        client = RequestsHttpClient(timeout_s=cfg.timeout_s)
        if provider == "igdb":
            return IgdbCatalog(client, proxy_url=cfg.igdb_proxy_url)

        token = os.getenv(cfg.tmdb_token_env, "")
        if not token:
            raise CatalogError(f"TMDB lookup requires the {cfg.tmdb_token_env} environment variable")
        return TmdbCatalog(client, read_token=token)
