from __future__ import annotations

import sys

from fabricpop.catalog.base import Catalog, media_fields
from fabricpop.catalog.tmdb import TmdbCatalog
from fabricpop.config_models import LookupConfig, ReviewConfig, load_and_validate_config
from fabricpop.core.errors import CatalogError, ReviewError
from fabricpop.core.factory import ComponentFactory
from fabricpop.core.models import Review
from fabricpop.transform.views import review_digest, to_summary_text
from fabricpop.utils.logging import get_logger, setup_logging

log = get_logger("fabricpop.main")


def resolve_media(catalog: Catalog, lookup: LookupConfig) -> dict:
    """Search the catalog and return media fields for the first hit."""
    if isinstance(catalog, TmdbCatalog):
        items = catalog.search(lookup.query, kind=lookup.kind)
    else:
        items = catalog.search(lookup.query)
    if not items:
        raise CatalogError(f"No {lookup.provider} results for {lookup.query!r}")
    item = items[0]
    log.info("Resolved %r to %s:%s %s", lookup.query, item.media_type.value, item.id, item.title)
    return media_fields(item)


def run_one(config: ReviewConfig) -> Review:
    """Build one review from a validated request and write it to the configured sink."""
    built = ComponentFactory().build(config)

    overrides = resolve_media(built.catalog, config.lookup) if built.catalog and config.lookup else {}
    review = built.builder.build(config.review.to_fields(**overrides))

    built.sink.write([review], config.sink.model_dump())
    log.info("Review stored: digest=%s", review_digest(review))
    return review


def main() -> None:
    """Main entry point for the review CLI."""
    if len(sys.argv) < 2:
        print("Usage: fabricpop configs/reviews/<request>.yaml")
        raise SystemExit(2)

    setup_logging("configs/logging.yaml")

    try:
        config = load_and_validate_config(sys.argv[1])
        review = run_one(config)
    except (ReviewError, CatalogError, ValueError, FileNotFoundError) as e:
        print(f"Error: {e}")
        raise SystemExit(1)

    print(to_summary_text(review))


if __name__ == "__main__":
    main()
