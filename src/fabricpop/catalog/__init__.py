from fabricpop.catalog.base import Catalog, media_fields
from fabricpop.catalog.igdb import IgdbCatalog
from fabricpop.catalog.tmdb import TmdbCatalog

__all__ = [
    "Catalog",
    "IgdbCatalog",
    "TmdbCatalog",
    "media_fields",
]
