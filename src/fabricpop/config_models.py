"""
Pydantic models for YAML review request files.
Validates file shape only; review rules are enforced by the ReviewBuilder.
"""

from __future__ import annotations
from typing import Any, Dict, Literal, Optional, Union
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from fabricpop.core.models import ReviewFields


class ReviewRequestConfig(BaseModel):
    """Raw review fields as written in the request file."""
    media_type: Optional[str] = Field(None, description="movie, show or game")
    media_id: Optional[Union[int, str]] = Field(None, description="External catalog identifier")
    media_title: Optional[str] = Field(None, description="Title of the media")
    media_year: Optional[int] = Field(None, description="Release year")
    media_metadata: Optional[Dict[str, Any]] = Field(None, description="Opaque auxiliary fields")
    rating_value: Optional[Union[float, int, str]] = Field(None, description="Rating on the chosen scale")
    rating_scale: Optional[str] = Field(None, description="Rating scale tag")
    review_url: Optional[str] = Field(None, description="Link to the published review")
    reviewer_name: Optional[str] = Field(None, description="Display name, defaults to Anonymous")
    reviewer_address: Optional[str] = Field(None, description="Wallet address of the reviewer")
    notes: Optional[str] = Field(None, description="Free-text notes")

    def to_fields(self, **overrides: Any) -> ReviewFields:
        """Merge non-None overrides (e.g. catalog media fields) into ReviewFields."""
        data = self.model_dump()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return ReviewFields(**data)


class LookupConfig(BaseModel):
    """Resolve media fields from a catalog search instead of the file."""
    provider: Literal["tmdb", "igdb"]
    query: str = Field(..., description="Search query; the first hit is used")
    kind: str = Field("multi", description="TMDB search type: multi, movie or tv")

    @field_validator('query')
    @classmethod
    def validate_query(cls, v):
        if not v.strip():
            raise ValueError('query cannot be empty')
        return v

    @field_validator('kind')
    @classmethod
    def validate_kind(cls, v):
        if v not in ["multi", "movie", "tv"]:
            raise ValueError('kind must be one of: multi, movie, tv')
        return v


class CatalogConfig(BaseModel):
    """Catalog endpoints. Credentials are read from the environment only."""
    tmdb_token_env: str = Field("TMDB_READ_TOKEN", description="Env var holding the TMDB read token")
    igdb_proxy_url: str = Field("http://localhost:3000/api/igdb", description="IGDB proxy base URL")
    timeout_s: int = Field(30, ge=1, le=300, description="HTTP timeout in seconds")

    @field_validator('igdb_proxy_url')
    @classmethod
    def validate_proxy_url(cls, v):
        if not v.startswith(('http://', 'https://')):
            raise ValueError('igdb_proxy_url must be a valid HTTP/HTTPS URL')
        return v


class SinkConfig(BaseModel):
    """Where built reviews are written."""
    type: Literal["jsonl", "csv"] = "jsonl"
    path: str = Field("output/reviews.jsonl", description="Output file path")
    form: Literal["compact", "full"] = Field("compact", description="JSONL payload form")
    write_mode: Literal["append", "overwrite"] = "append"

    @model_validator(mode='after')
    def validate_form(self):
        if self.type == "csv" and self.form != "compact":
            raise ValueError('form applies to jsonl sinks only')
        return self


class ReviewConfig(BaseModel):
    """Root configuration model for a review request."""
    review: ReviewRequestConfig
    lookup: Optional[LookupConfig] = None
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    sink: SinkConfig = Field(default_factory=SinkConfig)


def load_and_validate_config(config_path: str) -> ReviewConfig:
    """
    Load and validate a review request from a YAML file.

    Args:
        config_path: Path to the YAML request file

    Returns:
        Validated ReviewConfig object

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If YAML is malformed or the request shape is invalid
    """
    import yaml

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            raw_config = yaml.safe_load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Configuration file not found: {config_path}")
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {config_path}: {e}")

    if not isinstance(raw_config, dict):
        raise ValueError(f"Configuration validation failed for {config_path}:\n  root: expected a mapping")

    try:
        return ReviewConfig(**raw_config)
    except ValidationError as e:
        error_messages = []
        for error in e.errors():
            field_path = '.'.join(str(loc) for loc in error['loc'])
            error_messages.append(f"  {field_path}: {error['msg']}")

        raise ValueError(
            f"Configuration validation failed for {config_path}:\n" +
            '\n'.join(error_messages)
        ) from e
