from __future__ import annotations
import logging
import logging.config
import os
from pathlib import Path
from typing import Optional
import yaml

DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(config_path: str = "configs/logging.yaml", level: Optional[str] = None) -> None:
    """
    Configure logging from a YAML dictConfig file.

    FABRICPOP_LOG_LEVEL (or ``level``) overrides the level of the fabricpop logger.
    """
    path = Path(config_path)
    override = level or os.getenv("FABRICPOP_LOG_LEVEL")

    if not path.exists():
        logging.basicConfig(level=(override or "INFO").upper(), format=DEFAULT_FORMAT)
        return

    with path.open("r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)
    logging.config.dictConfig(cfg)

    if override:
        logging.getLogger("fabricpop").setLevel(override.upper())


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(name)
