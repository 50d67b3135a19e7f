"""
Location Catalog Loader
=======================

Utilities for loading and validating the location catalog.

This module handles:
    - Loading the bundled catalog or a catalog file (JSON or YAML)
    - Validating records into Location models
    - Rejecting non-positive capacities and duplicate ids

The catalog is STATIC and loaded once before the simulator starts.
Any problem is fatal and surfaces as ConfigurationError.

Example:
    from crowdflow.catalog import load_catalog

    locations = load_catalog()                      # bundled catalog
    locations = load_catalog("./data/site.yaml")    # site specific
"""

import json
import logging
from pathlib import Path
from typing import Any, List, Optional, Sequence

import yaml
from pydantic import ValidationError

from crowdflow.errors import ConfigurationError
from crowdflow.models.location import Location


logger = logging.getLogger(__name__)


DEFAULT_CATALOG_PATH = Path(__file__).parent / "locations.yaml"


def load_catalog(path: Optional[str] = None) -> List[Location]:
    """
    Load the location catalog from a file.

    The file may be JSON or YAML and holds either a list of location
    records or a mapping with a ``locations`` list.

    Args:
        path: Path to the catalog file. If None, the bundled catalog is used.

    Returns:
        Locations in catalog order

    Raises:
        ConfigurationError: If the file is missing, unparsable or invalid
    """
    file_path = Path(path) if path else DEFAULT_CATALOG_PATH

    if not file_path.exists():
        raise ConfigurationError(f"Location catalog not found: {file_path}")

    logger.info(f"Loading location catalog from: {file_path}")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            if file_path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"Cannot parse location catalog {file_path}: {exc}") from exc
    except OSError as exc:
        raise ConfigurationError(f"Cannot read location catalog {file_path}: {exc}") from exc

    locations = parse_catalog(data)

    logger.info(f"Loaded location catalog: {len(locations)} locations")
    return locations


def parse_catalog(data: Any) -> List[Location]:
    """
    Build validated Location models from raw catalog data.

    Args:
        data: List of location dicts, or a dict with a ``locations`` key

    Returns:
        Locations in the given order

    Raises:
        ConfigurationError: If any record is invalid or ids repeat
    """
    if isinstance(data, dict):
        data = data.get("locations")
    if not isinstance(data, list):
        raise ConfigurationError("Location catalog must be a list of locations")

    locations = []
    for index, record in enumerate(data):
        try:
            locations.append(Location.model_validate(record))
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid location at index {index}: {exc}") from exc

    validate_catalog(locations)
    return locations


def validate_catalog(locations: Sequence[Location]) -> None:
    """
    Check catalog-level invariants.

    Raises:
        ConfigurationError: On a non-positive capacity or a duplicate id
    """
    seen = set()
    for location in locations:
        if location.capacity <= 0:
            raise ConfigurationError(
                f"Location {location.id!r} has non-positive capacity {location.capacity}"
            )
        if location.id in seen:
            raise ConfigurationError(f"Duplicate location id: {location.id!r}")
        seen.add(location.id)
