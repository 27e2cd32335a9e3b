"""
Filter profile loader.

A filter profile names the members of one kind of entity that should (or
shouldn't) be translated, so callers don't have to repeat the lists:

    # config/filters/employee.yaml
    entity: Employee
    translate:
      - Description
      - Manager.Description
    ignore:
      - Manager.Name

Profiles are loaded from every *.yaml / *.yml file of a directory.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from lingograph.core.filters import FilterSpec

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when a filter profile file is invalid."""
    pass


class ConfigLoader:
    """
    Loads filter profiles from a directory.

    Usage:
        loader = ConfigLoader("config/filters")
        loader.load_all()
        spec = loader.get_profile("Employee")
    """

    def __init__(self, config_dir: Path | str | None = None):
        # Default to config/filters relative to the package's parent
        if config_dir is None:
            config_dir = Path(__file__).parent.parent / "config" / "filters"
        self.config_dir = Path(config_dir)
        self.profiles: dict[str, FilterSpec] = {}

    def load_all(self) -> dict[str, FilterSpec]:
        """
        Load every profile file in the directory.

        Returns:
            Dict of entity name -> FilterSpec
        """
        if not self.config_dir.exists():
            logger.info(f"No filter profiles directory at {self.config_dir}")
            return self.profiles

        paths = sorted([*self.config_dir.glob("*.yaml"), *self.config_dir.glob("*.yml")])
        for path in paths:
            entity, spec = self.load_filter_profile(path)
            self.profiles[entity] = spec

        logger.info(f"Loaded {len(self.profiles)} filter profiles from {self.config_dir}")
        return self.profiles

    def load_filter_profile(self, path: Path | str) -> tuple[str, FilterSpec]:
        """Load one profile from YAML."""
        path = Path(path)
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

        return parse_filter_profile(data, source=str(path))

    def get_profile(self, entity_name: str) -> FilterSpec | None:
        """Get the profile for an entity name (case-insensitive)."""
        wanted = entity_name.lower()
        for entity, spec in self.profiles.items():
            if entity.lower() == wanted:
                return spec
        return None


def parse_filter_profile(data: Any, source: str = "<profile>") -> tuple[str, FilterSpec]:
    """Validate a profile mapping and turn it into (entity, FilterSpec)."""
    if not isinstance(data, dict):
        raise ConfigError(f"{source}: expected a mapping")

    entity = data.get("entity")
    if not entity or not isinstance(entity, str):
        raise ConfigError(f"{source}: 'entity' is required")

    lists: dict[str, list[str]] = {}
    for key in ("translate", "ignore"):
        value = data.get(key) or []
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise ConfigError(f"{source}: '{key}' must be a list of strings")
        lists[key] = value

    return entity, FilterSpec.of(lists["translate"], lists["ignore"])


def load_filter_profiles(config_dir: Path | str | None = None) -> dict[str, FilterSpec]:
    """
    Convenience function to load all filter profiles.

    Returns:
        Dict of entity name -> FilterSpec
    """
    return ConfigLoader(config_dir).load_all()
