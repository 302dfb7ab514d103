"""Configuration resolution with precedence handling.

Merges configuration from all sources according to the documented order:
Programmatic > Environment > pyproject.toml > Defaults
"""

import logging
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .env_loader import EnvironmentConfigLoader
from .file_loader import FileConfigLoader
from .schema import GeneratorSettings
from .types import ConfigOrigin, ResolvedConfig

log = logging.getLogger(__name__)


class ConfigResolver:
    """Resolves configuration from multiple sources with proper precedence."""

    def __init__(self) -> None:
        """Initialize the configuration resolver."""
        self.file_loader = FileConfigLoader()
        self.env_loader = EnvironmentConfigLoader()

    def resolve(
        self,
        programmatic: dict[str, Any] | None = None,
        *,
        profile: str | None = None,
        project_root: Path | None = None,
    ) -> ResolvedConfig:
        """Resolve configuration from all sources with proper precedence.

        Args:
            programmatic: Programmatic overrides (highest precedence)
            profile: Profile name to load from pyproject.toml
            project_root: Directory to search for pyproject.toml

        Returns:
            ResolvedConfig with merged values and source tracking.

        Raises:
            ValueError: If validation fails.
            ConfigFileError: If pyproject.toml is malformed or the profile
                does not exist.
        """
        origin: dict[str, ConfigOrigin] = {}
        merged: dict[str, Any] = {}

        if profile is None:
            profile = os.getenv("CONVERSION_GEN_PROFILE")

        # Step 1: schema defaults
        for field, info in GeneratorSettings.model_fields.items():
            merged[field] = info.default
            origin[field] = "default"

        # Step 2: pyproject.toml
        file_config = self.file_loader.load_project_config(
            project_root=project_root, profile=profile
        )
        self._apply(merged, origin, file_config, "file")

        # Step 3: environment variables
        self._apply(merged, origin, self.env_loader.load_env_config(), "env")

        # Step 4: programmatic overrides
        if programmatic:
            self._apply(merged, origin, programmatic, "programmatic")

        # Step 5: validate the merged result
        try:
            settings = GeneratorSettings(**merged)
        except ValidationError as e:
            raise ValueError(f"Configuration validation failed: {e}") from e

        values = settings.to_dict()
        log.debug("Resolved configuration origins: %s", origin)
        return ResolvedConfig(**values, origin=origin)

    def list_profiles(self, project_root: Path | None = None) -> list[str]:
        return self.file_loader.list_profiles(project_root)

    @staticmethod
    def _apply(
        merged: dict[str, Any],
        origin: dict[str, ConfigOrigin],
        values: dict[str, Any],
        source: ConfigOrigin,
    ) -> None:
        for field, value in values.items():
            if field in merged:  # Only override known fields
                merged[field] = value
                origin[field] = source
            else:
                log.debug("Ignoring unknown %s config field %r", source, field)
