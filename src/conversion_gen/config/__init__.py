"""Configuration management for the conversion generator.

Resolve once, freeze, then flow: `resolve_config()` merges every source into
a `ResolvedConfig` with origin tracking, and `.to_frozen()` produces the
immutable `FrozenConfig` handed to the pipeline.
"""

from pathlib import Path
from typing import Any

from .file_loader import ConfigFileError, FileConfigLoader
from .resolver import ConfigResolver
from .schema import GeneratorSettings
from .types import ConfigOrigin, FrozenConfig, ResolvedConfig, SourceMap

_resolver = ConfigResolver()


def resolve_config(
    programmatic: dict[str, Any] | None = None,
    *,
    profile: str | None = None,
    project_root: Path | None = None,
) -> ResolvedConfig:
    """Resolve configuration from all sources with proper precedence.

    Programmatic > Environment > pyproject.toml > Defaults

    Args:
        programmatic: Dictionary of programmatic overrides (highest precedence).
                     Only known configuration fields are used.
        profile: Profile name from `[tool.conversion_gen.profiles]`. If None,
                uses the CONVERSION_GEN_PROFILE environment variable if set.
        project_root: Directory to search for pyproject.toml. If None,
                     searches current directory and parents.

    Returns:
        ResolvedConfig with merged values and source tracking.

    Example:
        config = resolve_config({"comment_width": 80})
        frozen = config.to_frozen()
    """
    return _resolver.resolve(
        programmatic=programmatic, profile=profile, project_root=project_root
    )


def list_available_profiles(project_root: Path | None = None) -> list[str]:
    """List the profile names defined in pyproject.toml."""
    return _resolver.list_profiles(project_root)


__all__ = [
    "ConfigFileError",
    "ConfigOrigin",
    "ConfigResolver",
    "FileConfigLoader",
    "FrozenConfig",
    "GeneratorSettings",
    "ResolvedConfig",
    "SourceMap",
    "list_available_profiles",
    "resolve_config",
]
