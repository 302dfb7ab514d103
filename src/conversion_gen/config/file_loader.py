"""File-based configuration loading with profile support.

Configuration lives in the nearest pyproject.toml under
`[tool.conversion_gen]`, with named profiles under
`[tool.conversion_gen.profiles.<name>]`.
"""

from pathlib import Path
import tomllib
from typing import Any


class ConfigFileError(Exception):
    """Raised when configuration file loading fails."""

    def __init__(
        self, file_path: Path, message: str, cause: Exception | None = None
    ) -> None:
        """Initialize with file path, message, and optional cause.

        Args:
            file_path: The file that failed to load
            message: Human-readable error message
            cause: The underlying exception that caused the failure
        """
        self.file_path = file_path
        self.message = message
        self.cause = cause
        super().__init__(f"Config file error in {file_path}: {message}")


class FileConfigLoader:
    """Loads configuration from pyproject.toml with profile support."""

    section = "conversion_gen"

    def load_project_config(
        self, project_root: Path | None = None, profile: str | None = None
    ) -> dict[str, Any]:
        """Load configuration from pyproject.toml in the project root.

        Args:
            project_root: Directory to search for pyproject.toml. If None,
                         searches current directory and parents.
            profile: Optional profile name to load from
                    [tool.conversion_gen.profiles.<name>], layered over the
                    base section.

        Returns:
            Dictionary of configuration values from the file.
            Empty dict if file doesn't exist or has no conversion_gen section.

        Raises:
            ConfigFileError: If file exists but cannot be parsed, or the
                profile is not defined.
        """
        pyproject_path = self.find_pyproject_toml(project_root)
        if not pyproject_path:
            return {}

        try:
            with Path(pyproject_path).open(mode="rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigFileError(
                pyproject_path, f"Failed to parse TOML: {e}", cause=e
            ) from e

        section = data.get("tool", {}).get(self.section, {})
        if not isinstance(section, dict):
            raise ConfigFileError(
                pyproject_path, f"[tool.{self.section}] must be a table"
            )

        config = dict(section)
        profiles = config.pop("profiles", {})
        if profile:
            if profile not in profiles:
                available = list(profiles.keys()) if profiles else []
                raise ConfigFileError(
                    pyproject_path,
                    f"Profile '{profile}' not found. Available profiles: {available}",
                )
            config.update(profiles[profile])
        return config

    def list_profiles(self, project_root: Path | None = None) -> list[str]:
        """List the profile names defined in pyproject.toml."""
        pyproject_path = self.find_pyproject_toml(project_root)
        if not pyproject_path:
            return []
        try:
            with Path(pyproject_path).open(mode="rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError):
            return []
        section = data.get("tool", {}).get(self.section, {})
        return list(section.get("profiles", {}).keys())

    def find_pyproject_toml(self, start_dir: Path | None = None) -> Path | None:
        """Find pyproject.toml by searching up the directory tree."""
        if start_dir is None:
            start_dir = Path.cwd()

        current = Path(start_dir).resolve()

        while current != current.parent:
            pyproject_path = current / "pyproject.toml"
            if pyproject_path.exists():
                return pyproject_path
            current = current.parent

        return None
