"""Core configuration data types for the conversion generator.

This module defines the fundamental data structures used throughout the
configuration system, following the resolve-once, freeze-then-flow pattern.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, NamedTuple

# --- Source Tracking Types ---

ConfigOrigin = Literal["programmatic", "env", "file", "default"]
SourceMap = Mapping[str, ConfigOrigin]

# --- Core Configuration Data ---


class ResolvedConfig(NamedTuple):
    """Configuration after resolution from all sources, before freezing.

    This represents the validated, merged result of combining programmatic
    overrides, environment variables, pyproject.toml and defaults, plus the
    origin of every value.
    """

    crate_dir: Path
    out_dir: Path
    docs_path: Path
    parameter_name: str
    comment_width: int
    run_toolchain: bool
    toolchain_commands: tuple[str, ...]
    cargo: str
    highlight_style: str
    highlight_background: str

    # Audit metadata - tracks where each field value came from
    origin: SourceMap

    def to_frozen(self) -> "FrozenConfig":
        """Convert to the immutable configuration used in the pipeline."""
        values = self._asdict()
        values.pop("origin")
        return FrozenConfig(**values)

    def with_overrides(self, **overrides: object) -> "ResolvedConfig":
        """Create a new ResolvedConfig with programmatic overrides applied.

        Unknown fields are ignored.
        """
        new_values = self._asdict()
        new_origin = dict(self.origin)

        for field, value in overrides.items():
            if field in new_values and field != "origin":
                new_values[field] = value
                new_origin[field] = "programmatic"

        new_values["origin"] = new_origin
        return ResolvedConfig(**new_values)

    def audit(self) -> str:
        """Return one `field: origin:value` line per field."""
        lines = []
        for field, value in self._asdict().items():
            if field == "origin":
                continue
            lines.append(f"{field}: {self.origin.get(field, 'default')}:{value}")
        return "\n".join(lines)


@dataclass(frozen=True, slots=True)
class FrozenConfig:
    """Immutable configuration that flows through the pipeline."""

    crate_dir: Path = Path("gen")
    out_dir: Path = Path("gen/src")
    docs_path: Path = Path("docs/index.html")
    parameter_name: str = "input"
    comment_width: int = 72
    run_toolchain: bool = True
    toolchain_commands: tuple[str, ...] = ("fmt", "clippy", "build")
    cargo: str = "cargo"
    highlight_style: str = "default"
    highlight_background: str = "#f3f6fa"
