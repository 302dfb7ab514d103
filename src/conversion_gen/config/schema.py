"""Configuration schema and validation using Pydantic.

This module defines the settings schema that validates and coerces
configuration values from the various sources (environment, pyproject.toml,
programmatic) into the correct types with proper defaults.
"""

from pathlib import Path
import re
from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

_IDENTIFIER = re.compile(r"^[a-z_][a-z0-9_]*$")
_RUST_KEYWORDS = frozenset(
    {
        "_", "as", "async", "await", "break", "const", "continue", "crate",
        "dyn", "else", "enum", "extern", "false", "fn", "for", "if", "impl",
        "in", "let", "loop", "match", "mod", "move", "mut", "pub", "ref",
        "return", "self", "static", "struct", "super", "trait", "true",
        "type", "unsafe", "use", "where", "while",
        # reserved
        "abstract", "become", "box", "do", "final", "gen", "macro",
        "override", "priv", "try", "typeof", "unsized", "virtual", "yield",
    }
)  # fmt: skip
_HEX_COLOUR = re.compile(r"^#[0-9a-fA-F]{6}$")

DEFAULT_TOOLCHAIN_COMMANDS: tuple[str, ...] = ("fmt", "clippy", "build")


class GeneratorSettings(BaseSettings):
    """Pydantic settings schema for the conversion generator.

    Handles validation, type coercion, and default values for all
    configuration fields. Environment variables use the CONVERSION_GEN_
    prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="CONVERSION_GEN_",
        env_file=None,
        case_sensitive=False,
        extra="ignore",
    )

    # --- Output locations ---

    crate_dir: Path = Field(
        default=Path("gen"),
        description="Cargo crate the generated modules belong to",
    )

    out_dir: Path = Field(
        default=Path("gen/src"),
        description="Directory the generated .rs files are written to",
    )

    docs_path: Path = Field(
        default=Path("docs/index.html"),
        description="Path of the rendered documentation page",
    )

    # --- Code shape ---

    parameter_name: str = Field(
        default="input",
        description="Parameter name used in every generated function",
    )

    comment_width: int = Field(
        default=72,
        description="Line width doc comments are wrapped to",
        ge=20,
        le=200,
    )

    # --- Toolchain ---

    run_toolchain: bool = Field(
        default=True,
        description="Run cargo on the generated crate before rendering docs",
    )

    toolchain_commands: Annotated[tuple[str, ...], NoDecode] = Field(
        default=DEFAULT_TOOLCHAIN_COMMANDS,
        description="cargo subcommands run in order after generation",
    )

    cargo: str = Field(
        default="cargo",
        description="cargo executable",
        min_length=1,
    )

    # --- Documentation ---

    highlight_style: str = Field(
        default="default",
        description="Pygments style used for highlighted source",
        min_length=1,
    )

    highlight_background: str = Field(
        default="#f3f6fa",
        description="Background colour of highlighted code blocks",
    )

    # --- Validation Rules ---

    @field_validator("parameter_name")
    @classmethod
    def check_parameter_name(cls, v: str) -> str:
        """Parameter names must be valid Rust identifiers."""
        if not _IDENTIFIER.match(v):
            raise ValueError(f"Invalid parameter name: {v!r}")
        if v in _RUST_KEYWORDS:
            raise ValueError(f"Parameter name {v!r} is a Rust keyword")
        return v

    @field_validator("highlight_background")
    @classmethod
    def check_background(cls, v: str) -> str:
        if not _HEX_COLOUR.match(v):
            raise ValueError(f"Invalid colour: {v!r}. Expected #rrggbb")
        return v.lower()

    @field_validator("toolchain_commands", mode="before")
    @classmethod
    def parse_commands(cls, v: Any) -> Any:
        """Accept a comma-separated string as well as a sequence."""
        if isinstance(v, str):
            return tuple(part.strip() for part in v.split(",") if part.strip())
        return v

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary suitable for origin tracking."""
        return {name: getattr(self, name) for name in type(self).model_fields}
