"""Generator for Rust string/byte/path conversion functions and their docs."""

import importlib.metadata
import logging

from conversion_gen.catalog import Catalog, Kind, default_catalog
from conversion_gen.config import FrozenConfig, ResolvedConfig, resolve_config
from conversion_gen.core.exceptions import (
    CollaboratorError,
    ConfigurationError,
    ConversionGenError,
    HighlightError,
    InvariantViolationError,
    MissingChainError,
    MissingTransformError,
    PipelineError,
    TemplateError,
    ToolchainError,
)
from conversion_gen.core.types import (
    ComposedConversion,
    GeneratedFunction,
    GeneratedModule,
    GenerationResult,
)
from conversion_gen.executor import GenerationExecutor, create_executor, generate
from conversion_gen.frontdoor import build, write_sources

# Version handling
try:
    __version__ = importlib.metadata.version("conversion-gen")
except importlib.metadata.PackageNotFoundError:
    __version__ = "development"

# Set up a null handler for the library's root logger.
# This prevents 'No handler found' errors if the consuming app has no logging configured.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [  # noqa: RUF022
    # Entry points
    "GenerationExecutor",
    "create_executor",
    "generate",
    "build",
    "write_sources",
    # Catalog
    "Catalog",
    "Kind",
    "default_catalog",
    # Configuration
    "FrozenConfig",
    "ResolvedConfig",
    "resolve_config",
    # Results
    "ComposedConversion",
    "GeneratedFunction",
    "GeneratedModule",
    "GenerationResult",
    # Exceptions
    "ConversionGenError",
    "ConfigurationError",
    "MissingChainError",
    "MissingTransformError",
    "CollaboratorError",
    "ToolchainError",
    "HighlightError",
    "TemplateError",
    "PipelineError",
    "InvariantViolationError",
]
