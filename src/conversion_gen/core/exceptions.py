"""Exceptions raised by the conversion generator.

Two families matter at runtime. Configuration errors mean the catalog itself
is incomplete or inconsistent; they abort the generation pass before anything
is written. Collaborator errors come from the tools at the edge (cargo,
pygments, jinja2) and are propagated unchanged.
"""

from __future__ import annotations


class ConversionGenError(Exception):
    """Base exception for conversion generator errors."""


class ConfigurationError(ConversionGenError):
    """Raised when the catalog is incomplete or inconsistent."""


class MissingKindError(ConfigurationError):
    """Raised when a representation kind has no catalog entry."""

    def __init__(self, kind: object) -> None:
        self.kind = kind
        super().__init__(f"no catalog entry for kind {kind!r}")


class MissingChainError(ConfigurationError):
    """Raised when an anchor pair has no registered chain."""

    def __init__(self, source: object, destination: object) -> None:
        self.source = source
        self.destination = destination
        super().__init__(f"invalid conversion chain: {source!r} -> {destination!r}")


class MissingTransformError(ConfigurationError):
    """Raised when a chain step has no registered single-step transform."""

    def __init__(
        self,
        source: object,
        destination: object,
        chain: tuple[object, ...] | None = None,
    ) -> None:
        self.source = source
        self.destination = destination
        self.chain = chain
        message = f"invalid direct conversion: {source!r} -> {destination!r}"
        if chain:
            message += f" (in chain {' -> '.join(repr(k) for k in chain)})"
        super().__init__(message)


class DuplicateTransformError(ConfigurationError):
    """Raised when two transforms are registered for the same kind pair."""

    def __init__(self, source: object, destination: object) -> None:
        self.source = source
        self.destination = destination
        super().__init__(
            f"duplicate direct conversion: {source!r} -> {destination!r}"
        )


class CollaboratorError(ConversionGenError):
    """Raised when an external collaborator (build tool, highlighter, template) fails."""


class ToolchainError(CollaboratorError):
    """Raised when a cargo invocation fails or cannot be started."""

    def __init__(
        self,
        operation: str,
        message: str,
        *,
        returncode: int | None = None,
    ) -> None:
        self.operation = operation
        self.returncode = returncode
        super().__init__(f"cargo {operation} failed: {message}")


class HighlightError(CollaboratorError):
    """Raised when syntax highlighting fails."""


class TemplateError(CollaboratorError):
    """Raised when the documentation page template cannot be rendered."""


class PipelineError(ConversionGenError):
    """Raised when a pipeline stage returns a failure.

    Carries the name of the stage that failed and the original error so
    callers can report the offending pair or chain step.
    """

    def __init__(
        self,
        message: str,
        handler_name: str,
        underlying_error: Exception | None = None,
    ) -> None:
        self.handler_name = handler_name
        self.underlying_error = underlying_error
        super().__init__(f"{handler_name}: {message}")


class InvariantViolationError(ConversionGenError):
    """Raised when the executor detects a broken stage contract."""

    def __init__(self, message: str, *, stage_name: str | None = None) -> None:
        self.stage_name = stage_name
        super().__init__(message)
