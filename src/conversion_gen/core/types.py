"""Core data types that flow through the generation pipeline.

This module defines the immutable data structures that represent the state
of a generation pass as it moves through the stages: planned conversion
tasks, composed conversions, synthesized functions and the assembled
modules. Each stage transforms the data into a new state; nothing is mutated
after creation.
"""

from __future__ import annotations

import dataclasses
import typing

# --- Minimal guard helpers ---


def _is_tuple_of(value: object, typ: type | tuple[type, ...]) -> bool:
    return isinstance(value, tuple) and all(isinstance(v, typ) for v in value)


def _require(
    *,
    condition: bool,
    message: str,
    exc: type[Exception] = ValueError,
    field_name: str | None = None,
) -> None:
    """Centralized validation with optional field context for clearer errors."""
    if not condition:
        if field_name:
            enhanced_message = f"{field_name}: {message}"
            raise exc(enhanced_message)
        raise exc(message)


if typing.TYPE_CHECKING:
    from conversion_gen.catalog import Catalog
    from conversion_gen.catalog.kinds import Kind
    from conversion_gen.config import FrozenConfig

# --- Result Monad for Robust Error Handling ---
# Stages return Success|Failure instead of raising so the executor can name
# the failing stage when it aborts the pass.

TSuccess = typing.TypeVar("TSuccess")
TFailure = typing.TypeVar("TFailure", bound=Exception)


@dataclasses.dataclass(frozen=True, slots=True)
class Success(typing.Generic[TSuccess]):
    """A successful result in the pipeline."""

    value: TSuccess


@dataclasses.dataclass(frozen=True, slots=True)
class Failure(typing.Generic[TFailure]):
    """A failure in the pipeline, containing the error."""

    error: TFailure


Result = Success[TSuccess] | Failure[TFailure]

# --- Rendering helpers ---


def format_comment(paragraphs: typing.Iterable[str]) -> str:
    """Render wrapped paragraphs as `//` line comments.

    Paragraphs are joined with a blank comment line. Returns an empty string
    when there is nothing to say.
    """
    text = "\n\n".join(paragraphs)
    if not text:
        return ""
    return "".join(f"// {line}".rstrip() + "\n" for line in text.splitlines())


# --- Core Data Models ---


@dataclasses.dataclass(frozen=True, slots=True)
class ConversionTask:
    """One (anchor pair, chain) combination scheduled for synthesis."""

    source: Kind
    destination: Kind
    chain: tuple[Kind, ...]

    def __post_init__(self) -> None:
        """Validate the chain shape."""
        _require(
            condition=isinstance(self.chain, tuple) and len(self.chain) > 0,
            message="must be a non-empty tuple",
            field_name="chain",
            exc=TypeError,
        )
        _require(
            condition=self.source != self.destination,
            message=f"source and destination must differ, got {self.source!r}",
            field_name="source",
        )


@dataclasses.dataclass(frozen=True, slots=True)
class ComposedConversion:
    """A chain folded into a single expression plus accumulated metadata."""

    chain: tuple[Kind, ...]
    expr: str
    input_type: str
    output_type: str
    unix_only: bool
    lossy: bool
    imports: frozenset[str]

    @property
    def suffix(self) -> str:
        """Naming suffix for platform-restricted and lossy variants."""
        suffix = ""
        if self.unix_only:
            suffix += "_unix"
        if self.lossy:
            suffix += "_lossy"
        return suffix

    @property
    def input_kind(self) -> Kind:
        return self.chain[0]

    @property
    def output_kind(self) -> Kind:
        return self.chain[-1]


@dataclasses.dataclass(frozen=True, slots=True)
class GeneratedFunction:
    """A synthesized Rust conversion function.

    Created once per (anchor pair, chain) during a generation pass and
    never mutated afterwards.
    """

    name: str
    source: Kind
    destination: Kind
    parameter: str
    input_type: str
    output_type: str
    body: str
    comment: tuple[str, ...] = ()
    imports: frozenset[str] = frozenset()
    unix_only: bool = False
    lossy: bool = False

    def __post_init__(self) -> None:
        """Validate identifier and comment shape."""
        _require(
            condition=isinstance(self.name, str) and self.name.isidentifier(),
            message=f"must be an identifier, got {self.name!r}",
            field_name="name",
        )
        _require(
            condition=_is_tuple_of(self.comment, str),
            message="must be a tuple[str, ...]",
            field_name="comment",
            exc=TypeError,
        )

    @property
    def signature(self) -> str:
        return (
            f"pub fn {self.name}({self.parameter}: {self.input_type}) "
            f"-> {self.output_type}"
        )

    def render(self) -> str:
        """Return the function as Rust source, doc comment included."""
        return (
            f"{format_comment(self.comment)}"
            f"{self.signature} {{\n    {self.body}\n}}"
        )


@dataclasses.dataclass(frozen=True, slots=True)
class GeneratedModule:
    """Generated source text for one Rust module."""

    name: str
    source: str
    anchor: Kind | None = None
    functions: tuple[GeneratedFunction, ...] = ()
    imports: tuple[str, ...] = ()

    @property
    def filename(self) -> str:
        return f"{self.name}.rs"


@dataclasses.dataclass(frozen=True, slots=True)
class GenerationResult:
    """Terminal value of a generation pass."""

    modules: tuple[GeneratedModule, ...]
    lib: GeneratedModule

    @property
    def functions(self) -> tuple[GeneratedFunction, ...]:
        return tuple(f for module in self.modules for f in module.functions)

    def module_for(self, anchor: Kind) -> GeneratedModule:
        """Return the module generated for `anchor`."""
        for module in self.modules:
            if module.anchor == anchor:
                return module
        raise KeyError(anchor)


# --- Typed Command States ---


@dataclasses.dataclass(frozen=True, slots=True)
class InitialCommand:
    """The initial state of a generation pass."""

    catalog: Catalog
    config: FrozenConfig


@dataclasses.dataclass(frozen=True, slots=True)
class PlannedCommand:
    """Every anchor pair resolved to its chains, in declared anchor order."""

    initial: InitialCommand
    tasks: tuple[ConversionTask, ...]

    def __post_init__(self) -> None:
        """Validate task tuple."""
        _require(
            condition=_is_tuple_of(self.tasks, ConversionTask),
            message="must be a tuple[ConversionTask, ...]",
            field_name="tasks",
            exc=TypeError,
        )


@dataclasses.dataclass(frozen=True, slots=True)
class ComposedCommand:
    """Each planned task paired with its composed conversion."""

    planned: PlannedCommand
    conversions: tuple[tuple[ConversionTask, ComposedConversion], ...]


@dataclasses.dataclass(frozen=True, slots=True)
class SynthesizedCommand:
    """Synthesized functions, in task order."""

    composed: ComposedCommand
    functions: tuple[GeneratedFunction, ...]

    @property
    def initial(self) -> InitialCommand:
        return self.composed.planned.initial
