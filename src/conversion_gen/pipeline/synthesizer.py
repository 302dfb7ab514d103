"""Synthesis stage: turn composed conversions into Rust functions.

A function's name is derived from the anchor short identifiers plus
`_unix`/`_lossy` suffixes, its body is the composed expression, and its doc
comment is assembled from the Unix-only notice and the return type's notes.
"""

from __future__ import annotations

import logging
import textwrap
import typing

from conversion_gen.core.exceptions import ConfigurationError
from conversion_gen.core.types import (
    ComposedCommand,
    Failure,
    GeneratedFunction,
    Result,
    SynthesizedCommand,
    Success,
    format_comment,
)
from conversion_gen.pipeline.base import BaseHandler

if typing.TYPE_CHECKING:
    from conversion_gen.catalog import Catalog, Kind
    from conversion_gen.core.types import ComposedConversion

log = logging.getLogger(__name__)

UNIX_ONLY_NOTICE = "This conversion is only allowed on Unix."

DEFAULT_COMMENT_WIDTH = 72


class Comment:
    """Doc comment built from paragraphs rewrapped to a fixed width."""

    def __init__(self, width: int = DEFAULT_COMMENT_WIDTH) -> None:
        self.width = width
        self.paragraphs: list[str] = []

    def add_paragraph(self, text: str) -> None:
        # Source text may be broken across lines and indented; collapse all
        # whitespace before rewrapping.
        line = " ".join(text.split())
        if line:
            self.paragraphs.append(textwrap.fill(line, self.width))

    def format(self) -> str:
        return format_comment(self.paragraphs)


def function_name(
    source: Kind, destination: Kind, composed: ComposedConversion, catalog: Catalog
) -> str:
    """Return `<source>_to_<destination>` plus the variant suffix."""
    kinds = catalog.kinds
    return (
        f"{kinds.short_name(source)}_to_{kinds.short_name(destination)}"
        f"{composed.suffix}"
    )


def synthesize_function(
    source: Kind,
    destination: Kind,
    composed: ComposedConversion,
    *,
    catalog: Catalog,
    parameter: str = "input",
    comment_width: int = DEFAULT_COMMENT_WIDTH,
) -> GeneratedFunction:
    """Build the function for one anchor pair from its composed chain."""
    comment = Comment(comment_width)
    if composed.unix_only:
        comment.add_paragraph(UNIX_ONLY_NOTICE)
    for note in catalog.kinds.return_notes(composed.output_kind):
        comment.add_paragraph(note)

    return GeneratedFunction(
        name=function_name(source, destination, composed, catalog),
        source=source,
        destination=destination,
        parameter=parameter,
        input_type=composed.input_type,
        output_type=composed.output_type,
        body=composed.expr,
        comment=tuple(comment.paragraphs),
        imports=composed.imports,
        unix_only=composed.unix_only,
        lossy=composed.lossy,
    )


class FunctionSynthesizer(
    BaseHandler[ComposedCommand, SynthesizedCommand, ConfigurationError]
):
    """Synthesizes one function per composed conversion."""

    def handle(
        self, command: ComposedCommand
    ) -> Result[SynthesizedCommand, ConfigurationError]:
        initial = command.planned.initial
        functions: list[GeneratedFunction] = []
        seen: dict[str, tuple[Kind, Kind]] = {}
        try:
            for task, composed in command.conversions:
                function = synthesize_function(
                    task.source,
                    task.destination,
                    composed,
                    catalog=initial.catalog,
                    parameter=initial.config.parameter_name,
                    comment_width=initial.config.comment_width,
                )
                if function.name in seen:
                    raise ConfigurationError(
                        f"{task.source!r} -> {task.destination!r}: function name "
                        f"{function.name!r} already generated for "
                        f"{seen[function.name][0]!r} -> {seen[function.name][1]!r}"
                    )
                seen[function.name] = (task.source, task.destination)
                functions.append(function)
        except ConfigurationError as e:
            return Failure(e)

        log.debug("Synthesized %d functions", len(functions))
        return Success(
            SynthesizedCommand(composed=command, functions=tuple(functions))
        )
