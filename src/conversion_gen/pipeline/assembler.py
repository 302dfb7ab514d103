"""Assembly stage: group functions into one Rust module per source anchor.

Also produces the crate root declaring every module. Each module carries its
own grouped imports, computed from the functions it contains.
"""

from __future__ import annotations

import logging
import typing

from conversion_gen.core.exceptions import ConfigurationError
from conversion_gen.core.types import (
    Failure,
    GeneratedModule,
    GenerationResult,
    Result,
    Success,
    SynthesizedCommand,
)
from conversion_gen.pipeline.base import BaseHandler
from conversion_gen.pipeline.imports import ImportAggregator

if typing.TYPE_CHECKING:
    from conversion_gen.catalog import Catalog, Kind
    from conversion_gen.core.types import GeneratedFunction

log = logging.getLogger(__name__)

LIB_HEADER = """\
// The conversion functions use some argument types that you don't
// ordinarily see, such as `&String`. The types are normally implicit,
// for example `String::as_str` takes a `&String`. Since all of our
// conversions are in separate functions, we have to explicitly use
// these types.
#![allow(clippy::ptr_arg)]
"""


def module_name(anchor: Kind, catalog: Catalog) -> str:
    return f"from_{catalog.kinds.short_name(anchor)}"


def build_module(
    anchor: Kind,
    functions: typing.Sequence[GeneratedFunction],
    catalog: Catalog,
) -> GeneratedModule:
    """Render one module: grouped `use` lines, then every function."""
    aggregator = ImportAggregator()
    for function in functions:
        aggregator.add(function.imports)

    parts = []
    uses = aggregator.render()
    if uses:
        parts.append(uses)
    parts.extend(function.render() for function in functions)

    return GeneratedModule(
        name=module_name(anchor, catalog),
        source="\n\n".join(parts) + "\n",
        anchor=anchor,
        functions=tuple(functions),
        imports=aggregator.combined(),
    )


def build_lib(modules: typing.Sequence[GeneratedModule]) -> GeneratedModule:
    """Render the crate root declaring `modules` in order."""
    pub_mods = "".join(f"pub mod {module.name};\n" for module in modules)
    return GeneratedModule(name="lib", source=f"{LIB_HEADER}\n{pub_mods}")


class ModuleAssembler(
    BaseHandler[SynthesizedCommand, GenerationResult, ConfigurationError]
):
    """Builds the per-anchor modules and the crate root."""

    def handle(
        self, command: SynthesizedCommand
    ) -> Result[GenerationResult, ConfigurationError]:
        catalog = command.initial.catalog
        try:
            modules = []
            for anchor in catalog.anchors:
                functions = [f for f in command.functions if f.source == anchor]
                if not functions:
                    raise ConfigurationError(
                        f"no conversions generated from {anchor!r}"
                    )
                modules.append(build_module(anchor, functions, catalog))
        except ConfigurationError as e:
            return Failure(e)

        log.debug("Assembled %d modules", len(modules))
        return Success(
            GenerationResult(modules=tuple(modules), lib=build_lib(modules))
        )
