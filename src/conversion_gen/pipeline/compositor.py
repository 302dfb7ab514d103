"""Composition stage: fold each chain into a single expression.

Folding left to right mirrors function composition: as long as every
registered transform is locally correct, the composed expression type-checks
end to end, so catalog authors only reason about one hop at a time.
"""

from __future__ import annotations

import logging
import typing

from conversion_gen.core.exceptions import ConfigurationError, MissingTransformError
from conversion_gen.core.types import (
    ComposedCommand,
    ComposedConversion,
    Failure,
    PlannedCommand,
    Result,
    Success,
)
from conversion_gen.pipeline.base import BaseHandler

if typing.TYPE_CHECKING:
    from conversion_gen.catalog import Catalog, Chain

log = logging.getLogger(__name__)


def compose_chain(
    chain: Chain, catalog: Catalog, *, parameter: str = "input"
) -> ComposedConversion:
    """Fold `chain` into one expression over `parameter`.

    Imports of every kind in the chain and of every transform applied are
    collected, and the Unix-only flag of any step taints the whole chain.

    Raises:
        ConfigurationError: If the chain is empty.
        MissingTransformError: If a step has no registered transform.
    """
    if not chain:
        raise ConfigurationError("cannot compose an empty chain")

    kinds = catalog.kinds
    expr = parameter
    unix_only = False
    imports: set[str] = set(kinds.imports(chain[0]))

    for source, destination in zip(chain, chain[1:]):
        try:
            transform = catalog.transforms.lookup(source, destination)
        except MissingTransformError as e:
            raise MissingTransformError(source, destination, tuple(chain)) from e
        expr = transform.apply(expr)
        imports.update(kinds.imports(source))
        imports.update(kinds.imports(destination))
        imports.update(transform.imports)
        unix_only = unix_only or transform.unix_only

    return ComposedConversion(
        chain=tuple(chain),
        expr=expr,
        input_type=kinds.type_str(chain[0]),
        output_type=kinds.type_str(chain[-1]),
        unix_only=unix_only,
        lossy=kinds.is_lossy(chain[-1]),
        imports=frozenset(imports),
    )


class ChainCompositor(
    BaseHandler[PlannedCommand, ComposedCommand, ConfigurationError]
):
    """Composes every planned chain."""

    def handle(
        self, command: PlannedCommand
    ) -> Result[ComposedCommand, ConfigurationError]:
        catalog = command.initial.catalog
        parameter = command.initial.config.parameter_name
        try:
            conversions = tuple(
                (task, compose_chain(task.chain, catalog, parameter=parameter))
                for task in command.tasks
            )
        except ConfigurationError as e:
            return Failure(e)

        log.debug("Composed %d chains", len(conversions))
        return Success(ComposedCommand(planned=command, conversions=conversions))
