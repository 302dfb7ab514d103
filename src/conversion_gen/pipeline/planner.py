"""Planning stage: resolve every anchor pair to its curated chains.

Anchors are walked in declared order so the generated output stays
byte-stable across runs. A pair with no chain aborts the whole pass here,
before anything has been composed or written.
"""

from __future__ import annotations

import logging

from conversion_gen.core.exceptions import ConfigurationError
from conversion_gen.core.types import (
    ConversionTask,
    Failure,
    InitialCommand,
    PlannedCommand,
    Result,
    Success,
)
from conversion_gen.pipeline.base import BaseHandler

log = logging.getLogger(__name__)


class ChainPlanner(BaseHandler[InitialCommand, PlannedCommand, ConfigurationError]):
    """Expands the anchor set into one task per (anchor pair, chain)."""

    def handle(
        self, command: InitialCommand
    ) -> Result[PlannedCommand, ConfigurationError]:
        catalog = command.catalog
        tasks: list[ConversionTask] = []
        try:
            catalog.validate()
            for source in catalog.anchors:
                for destination in catalog.anchors:
                    if source == destination:
                        continue
                    for chain in catalog.chains.chains_for(source, destination):
                        tasks.append(ConversionTask(source, destination, chain))
        except ConfigurationError as e:
            return Failure(e)

        log.debug(
            "Planned %d conversions over %d anchors",
            len(tasks),
            len(catalog.anchors),
        )
        return Success(PlannedCommand(initial=command, tasks=tuple(tasks)))
