"""The primary entry point for a generation pass.

The executor runs the stages in order (plan, compose, synthesize, assemble)
and guarantees that a pass either produces a complete `GenerationResult` or
raises. There is no partial output: the first failing stage aborts the pass
with a `PipelineError` naming that stage and carrying the original error.
"""

from __future__ import annotations

import logging
from time import perf_counter
from typing import TYPE_CHECKING, Any

from conversion_gen.catalog import default_catalog
from conversion_gen.config import FrozenConfig, resolve_config
from conversion_gen.core.exceptions import (
    InvariantViolationError,
    PipelineError,
)
from conversion_gen.core.types import (
    Failure,
    GenerationResult,
    InitialCommand,
    Success,
)
from conversion_gen.pipeline.assembler import ModuleAssembler
from conversion_gen.pipeline.compositor import ChainCompositor
from conversion_gen.pipeline.planner import ChainPlanner
from conversion_gen.pipeline.synthesizer import FunctionSynthesizer

if TYPE_CHECKING:
    from collections.abc import Iterable

    from conversion_gen.catalog import Catalog
    from conversion_gen.pipeline.base import BaseHandler

log = logging.getLogger(__name__)


def _stage_name(handler: Any) -> str:
    return type(handler).__name__


class GenerationExecutor:
    """Runs a generation pass through a pipeline of handlers."""

    def __init__(
        self,
        config: FrozenConfig,
        catalog: Catalog | None = None,
        pipeline_handlers: Iterable[BaseHandler[Any, Any, Any]] | None = None,
    ):
        """Initialize the executor.

        Args:
            config: Frozen configuration for the pass.
            catalog: Catalog to generate from; defaults to the built-in one.
            pipeline_handlers: Optional handlers overriding the default pipeline.
        """
        self.config = config
        self.catalog = catalog if catalog is not None else default_catalog()
        handlers = list(pipeline_handlers or self._build_default_pipeline())
        if not handlers:
            raise ValueError("Pipeline may not be empty; provide at least one handler.")
        for handler in handlers:
            if not callable(getattr(handler, "handle", None)):
                raise TypeError(
                    f"{_stage_name(handler)} does not implement handle(command)"
                )
        self._pipeline = handlers

    @staticmethod
    def _build_default_pipeline() -> list[Any]:
        return [
            ChainPlanner(),
            ChainCompositor(),
            FunctionSynthesizer(),
            ModuleAssembler(),
        ]

    def execute(self) -> GenerationResult:
        """Run every stage and return the generated modules.

        Raises:
            PipelineError: If any stage returns a failure result.
            InvariantViolationError: If a stage breaks the handler contract
                or the pass ends without a `GenerationResult`.
        """
        current: Any = InitialCommand(catalog=self.catalog, config=self.config)
        last_stage_name = None

        for handler in self._pipeline:
            last_stage_name = _stage_name(handler)
            start = perf_counter()
            result = handler.handle(current)
            log.debug(
                "Stage %s finished in %.4fs", last_stage_name, perf_counter() - start
            )

            if not isinstance(result, Success | Failure):
                raise InvariantViolationError(
                    "Handler returned a non-Result value; expected Success|Failure.",
                    stage_name=last_stage_name,
                )
            if isinstance(result, Failure):
                raise PipelineError(str(result.error), last_stage_name, result.error)
            current = result.value

        if not isinstance(current, GenerationResult):
            raise InvariantViolationError(
                "Executor ended without a GenerationResult; ensure the final "
                "stage assembles the modules (e.g., ModuleAssembler).",
                stage_name=last_stage_name,
            )
        log.info(
            "Generated %d functions in %d modules",
            len(current.functions),
            len(current.modules),
        )
        return current

    @property
    def stage_names(self) -> tuple[str, ...]:
        """Return the current pipeline's stage names in execution order."""
        return tuple(_stage_name(h) for h in self._pipeline)


def create_executor(
    config: FrozenConfig | None = None,
    catalog: Catalog | None = None,
) -> GenerationExecutor:
    """Create an executor, resolving configuration when none is given.

    This is the only place where ambient configuration is resolved.
    """
    final_config = config if config is not None else resolve_config().to_frozen()
    return GenerationExecutor(final_config, catalog)


def generate(
    config: FrozenConfig | None = None,
    catalog: Catalog | None = None,
) -> GenerationResult:
    """Run a full generation pass."""
    return create_executor(config, catalog).execute()
