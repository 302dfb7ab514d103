"""Base protocol for pipeline handlers."""

from typing import Protocol, TypeVar

from conversion_gen.core.exceptions import ConversionGenError
from conversion_gen.core.types import Result

# Contravariant input (handlers can accept supertypes), invariant output
T_In = TypeVar("T_In", contravariant=True)
T_Out = TypeVar("T_Out")
T_Error = TypeVar("T_Error", bound=ConversionGenError)


class BaseHandler(Protocol[T_In, T_Out, T_Error]):
    """Protocol for pipeline handlers.

    Each handler performs a single transformation on the command object,
    making it easy to test and reason about. Generation is synchronous, so
    handlers are plain methods rather than coroutines.
    """

    def handle(self, command: T_In) -> Result[T_Out, T_Error]:
        """Process a command object.

        Args:
            command: The input command state from the previous pipeline stage.

        Returns:
            A Result object containing either the next command state or an error.
        """
        ...
