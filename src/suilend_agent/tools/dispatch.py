"""Dispatch layer: positional invocation to a single normalized envelope."""
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from ..common.types import ArgumentBindingError, Envelope, dump_envelopes
from .envelope import format_error, format_response, render_query
from .tool_registry import OperationCatalogue
from .tool_types import Operation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Outcome:
    """Result of one handler invocation: a value or the failure it raised."""
    value: Any = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ToolDispatcher:
    """Invoke catalogue operations by name and normalize their outcome."""

    def __init__(self, catalogue: OperationCatalogue):
        if not catalogue.frozen:
            catalogue.freeze()
        self.catalogue = catalogue

    async def _run(self, operation: Operation, arguments: Dict[str, Any]) -> Outcome:
        try:
            params = operation.params_model.model_validate(arguments)
            return Outcome(value=await operation.handler(params))
        except Exception as exc:
            return Outcome(error=exc)

    async def invoke(self, name: str, args: Sequence[Any]) -> List[Envelope]:
        """Invoke an operation with positional arguments.

        Raises OperationNotFoundError for unknown names; every other failure
        is returned as an error envelope.
        """
        operation = self.catalogue.get_operation(name)
        try:
            arguments = operation.bind(args)
        except ArgumentBindingError as exc:
            outcome = Outcome(error=exc)
            arguments = dict(zip(operation.parameter_names, args))
        else:
            logger.debug("Invoking %s", name, extra={"operation": name})
            outcome = await self._run(operation, arguments)

        envelope: Optional[Envelope] = None
        if outcome.ok:
            try:
                envelope = format_response(
                    outcome.value, render_query(operation.success_query, arguments)
                )
            except (TypeError, ValueError) as exc:
                outcome = Outcome(error=exc)
            else:
                logger.info("Operation %s succeeded", name, extra={"operation": name})
        if envelope is None:
            envelope = format_error(
                outcome.error,
                reasoning=operation.failure_reasoning,
                query=render_query(operation.failure_query, arguments),
            )
            logger.warning(
                "Operation %s failed: %s",
                name,
                envelope.errors,
                extra={"operation": name, "error_type": type(outcome.error).__name__},
            )
        return [envelope]

    async def invoke_json(self, name: str, args: Sequence[Any]) -> str:
        """Invoke an operation and return the envelope as JSON text."""
        return dump_envelopes(await self.invoke(name, args))
