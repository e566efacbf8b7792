"""Operation catalogue implementation."""
import inspect
from typing import Dict, List, Sequence, Type

from pydantic import BaseModel

from ..common.types import OperationMetadata, ParameterSpec, RegistrationError
from ..core.registry_base import RegistryBase
from .tool_types import Handler, Operation


class ToolRegistryError(RegistrationError):
    """Specific error type for catalogue registration."""
    pass


class OperationCatalogue(RegistryBase[Operation, OperationMetadata]):
    """Append-only catalogue of named operations."""

    def _validate_item(self, name: str, operation: Operation) -> None:
        """Validate the operation's schema matches its typed params model."""
        if not inspect.iscoroutinefunction(operation.handler):
            raise ToolRegistryError(f"Handler for {name} must be a coroutine function")
        declared = operation.parameter_names
        if len(set(declared)) != len(declared):
            raise ToolRegistryError(f"Duplicate parameter names for {name}: {declared}")
        fields = list(operation.params_model.model_fields)
        if sorted(declared) != sorted(fields):
            raise ToolRegistryError(
                f"Parameters of {name} do not match {operation.params_model.__name__}: "
                f"{declared} != {fields}"
            )

    def _metadata_for(self, name: str, operation: Operation) -> OperationMetadata:
        return OperationMetadata(
            name=name,
            description=operation.description,
            category=operation.category,
            parameters=list(operation.parameters),
        )

    def register(
        self,
        name: str,
        description: str,
        parameters: Sequence[ParameterSpec],
        handler: Handler,
        *,
        params_model: Type[BaseModel],
        category: str = "core",
        success_query: str = "",
        failure_reasoning: str = "Operation failed",
        failure_query: str = "",
    ) -> Operation:
        """Register one operation."""
        operation = Operation(
            name=name,
            description=description,
            parameters=tuple(parameters),
            handler=handler,
            params_model=params_model,
            category=category,
            success_query=success_query,
            failure_reasoning=failure_reasoning,
            failure_query=failure_query,
        )
        self._register(name, operation, category)
        return operation

    def get_operation(self, name: str) -> Operation:
        """Get an operation by name."""
        return self.get_item(name)

    def list_operations(self) -> List[Operation]:
        """Get all operations in registration order."""
        return [self._instances[name] for name in self.list_items()]

    def get_operations_by_category(self, category: str) -> Dict[str, Operation]:
        return self.get_by_category(category)

    def describe(self) -> List[OperationMetadata]:
        """Get serializable metadata for every operation."""
        return [self.metadata[name] for name in self.list_items()]
