"""Catalogue assembly and agent-facing adapters."""
from typing import Any, List

from langchain_core.tools import BaseTool

from ..common.types import ArgumentBindingError
from .dispatch import ToolDispatcher
from .suilend import register_suilend_tools
from .tool_registry import OperationCatalogue
from .tool_types import ClientProvider, Operation, TransactionFactory


def build_catalogue(
    client_provider: ClientProvider,
    transaction_factory: TransactionFactory,
) -> OperationCatalogue:
    """Build the frozen catalogue of all lending tools."""
    catalogue = OperationCatalogue()
    register_suilend_tools(catalogue, client_provider, transaction_factory)
    catalogue.freeze()
    return catalogue


def create_dispatcher(
    client_provider: ClientProvider,
    transaction_factory: TransactionFactory,
) -> ToolDispatcher:
    """Get a dispatcher over a freshly built catalogue."""
    return ToolDispatcher(build_catalogue(client_provider, transaction_factory))


class CatalogueTool(BaseTool):
    """LangChain tool that runs one catalogue operation and returns envelope JSON.

    ``_arun`` takes only the operation's keyword arguments: a parameter named
    ``config`` (reserve operations) must reach the operation rather than be
    bound to the runnable config.
    """
    dispatcher: ToolDispatcher
    operation: Operation

    def _run(self, **kwargs: Any) -> str:
        raise NotImplementedError(f"{self.name} only supports async invocation")

    async def _arun(self, **kwargs: Any) -> str:
        names = self.operation.parameter_names
        missing = [name for name in names if name not in kwargs]
        if missing:
            raise ArgumentBindingError(f"{self.name} is missing arguments: {missing}")
        return await self.dispatcher.invoke_json(
            self.operation.name, [kwargs[name] for name in names]
        )


def as_langchain_tools(dispatcher: ToolDispatcher) -> List[BaseTool]:
    """Expose every catalogue operation as a LangChain tool returning envelope JSON."""
    return [
        CatalogueTool(
            name=operation.name,
            description=operation.description,
            args_schema=operation.params_model,
            dispatcher=dispatcher,
            operation=operation,
        )
        for operation in dispatcher.catalogue.list_operations()
    ]
