"""Lending tools, their catalogue and dispatcher."""
from .dispatch import ToolDispatcher
from .suilend import SuilendTools, register_suilend_tools
from .tool_registry import OperationCatalogue

__all__ = [
    "OperationCatalogue",
    "SuilendTools",
    "ToolDispatcher",
    "register_suilend_tools",
]
