"""LLM-callable tool catalogue for the Suilend lending protocol."""
from .common.types import ErrorEnvelope, SuccessEnvelope, load_envelopes
from .tools.dispatch import ToolDispatcher
from .tools.tool_manager import as_langchain_tools, build_catalogue, create_dispatcher

__all__ = [
    "ErrorEnvelope",
    "SuccessEnvelope",
    "ToolDispatcher",
    "as_langchain_tools",
    "build_catalogue",
    "create_dispatcher",
    "load_envelopes",
]
