"""Response envelope formatting."""
import json
import string
from typing import Any, List, Mapping

from pydantic import ValidationError

from ..common.types import ErrorEnvelope, SuccessEnvelope
from .results import result_payload

SUCCESS_REASONING = "Operation completed successfully"


class _QueryValues(dict):
    """Template values: lists joined by commas, unknown names rendered as ``?``."""

    def __missing__(self, key: str) -> str:
        return "?"


def render_query(template: str, arguments: Mapping[str, Any]) -> str:
    """Fill a query template from the bound invocation arguments."""
    values = _QueryValues()
    for name, value in arguments.items():
        if isinstance(value, (list, tuple)):
            value = ", ".join(str(item) for item in value)
        values[name] = value
    return string.Formatter().vformat(template, (), values)


def describe_failure(error: BaseException) -> List[str]:
    """Turn a caught failure into one or more error descriptions."""
    if isinstance(error, ValidationError):
        details = []
        for item in error.errors(include_url=False):
            location = ".".join(str(part) for part in item["loc"]) or error.title
            details.append(f"{location}: {item['msg']}")
        return details
    message = str(error) or "no details"
    return [f"{type(error).__name__}: {message}"]


def format_response(result: Any, query: str) -> SuccessEnvelope:
    """Wrap a handler result in the success envelope."""
    return SuccessEnvelope(
        reasoning=SUCCESS_REASONING,
        response=json.dumps(result_payload(result), indent=2),
        query=query,
    )


def format_error(error: BaseException, *, reasoning: str, query: str) -> ErrorEnvelope:
    """Wrap a caught failure in the error envelope."""
    return ErrorEnvelope(
        reasoning=reasoning,
        query=query,
        errors=[f"{query}: {detail}" for detail in describe_failure(error)],
    )
