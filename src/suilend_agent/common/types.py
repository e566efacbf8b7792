"""Core types for the tool catalogue using Pydantic models."""
import json
from typing import Annotated, Any, Dict, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

ParamKind = Literal["string", "number", "boolean", "object", "array"]


class ToolError(Exception):
    """Base class for tool-related errors."""
    pass


class RegistrationError(ToolError):
    """Raised for operation registration issues."""
    pass


class OperationNotFoundError(ToolError, KeyError):
    """Raised when an operation is not found in the catalogue."""

    def __str__(self) -> str:
        return Exception.__str__(self)


class ArgumentBindingError(ToolError):
    """Raised when positional arguments cannot be bound to an operation's parameters."""
    pass


class ConversionError(ToolError, ValueError):
    """Raised when a value cannot be converted to an integer."""
    pass


class LendingClientError(ToolError):
    """Raised by lending client implementations for rejected actions."""
    pass


class ParameterSpec(BaseModel):
    """Declarative description of one positional parameter."""
    model_config = ConfigDict(frozen=True)

    name: str
    type: ParamKind
    description: str
    required: bool = True


class OperationMetadata(BaseModel):
    """Serializable operation metadata."""
    name: str
    description: str
    category: str = "core"
    parameters: List[ParameterSpec] = Field(default_factory=list)

    def to_json_schema(self) -> Dict[str, Any]:
        """Render the parameter list as a function-calling JSON schema."""
        return {
            "name": self.name,
            "description": self.description,
            "parameters": {
                "type": "object",
                "properties": {
                    param.name: {"type": param.type, "description": param.description}
                    for param in self.parameters
                },
                "required": [param.name for param in self.parameters if param.required],
            },
        }


class SuccessEnvelope(BaseModel):
    """Envelope returned when an operation completes."""
    model_config = ConfigDict(frozen=True)

    reasoning: str
    response: str
    status: Literal["success"] = "success"
    query: str
    errors: List[str] = Field(default_factory=list, max_length=0)


class ErrorEnvelope(BaseModel):
    """Envelope returned when an operation fails."""
    model_config = ConfigDict(frozen=True)

    reasoning: str
    response: str = ""
    status: Literal["failure"] = "failure"
    query: str
    errors: List[str] = Field(min_length=1)


Envelope = Annotated[Union[SuccessEnvelope, ErrorEnvelope], Field(discriminator="status")]

_envelopes_adapter = TypeAdapter(List[Envelope])


def dump_envelopes(envelopes: List[Envelope]) -> str:
    """Serialize an invocation result to its JSON text form."""
    return json.dumps(_envelopes_adapter.dump_python(envelopes, mode="json"))


def load_envelopes(text: str) -> List[Envelope]:
    """Parse the JSON text form back into envelope models."""
    return _envelopes_adapter.validate_json(text)
