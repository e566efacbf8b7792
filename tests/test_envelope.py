"""Tests for query rendering, failure descriptions and payload serialization."""
import json
from decimal import Decimal

import pytest
from pydantic import ValidationError

from suilend_agent.common.types import ErrorEnvelope, LendingClientError, SuccessEnvelope
from suilend_agent.tools.envelope import (
    describe_failure,
    format_error,
    format_response,
    render_query,
)
from suilend_agent.tools.params import GetObligationParams
from suilend_agent.tools.results import DepositResult, serialize_opaque


def test_render_query():
    assert render_query("Deposit {value} of {coin_type}", {"value": "10", "coin_type": "SUI"}) == (
        "Deposit 10 of SUI"
    )
    assert render_query("Types: {types}", {"types": ["A", "B"]}) == "Types: A, B"
    assert render_query("Claim for {owner_id}", {}) == "Claim for ?"


def test_describe_failure():
    assert describe_failure(LendingClientError("insufficient balance")) == [
        "LendingClientError: insufficient balance"
    ]
    assert describe_failure(RuntimeError()) == ["RuntimeError: no details"]

    with pytest.raises(ValidationError) as exc_info:
        GetObligationParams.model_validate({"obligation_id": 5})
    assert describe_failure(exc_info.value) == ["obligation_id: Input should be a valid string"]


def test_format_response():
    result = DepositResult(owner_id="0xOWNER", coin_type="SUI", deposited_amount="10")
    envelope = format_response(result, "Deposit 10 of SUI for 0xOWNER")

    assert isinstance(envelope, SuccessEnvelope)
    assert envelope.errors == []
    assert envelope.response == json.dumps(result.to_payload(), indent=2)


def test_format_error():
    envelope = format_error(LendingClientError("boom"), reasoning="Failed", query="Failed to x")

    assert isinstance(envelope, ErrorEnvelope)
    assert envelope.response == ""
    assert envelope.errors == ["Failed to x: LendingClientError: boom"]


def test_envelopes_enforce_error_invariants():
    with pytest.raises(ValidationError):
        ErrorEnvelope(reasoning="Failed", query="q", errors=[])
    with pytest.raises(ValidationError):
        SuccessEnvelope(reasoning="ok", response="{}", query="q", errors=["unexpected"])


class Opaque:
    def __str__(self):
        return "<opaque>"


class JsonTransaction:
    def to_json(self):
        return {"kind": "ProgrammableTransaction"}


def test_serialize_opaque():
    assert serialize_opaque(Decimal("1.50")) == "1.50"
    assert serialize_opaque(Opaque()) == "<opaque>"
    assert serialize_opaque(JsonTransaction()) == {"kind": "ProgrammableTransaction"}
    assert serialize_opaque({"a": [Opaque(), 1]}) == {"a": ["<opaque>", 1]}
