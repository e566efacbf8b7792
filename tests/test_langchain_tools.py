"""Tests for the LangChain tool adapters."""
import json

import pytest
from langchain_core.tools import BaseTool

from suilend_agent.common.types import ArgumentBindingError, load_envelopes
from suilend_agent.tools.params import ReserveConfig
from suilend_agent.tools.tool_manager import as_langchain_tools


@pytest.fixture
def tools(dispatcher):
    return {tool.name: tool for tool in as_langchain_tools(dispatcher)}


def test_every_operation_is_exposed(tools, dispatcher):
    assert list(tools) == dispatcher.catalogue.list_items()
    assert all(isinstance(tool, BaseTool) for tool in tools.values())


def test_tool_schema_follows_parameters(tools, dispatcher):
    for name, tool in tools.items():
        operation = dispatcher.catalogue.get_operation(name)
        assert tool.description == operation.description
        assert list(tool.args) == operation.parameter_names


@pytest.mark.asyncio
async def test_tool_invocation_returns_envelope_json(tools, client):
    text = await tools["deposit_into_obligation"].ainvoke(
        {
            "owner_id": "0xOWNER",
            "coin_type": "0x2::sui::SUI",
            "value": "1000000",
            "obligation_owner_cap_id": "0xCAP",
        }
    )

    envelopes = load_envelopes(text)
    assert len(envelopes) == 1
    assert envelopes[0].status == "success"
    assert json.loads(envelopes[0].response)["depositedAmount"] == "1000000"
    assert client.deposit_into_obligation.call_args.args[4] == "0xCAP"


@pytest.mark.asyncio
async def test_tool_invocation_keeps_positional_order(tools, client):
    """Keyword input is mapped back onto declared parameter order."""
    await tools["get_lending_market_owner_cap_id"].ainvoke(
        {"lending_market_id": "0xMARKET", "owner_id": "0xOWNER"}
    )

    client.get_lending_market_owner_cap_id.assert_awaited_once_with("0xOWNER")


@pytest.mark.asyncio
async def test_create_reserve_config_reaches_client(tools, client):
    text = await tools["create_reserve"].ainvoke(
        {
            "lending_market_owner_cap_id": "0xCAP",
            "pyth_price_id": "0xPYTH",
            "coin_type": "0x2::sui::SUI",
            "config": {"openLtvPct": 70},
        }
    )

    envelope = load_envelopes(text)[0]
    assert envelope.status == "success", envelope.errors
    config = client.create_reserve.call_args.args[4]
    assert isinstance(config, ReserveConfig)
    assert config.open_ltv_pct == 70


@pytest.mark.asyncio
async def test_update_reserve_config_reaches_client(tools, client):
    text = await tools["update_reserve_config"].ainvoke(
        {"lending_market_owner_cap_id": "0xCAP", "coin_type": "0x2::sui::SUI", "config": {"openLtvPct": 75}}
    )

    envelope = load_envelopes(text)[0]
    assert envelope.status == "success", envelope.errors
    assert json.loads(envelope.response)["updatedConfig"]["openLtvPct"] == 75
    assert client.update_reserve_config.call_args.args[3].open_ltv_pct == 75


@pytest.mark.asyncio
async def test_missing_arguments_are_not_dropped(tools, client):
    with pytest.raises(ArgumentBindingError, match="obligation_owner_cap_id"):
        await tools["deposit_into_obligation"]._arun(
            owner_id="0xOWNER", coin_type="0x2::sui::SUI", value="1000"
        )
    client.deposit_into_obligation.assert_not_awaited()
