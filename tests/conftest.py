"""Shared fixtures: fake lending clients and a dispatcher over the full catalogue."""
import itertools
from typing import Any, Dict, List
from unittest.mock import AsyncMock, Mock

import pytest

from suilend_agent.common.types import LendingClientError
from suilend_agent.tools.tool_manager import build_catalogue, create_dispatcher

CLIENT_METHODS = [
    "create_lending_market",
    "create_reserve",
    "borrow_and_send_to_user",
    "deposit_into_obligation",
    "repay_into_obligation",
    "get_obligation",
    "get_lending_market_owner_cap_id",
    "add_reward",
    "cancel_reward",
    "close_reward",
    "claim_rewards_and_send_to_user",
    "claim_rewards_and_deposit",
    "update_reserve_config",
    "change_reserve_price_feed",
    "deposit_liquidity_and_get_ctokens",
    "withdraw_and_send_to_user",
    "redeem_ctokens_and_withdraw_liquidity",
]

REWARD = {"reserveArrayIndex": "1", "rewardIndex": 0, "rewardCoinType": "0x2::sui::SUI", "side": "deposit"}

WELL_FORMED_ARGS: Dict[str, List[Any]] = {
    "create_lending_market": ["0xREGISTRY", "0xMARKET::market::MAIN"],
    "get_lending_market_owner_cap_id": ["0xOWNER", "0xMARKET"],
    "create_reserve": ["0xCAP", "0xPYTH", "0x2::sui::SUI", {"openLtvPct": 70, "closeLtvPct": 80}],
    "update_reserve_config": ["0xCAP", "0x2::sui::SUI", {"openLtvPct": 75, "isolated": False}],
    "change_reserve_price_feed": ["0xCAP", "0x2::sui::SUI", "0xPYTH2"],
    "borrow_and_send": ["0xOWNER", "0xOBCAP", "0xOBLIGATION", "0x2::sui::SUI", "1000"],
    "deposit_into_obligation": ["0xOWNER", "0x2::sui::SUI", "1000000", "0xCAP"],
    "repay_into_obligation": ["0xOWNER", "0xOBLIGATION", "0x2::sui::SUI", "500"],
    "get_obligation": ["0xOBLIGATION"],
    "withdraw_and_send": ["0xOWNER", "0xOBCAP", "0xOBLIGATION", "0x2::sui::SUI", "250"],
    "add_reward": [
        "0xOWNER", "0xCAP", "2", True, "0x2::sui::SUI", "5000", "1700000000000", "1800000000000",
    ],
    "cancel_reward": ["0xCAP", 2, True, 0, "0x2::sui::SUI"],
    "close_reward": ["0xCAP", "2", False, "1", "0x2::sui::SUI"],
    "claim_rewards_and_send": ["0xOWNER", "0xOBCAP", [REWARD]],
    "claim_rewards_and_deposit": ["0xOWNER", "0xOBCAP", [REWARD]],
    "deposit_liquidity": ["0xOWNER", "0x2::sui::SUI", "42"],
    "redeem_ctokens": ["0xOWNER", ["0xA::x::X", "0xB::y::Y"]],
}


class FakeTransaction:
    """Records the commands a client adds to it."""
    _ids = itertools.count(1)

    def __init__(self):
        self.id = next(self._ids)
        self.commands: List[str] = []

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "commands": list(self.commands)}


def make_client(**return_values: Any) -> Mock:
    """Create a fake client whose methods all succeed."""
    client = Mock()
    for method in CLIENT_METHODS:
        setattr(client, method, AsyncMock(return_value=return_values.get(method)))
    return client


def make_failing_client(message: str = "rejected by the network") -> Mock:
    """Create a fake client whose methods all raise."""
    client = Mock()
    for method in CLIENT_METHODS:
        setattr(client, method, AsyncMock(side_effect=LendingClientError(message)))
    return client


def provider_for(client: Any):
    async def provide():
        return client
    return provide


@pytest.fixture
def client():
    """Succeeding client with realistic return values for the query methods."""
    return make_client(
        create_lending_market="0xOWNER_CAP",
        get_obligation={"id": "0xOBLIGATION", "deposits": [], "borrows": []},
        get_lending_market_owner_cap_id="0xOWNER_CAP",
        create_reserve={"digest": "abc"},
    )


@pytest.fixture
def failing_client():
    return make_failing_client()


@pytest.fixture
def catalogue(client):
    return build_catalogue(provider_for(client), FakeTransaction)


@pytest.fixture
def dispatcher(client):
    return create_dispatcher(provider_for(client), FakeTransaction)


@pytest.fixture
def failing_dispatcher(failing_client):
    return create_dispatcher(provider_for(failing_client), FakeTransaction)
