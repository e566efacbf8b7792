"""Type definitions for the tool system."""
from typing import Any, Awaitable, Callable, List, Optional, Protocol, Sequence, Tuple, Type

from pydantic import BaseModel, ConfigDict

from ..common.types import ArgumentBindingError, ParameterSpec

Handler = Callable[[Any], Awaitable[Any]]


class Transaction(Protocol):
    """Opaque transaction handle threaded into client calls."""
    ...


TransactionFactory = Callable[[], Transaction]


class LendingClient(Protocol):
    """Protocol defining the lending-protocol client the tools delegate to.

    Each method performs one lending action. Transaction-building methods
    accumulate their effect on the given transaction; any failure is raised.
    """

    async def create_lending_market(
        self, registry_id: str, lending_market_type: str, transaction: Transaction
    ) -> Any: ...

    async def create_reserve(
        self,
        lending_market_owner_cap_id: str,
        transaction: Transaction,
        pyth_price_id: str,
        coin_type: str,
        config: Any,
    ) -> Any: ...

    async def borrow_and_send_to_user(
        self,
        owner_id: str,
        obligation_owner_cap_id: str,
        obligation_id: str,
        coin_type: str,
        value: str,
        transaction: Transaction,
    ) -> Any: ...

    async def deposit_into_obligation(
        self,
        owner_id: str,
        coin_type: str,
        value: str,
        transaction: Transaction,
        obligation_owner_cap_id: str,
    ) -> Any: ...

    async def repay_into_obligation(
        self,
        owner_id: str,
        obligation_id: str,
        coin_type: str,
        value: str,
        transaction: Transaction,
    ) -> Any: ...

    async def get_obligation(self, obligation_id: str) -> Any: ...

    async def get_lending_market_owner_cap_id(self, owner_id: str) -> Optional[str]: ...

    async def add_reward(
        self,
        owner_id: str,
        lending_market_owner_cap_id: str,
        reserve_array_index: int,
        is_deposit_reward: bool,
        reward_coin_type: str,
        reward_value: str,
        start_time_ms: int,
        end_time_ms: int,
        transaction: Transaction,
    ) -> Any: ...

    async def cancel_reward(
        self,
        lending_market_owner_cap_id: str,
        reserve_array_index: int,
        is_deposit_reward: bool,
        reward_index: int,
        reward_coin_type: str,
        transaction: Transaction,
    ) -> Any: ...

    async def close_reward(
        self,
        lending_market_owner_cap_id: str,
        reserve_array_index: int,
        is_deposit_reward: bool,
        reward_index: int,
        reward_coin_type: str,
        transaction: Transaction,
    ) -> Any: ...

    async def claim_rewards_and_send_to_user(
        self, owner_id: str, obligation_owner_cap_id: str, rewards: List[Any], transaction: Transaction
    ) -> Any: ...

    async def claim_rewards_and_deposit(
        self, owner_id: str, obligation_owner_cap_id: str, rewards: List[Any], transaction: Transaction
    ) -> Any: ...

    async def update_reserve_config(
        self, lending_market_owner_cap_id: str, transaction: Transaction, coin_type: str, config: Any
    ) -> Any: ...

    async def change_reserve_price_feed(
        self, lending_market_owner_cap_id: str, coin_type: str, pyth_price_id: str, transaction: Transaction
    ) -> Any: ...

    async def deposit_liquidity_and_get_ctokens(
        self, owner_id: str, coin_type: str, value: str, transaction: Transaction
    ) -> Any: ...

    async def withdraw_and_send_to_user(
        self,
        owner_id: str,
        obligation_owner_cap_id: str,
        obligation_id: str,
        coin_type: str,
        value: str,
        transaction: Transaction,
    ) -> Any: ...

    async def redeem_ctokens_and_withdraw_liquidity(
        self, owner_id: str, ctoken_coin_types: List[str], transaction: Transaction
    ) -> Any: ...


ClientProvider = Callable[[], Awaitable[LendingClient]]


class Operation(BaseModel):
    """A named, schema-described action invocable by the dispatcher."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    description: str
    parameters: Tuple[ParameterSpec, ...]
    handler: Handler
    params_model: Type[BaseModel]
    category: str = "core"
    success_query: str = ""
    failure_reasoning: str = "Operation failed"
    failure_query: str = ""

    @property
    def parameter_names(self) -> List[str]:
        return [param.name for param in self.parameters]

    def bind(self, args: Sequence[Any]) -> dict[str, Any]:
        """Map positional arguments onto parameter names by declared order."""
        if len(args) > len(self.parameters):
            raise ArgumentBindingError(
                f"{self.name} takes {len(self.parameters)} arguments but {len(args)} were given"
            )
        return dict(zip(self.parameter_names, args))
