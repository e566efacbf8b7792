"""Per-operation success payloads."""
from decimal import Decimal
from typing import Annotated, Any, Dict, List, Literal

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

from .params import ClaimReward, IntegerLike


def serialize_opaque(value: Any) -> Any:
    """Render a pass-through value (transaction, client result) as JSON-able data."""
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, dict):
        return {str(key): serialize_opaque(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize_opaque(item) for item in value]
    for attr in ("to_json", "to_dict"):
        method = getattr(value, attr, None)
        if callable(method):
            data = method()
            if data is None or isinstance(data, (dict, list, str, int, float, bool)):
                return serialize_opaque(data)
    return str(value)


Opaque = Annotated[Any, PlainSerializer(serialize_opaque)]


class CamelResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ToolResult(CamelResult):
    """Base result: camelCase on the wire, always tagged ``success``."""

    status: Literal["success"] = "success"

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class CreateLendingMarketResult(ToolResult):
    owner_cap: Opaque = None
    transaction: Opaque = None


class CreateReserveResult(ToolResult):
    transaction: Opaque = None
    result: Opaque = None


class BorrowResult(ToolResult):
    owner_id: str
    obligation_id: str
    coin_type: str
    borrowed_amount: str


class DepositResult(ToolResult):
    owner_id: str
    coin_type: str
    deposited_amount: str


class RepayResult(ToolResult):
    owner_id: str
    obligation_id: str
    coin_type: str
    repaid_amount: str


class ObligationResult(ToolResult):
    obligation_id: str
    obligation_details: Opaque = None


class OwnerCapResult(ToolResult):
    owner_id: str
    owner_cap_id: Opaque = None
    lending_market_id: str


class RewardDetails(CamelResult):
    reserve_index: IntegerLike
    reward_type: Literal["deposit", "borrow"]
    coin_type: str
    value: str
    duration: str


class AddRewardResult(ToolResult):
    transaction: Opaque = None
    reward_details: RewardDetails


class RewardRef(CamelResult):
    reserve_index: IntegerLike
    reward_index: IntegerLike
    reward_type: Literal["deposit", "borrow"]
    coin_type: str


class CancelRewardResult(ToolResult):
    transaction: Opaque = None
    cancelled_reward: RewardRef


class CloseRewardResult(ToolResult):
    transaction: Opaque = None
    closed_reward: RewardRef


class ClaimAndSendResult(ToolResult):
    transaction: Opaque = None
    claimed_rewards: List[ClaimReward]
    recipient: str


class ClaimAndDepositResult(ToolResult):
    transaction: Opaque = None
    claimed_rewards: List[ClaimReward]
    depositor: str


class UpdateReserveConfigResult(ToolResult):
    lending_market_owner_cap_id: str
    coin_type: str
    transaction: Opaque = None
    updated_config: Dict[str, Any]


class ChangePriceFeedResult(ToolResult):
    transaction: Opaque = None
    lending_market_id: str
    coin_type: str
    new_price_id: str


class DepositLiquidityResult(ToolResult):
    owner_id: str
    coin_type: str
    deposited_value: str
    transaction: Opaque = None


class WithdrawResult(ToolResult):
    owner_id: str
    coin_type: str
    withdrawn_value: str
    transaction: Opaque = None


class RedeemCtokensResult(ToolResult):
    owner_id: str
    ctoken_coin_types: List[str]
    transaction: Opaque = None


def result_payload(result: Any) -> Any:
    """JSON-able form of whatever a handler returned."""
    if isinstance(result, ToolResult):
        return result.to_payload()
    return serialize_opaque(result)


def reward_type(is_deposit_reward: bool) -> str:
    return "deposit" if is_deposit_reward else "borrow"

