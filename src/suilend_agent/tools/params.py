"""Typed parameter records, one per operation."""
import re
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr
from pydantic.alias_generators import to_camel

from ..common.types import ConversionError

IntegerLike = Union[StrictInt, StrictFloat, StrictStr]

_DECIMAL = re.compile(r"^[+-]?[0-9]+$")
_HEX = re.compile(r"^0[xX][0-9a-fA-F]+$")


def to_big_int(value: Any) -> int:
    """Convert an integer-like value to an arbitrary-precision ``int``.

    Accepts ints, integral floats, decimal strings and ``0x`` hex strings.
    Raises ConversionError for anything else instead of coercing.
    """
    if isinstance(value, bool):
        raise ConversionError(f"Cannot convert boolean {value!r} to an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ConversionError(f"Cannot convert {value!r} to an integer")
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if _DECIMAL.match(text):
            return int(text, 10)
        if _HEX.match(text):
            return int(text, 16)
    raise ConversionError(f"Cannot convert {value!r} to an integer")


class ToolParams(BaseModel):
    """Base for operation parameters. Field types are strict: no implicit coercion."""
    model_config = ConfigDict(extra="forbid", frozen=True)


class CamelModel(BaseModel):
    """Nested objects supplied by callers with camelCase keys."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


class ReserveConfig(CamelModel):
    """Reserve configuration passed through to the lending client."""
    open_ltv_pct: Optional[IntegerLike] = None
    close_ltv_pct: Optional[IntegerLike] = None
    max_close_ltv_pct: Optional[IntegerLike] = None
    borrow_weight_bps: Optional[IntegerLike] = None
    deposit_limit: Optional[IntegerLike] = None
    borrow_limit: Optional[IntegerLike] = None
    liquidation_bonus_bps: Optional[IntegerLike] = None
    max_liquidation_bonus_bps: Optional[IntegerLike] = None
    deposit_limit_usd: Optional[IntegerLike] = None
    borrow_limit_usd: Optional[IntegerLike] = None
    borrow_fee_bps: Optional[IntegerLike] = None
    spread_fee_bps: Optional[IntegerLike] = None
    protocol_liquidation_fee_bps: Optional[IntegerLike] = None
    interest_rate_utils: List[IntegerLike] = Field(default_factory=list)
    interest_rate_aprs: List[IntegerLike] = Field(default_factory=list)
    isolated: Optional[StrictBool] = None
    open_attributed_borrow_limit_usd: Optional[IntegerLike] = None
    close_attributed_borrow_limit_usd: Optional[IntegerLike] = None

    def summary(self) -> Dict[str, Any]:
        """The declared config fields, camelCase keyed."""
        return self.model_dump(by_alias=True, include=set(type(self).model_fields))


class ClaimReward(CamelModel):
    """One reward to claim from an obligation."""
    reserve_array_index: IntegerLike
    reward_index: IntegerLike
    reward_coin_type: StrictStr
    side: Optional[StrictStr] = None


class CreateLendingMarketParams(ToolParams):
    registry_id: StrictStr
    lending_market_type: StrictStr


class CreateReserveParams(ToolParams):
    lending_market_owner_cap_id: StrictStr
    pyth_price_id: StrictStr
    coin_type: StrictStr
    config: ReserveConfig


class BorrowAndSendParams(ToolParams):
    owner_id: StrictStr
    obligation_owner_cap_id: StrictStr
    obligation_id: StrictStr
    coin_type: StrictStr
    value: StrictStr


class DepositIntoObligationParams(ToolParams):
    owner_id: StrictStr
    coin_type: StrictStr
    value: StrictStr
    obligation_owner_cap_id: StrictStr


class RepayIntoObligationParams(ToolParams):
    owner_id: StrictStr
    obligation_id: StrictStr
    coin_type: StrictStr
    value: StrictStr


class GetObligationParams(ToolParams):
    obligation_id: StrictStr


class GetOwnerCapParams(ToolParams):
    owner_id: StrictStr
    lending_market_id: StrictStr


class AddRewardParams(ToolParams):
    owner_id: StrictStr
    lending_market_owner_cap_id: StrictStr
    reserve_array_index: IntegerLike
    is_deposit_reward: StrictBool
    reward_coin_type: StrictStr
    reward_value: StrictStr
    start_time_ms: IntegerLike
    end_time_ms: IntegerLike


class RewardIndexParams(ToolParams):
    """Shared by cancel_reward and close_reward."""
    lending_market_owner_cap_id: StrictStr
    reserve_array_index: IntegerLike
    is_deposit_reward: StrictBool
    reward_index: IntegerLike
    reward_coin_type: StrictStr


class ClaimRewardsParams(ToolParams):
    owner_id: StrictStr
    obligation_owner_cap_id: StrictStr
    rewards: List[ClaimReward]


class UpdateReserveConfigParams(ToolParams):
    lending_market_owner_cap_id: StrictStr
    coin_type: StrictStr
    config: ReserveConfig


class ChangePriceFeedParams(ToolParams):
    lending_market_owner_cap_id: StrictStr
    coin_type: StrictStr
    pyth_price_id: StrictStr


class DepositLiquidityParams(ToolParams):
    owner_id: StrictStr
    coin_type: StrictStr
    value: StrictStr


class WithdrawAndSendParams(ToolParams):
    owner_id: StrictStr
    obligation_owner_cap_id: StrictStr
    obligation_id: StrictStr
    coin_type: StrictStr
    value: StrictStr


class RedeemCtokensParams(ToolParams):
    owner_id: StrictStr
    ctoken_coin_types: List[StrictStr]
