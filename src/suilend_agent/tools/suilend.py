"""Suilend lending operations exposed as catalogue tools.

Each handler is a thin adapter: it opens a transaction where the action is
transaction-building, calls exactly one lending client method and echoes the
key identifiers back in a result record.
"""
import logging

from ..common.types import ParameterSpec
from .params import (
    AddRewardParams,
    BorrowAndSendParams,
    ChangePriceFeedParams,
    ClaimRewardsParams,
    CreateLendingMarketParams,
    CreateReserveParams,
    DepositIntoObligationParams,
    DepositLiquidityParams,
    GetObligationParams,
    GetOwnerCapParams,
    RedeemCtokensParams,
    RepayIntoObligationParams,
    RewardIndexParams,
    UpdateReserveConfigParams,
    WithdrawAndSendParams,
    to_big_int,
)
from .results import (
    AddRewardResult,
    BorrowResult,
    CancelRewardResult,
    ChangePriceFeedResult,
    ClaimAndDepositResult,
    ClaimAndSendResult,
    CloseRewardResult,
    CreateLendingMarketResult,
    CreateReserveResult,
    DepositLiquidityResult,
    DepositResult,
    ObligationResult,
    OwnerCapResult,
    RedeemCtokensResult,
    RepayResult,
    RewardDetails,
    RewardRef,
    UpdateReserveConfigResult,
    WithdrawResult,
    reward_type,
)
from .tool_registry import OperationCatalogue
from .tool_types import ClientProvider, TransactionFactory

logger = logging.getLogger(__name__)


def _param(name: str, description: str, kind: str = "string") -> ParameterSpec:
    return ParameterSpec(name=name, type=kind, description=description, required=True)


OWNER_ID = _param("owner_id", "Owner ID")
COIN_TYPE = _param("coin_type", "Coin type")
OBLIGATION_ID = _param("obligation_id", "Obligation ID")
OBLIGATION_CAP = _param("obligation_owner_cap_id", "Obligation owner capability ID")
MARKET_CAP = _param("lending_market_owner_cap_id", "Lending market owner capability ID")
PYTH_PRICE_ID = _param("pyth_price_id", "Pyth price feed ID")
RESERVE_CONFIG = _param("config", "Reserve configuration", "object")
RESERVE_INDEX = _param("reserve_array_index", "Reserve array index", "number")
IS_DEPOSIT_REWARD = _param("is_deposit_reward", "Whether the reward is a deposit reward", "boolean")
REWARD_INDEX = _param("reward_index", "Reward index", "number")
REWARD_COIN_TYPE = _param("reward_coin_type", "Reward coin type")
REWARDS = _param("rewards", "Array of rewards to claim", "array")


class SuilendTools:
    """Handlers for the Suilend lending operations."""

    def __init__(self, client_provider: ClientProvider, transaction_factory: TransactionFactory):
        self._client_provider = client_provider
        self._transaction_factory = transaction_factory

    async def create_lending_market(self, params: CreateLendingMarketParams) -> CreateLendingMarketResult:
        client = await self._client_provider()
        transaction = self._transaction_factory()
        owner_cap = await client.create_lending_market(
            params.registry_id, params.lending_market_type, transaction
        )
        return CreateLendingMarketResult(owner_cap=owner_cap, transaction=transaction)

    async def create_reserve(self, params: CreateReserveParams) -> CreateReserveResult:
        transaction = self._transaction_factory()
        client = await self._client_provider()
        result = await client.create_reserve(
            params.lending_market_owner_cap_id,
            transaction,
            params.pyth_price_id,
            params.coin_type,
            params.config,
        )
        return CreateReserveResult(transaction=transaction, result=result)

    async def borrow_and_send(self, params: BorrowAndSendParams) -> BorrowResult:
        client = await self._client_provider()
        transaction = self._transaction_factory()
        await client.borrow_and_send_to_user(
            params.owner_id,
            params.obligation_owner_cap_id,
            params.obligation_id,
            params.coin_type,
            params.value,
            transaction,
        )
        return BorrowResult(
            owner_id=params.owner_id,
            obligation_id=params.obligation_id,
            coin_type=params.coin_type,
            borrowed_amount=params.value,
        )

    async def deposit_into_obligation(self, params: DepositIntoObligationParams) -> DepositResult:
        client = await self._client_provider()
        transaction = self._transaction_factory()
        await client.deposit_into_obligation(
            params.owner_id,
            params.coin_type,
            params.value,
            transaction,
            params.obligation_owner_cap_id,
        )
        return DepositResult(
            owner_id=params.owner_id,
            coin_type=params.coin_type,
            deposited_amount=params.value,
        )

    async def repay_into_obligation(self, params: RepayIntoObligationParams) -> RepayResult:
        client = await self._client_provider()
        transaction = self._transaction_factory()
        await client.repay_into_obligation(
            params.owner_id,
            params.obligation_id,
            params.coin_type,
            params.value,
            transaction,
        )
        return RepayResult(
            owner_id=params.owner_id,
            obligation_id=params.obligation_id,
            coin_type=params.coin_type,
            repaid_amount=params.value,
        )

    async def get_obligation(self, params: GetObligationParams) -> ObligationResult:
        client = await self._client_provider()
        obligation = await client.get_obligation(params.obligation_id)
        return ObligationResult(obligation_id=params.obligation_id, obligation_details=obligation)

    async def get_lending_market_owner_cap_id(self, params: GetOwnerCapParams) -> OwnerCapResult:
        client = await self._client_provider()
        owner_cap_id = await client.get_lending_market_owner_cap_id(params.owner_id)
        return OwnerCapResult(
            owner_id=params.owner_id,
            owner_cap_id=owner_cap_id,
            lending_market_id=params.lending_market_id,
        )

    async def add_reward(self, params: AddRewardParams) -> AddRewardResult:
        client = await self._client_provider()
        transaction = self._transaction_factory()
        await client.add_reward(
            params.owner_id,
            params.lending_market_owner_cap_id,
            to_big_int(params.reserve_array_index),
            params.is_deposit_reward,
            params.reward_coin_type,
            params.reward_value,
            to_big_int(params.start_time_ms),
            to_big_int(params.end_time_ms),
            transaction,
        )
        return AddRewardResult(
            transaction=transaction,
            reward_details=RewardDetails(
                reserve_index=params.reserve_array_index,
                reward_type=reward_type(params.is_deposit_reward),
                coin_type=params.reward_coin_type,
                value=params.reward_value,
                duration=f"{params.start_time_ms} to {params.end_time_ms}",
            ),
        )

    def _reward_ref(self, params: RewardIndexParams) -> RewardRef:
        return RewardRef(
            reserve_index=params.reserve_array_index,
            reward_index=params.reward_index,
            reward_type=reward_type(params.is_deposit_reward),
            coin_type=params.reward_coin_type,
        )

    async def cancel_reward(self, params: RewardIndexParams) -> CancelRewardResult:
        client = await self._client_provider()
        transaction = self._transaction_factory()
        await client.cancel_reward(
            params.lending_market_owner_cap_id,
            to_big_int(params.reserve_array_index),
            params.is_deposit_reward,
            to_big_int(params.reward_index),
            params.reward_coin_type,
            transaction,
        )
        return CancelRewardResult(transaction=transaction, cancelled_reward=self._reward_ref(params))

    async def close_reward(self, params: RewardIndexParams) -> CloseRewardResult:
        client = await self._client_provider()
        transaction = self._transaction_factory()
        await client.close_reward(
            params.lending_market_owner_cap_id,
            to_big_int(params.reserve_array_index),
            params.is_deposit_reward,
            to_big_int(params.reward_index),
            params.reward_coin_type,
            transaction,
        )
        return CloseRewardResult(transaction=transaction, closed_reward=self._reward_ref(params))

    async def claim_rewards_and_send(self, params: ClaimRewardsParams) -> ClaimAndSendResult:
        client = await self._client_provider()
        transaction = self._transaction_factory()
        await client.claim_rewards_and_send_to_user(
            params.owner_id, params.obligation_owner_cap_id, params.rewards, transaction
        )
        return ClaimAndSendResult(
            transaction=transaction, claimed_rewards=params.rewards, recipient=params.owner_id
        )

    async def claim_rewards_and_deposit(self, params: ClaimRewardsParams) -> ClaimAndDepositResult:
        client = await self._client_provider()
        transaction = self._transaction_factory()
        await client.claim_rewards_and_deposit(
            params.owner_id, params.obligation_owner_cap_id, params.rewards, transaction
        )
        return ClaimAndDepositResult(
            transaction=transaction, claimed_rewards=params.rewards, depositor=params.owner_id
        )

    async def update_reserve_config(self, params: UpdateReserveConfigParams) -> UpdateReserveConfigResult:
        transaction = self._transaction_factory()
        client = await self._client_provider()
        await client.update_reserve_config(
            params.lending_market_owner_cap_id, transaction, params.coin_type, params.config
        )
        return UpdateReserveConfigResult(
            lending_market_owner_cap_id=params.lending_market_owner_cap_id,
            coin_type=params.coin_type,
            transaction=transaction,
            updated_config=params.config.summary(),
        )

    async def change_reserve_price_feed(self, params: ChangePriceFeedParams) -> ChangePriceFeedResult:
        client = await self._client_provider()
        transaction = self._transaction_factory()
        await client.change_reserve_price_feed(
            params.lending_market_owner_cap_id, params.coin_type, params.pyth_price_id, transaction
        )
        # the owner cap id is echoed as lendingMarketId
        return ChangePriceFeedResult(
            transaction=transaction,
            lending_market_id=params.lending_market_owner_cap_id,
            coin_type=params.coin_type,
            new_price_id=params.pyth_price_id,
        )

    async def deposit_liquidity(self, params: DepositLiquidityParams) -> DepositLiquidityResult:
        client = await self._client_provider()
        transaction = self._transaction_factory()
        await client.deposit_liquidity_and_get_ctokens(
            params.owner_id, params.coin_type, params.value, transaction
        )
        return DepositLiquidityResult(
            owner_id=params.owner_id,
            coin_type=params.coin_type,
            deposited_value=params.value,
            transaction=transaction,
        )

    async def withdraw_and_send(self, params: WithdrawAndSendParams) -> WithdrawResult:
        client = await self._client_provider()
        transaction = self._transaction_factory()
        await client.withdraw_and_send_to_user(
            params.owner_id,
            params.obligation_owner_cap_id,
            params.obligation_id,
            params.coin_type,
            params.value,
            transaction,
        )
        return WithdrawResult(
            owner_id=params.owner_id,
            coin_type=params.coin_type,
            withdrawn_value=params.value,
            transaction=transaction,
        )

    async def redeem_ctokens(self, params: RedeemCtokensParams) -> RedeemCtokensResult:
        client = await self._client_provider()
        transaction = self._transaction_factory()
        await client.redeem_ctokens_and_withdraw_liquidity(
            params.owner_id, params.ctoken_coin_types, transaction
        )
        return RedeemCtokensResult(
            owner_id=params.owner_id,
            ctoken_coin_types=params.ctoken_coin_types,
            transaction=transaction,
        )


def register_suilend_tools(
    catalogue: OperationCatalogue,
    client_provider: ClientProvider,
    transaction_factory: TransactionFactory,
) -> SuilendTools:
    """Register every Suilend operation in the catalogue."""
    tools = SuilendTools(client_provider, transaction_factory)

    # Lending market management
    catalogue.register(
        "create_lending_market",
        "Create a new lending market on suilend",
        [_param("registry_id", "Registry ID"), _param("lending_market_type", "Lending market type")],
        tools.create_lending_market,
        params_model=CreateLendingMarketParams,
        category="market",
        success_query="Create lending market with registry ID: {registry_id}",
        failure_reasoning="Failed to create lending market",
        failure_query="Failed to create lending market with registry ID: {registry_id}",
    )
    catalogue.register(
        "get_lending_market_owner_cap_id",
        "Get lending market owner capability ID from suilend",
        [OWNER_ID, _param("lending_market_id", "Lending market ID")],
        tools.get_lending_market_owner_cap_id,
        params_model=GetOwnerCapParams,
        category="market",
        success_query="Retrieved owner capability ID for {owner_id}",
        failure_reasoning="Failed to retrieve lending market owner capability ID",
        failure_query="Attempted to get owner capability ID for {owner_id}",
    )

    # Reserve management
    catalogue.register(
        "create_reserve",
        "Create a new reserve on suilend",
        [MARKET_CAP, PYTH_PRICE_ID, COIN_TYPE, RESERVE_CONFIG],
        tools.create_reserve,
        params_model=CreateReserveParams,
        category="reserve",
        success_query="Create reserve with coin type: {coin_type}",
        failure_reasoning="Failed to create reserve",
        failure_query="Failed to create reserve with coin type: {coin_type}",
    )
    catalogue.register(
        "update_reserve_config",
        "Update reserve configuration on suilend",
        [MARKET_CAP, COIN_TYPE, RESERVE_CONFIG],
        tools.update_reserve_config,
        params_model=UpdateReserveConfigParams,
        category="reserve",
        success_query="Update reserve configuration for coin type: {coin_type}",
        failure_reasoning="Failed to update reserve config",
        failure_query="Failed to update reserve config for coin type: {coin_type}",
    )
    catalogue.register(
        "change_reserve_price_feed",
        "Change reserve price feed on suilend",
        [MARKET_CAP, COIN_TYPE, PYTH_PRICE_ID],
        tools.change_reserve_price_feed,
        params_model=ChangePriceFeedParams,
        category="reserve",
        success_query="Change reserve price feed for coin type: {coin_type}",
        failure_reasoning="Failed to change reserve price feed",
        failure_query="Failed to change reserve price feed for coin type: {coin_type}",
    )

    # Obligation operations
    catalogue.register(
        "borrow_and_send",
        "Borrow and send funds to user on suilend",
        [OWNER_ID, OBLIGATION_CAP, OBLIGATION_ID, COIN_TYPE, _param("value", "Value to borrow")],
        tools.borrow_and_send,
        params_model=BorrowAndSendParams,
        category="obligation",
        success_query="Borrow {value} of {coin_type} for {owner_id}",
        failure_reasoning="Failed to borrow and send funds",
        failure_query="Failed to borrow {value} of {coin_type} for {owner_id}",
    )
    catalogue.register(
        "deposit_into_obligation",
        "Deposit funds into an obligation on suilend",
        [OWNER_ID, COIN_TYPE, _param("value", "Value to deposit"), OBLIGATION_CAP],
        tools.deposit_into_obligation,
        params_model=DepositIntoObligationParams,
        category="obligation",
        success_query="Deposit {value} of {coin_type} for {owner_id}",
        failure_reasoning="Failed to deposit into obligation",
        failure_query="Failed to deposit {value} of {coin_type} for {owner_id}",
    )
    catalogue.register(
        "repay_into_obligation",
        "Repay into obligation on suilend",
        [OWNER_ID, OBLIGATION_ID, COIN_TYPE, _param("value", "Value to repay")],
        tools.repay_into_obligation,
        params_model=RepayIntoObligationParams,
        category="obligation",
        success_query="Repay {value} of {coin_type} into obligation {obligation_id}",
        failure_reasoning="Failed to repay into obligation",
        failure_query="Failed to repay {value} of {coin_type} into obligation {obligation_id}",
    )
    catalogue.register(
        "get_obligation",
        "Get obligation details from suilend",
        [OBLIGATION_ID],
        tools.get_obligation,
        params_model=GetObligationParams,
        category="obligation",
        success_query="Get obligation details for {obligation_id}",
        failure_reasoning="Failed to get obligation details",
        failure_query="Failed to get obligation details for {obligation_id}",
    )
    catalogue.register(
        "withdraw_and_send",
        "Withdraw funds and send to user on suilend",
        [OWNER_ID, OBLIGATION_CAP, OBLIGATION_ID, COIN_TYPE, _param("value", "Amount to withdraw")],
        tools.withdraw_and_send,
        params_model=WithdrawAndSendParams,
        category="obligation",
        success_query="Withdrew {value} of {coin_type} to {owner_id}",
        failure_reasoning="Failed to withdraw and send to user",
        failure_query="Failed to withdraw {value} of {coin_type}",
    )

    # Rewards
    catalogue.register(
        "add_reward",
        "Add a reward to a lending market on suilend",
        [
            OWNER_ID,
            MARKET_CAP,
            RESERVE_INDEX,
            IS_DEPOSIT_REWARD,
            REWARD_COIN_TYPE,
            _param("reward_value", "Reward value"),
            _param("start_time_ms", "Start time in milliseconds"),
            _param("end_time_ms", "End time in milliseconds"),
        ],
        tools.add_reward,
        params_model=AddRewardParams,
        category="reward",
        success_query="Add {reward_value} {reward_coin_type} reward",
        failure_reasoning="Failed to add reward",
        failure_query="Failed to add {reward_value} {reward_coin_type} reward",
    )
    catalogue.register(
        "cancel_reward",
        "Cancel a reward in the lending market on suilend",
        [MARKET_CAP, RESERVE_INDEX, IS_DEPOSIT_REWARD, REWARD_INDEX, REWARD_COIN_TYPE],
        tools.cancel_reward,
        params_model=RewardIndexParams,
        category="reward",
        success_query="Cancel reward at index {reward_index}",
        failure_reasoning="Failed to cancel reward",
        failure_query="Failed to cancel reward at index {reward_index}",
    )
    catalogue.register(
        "close_reward",
        "Close a reward in the lending market on suilend",
        [MARKET_CAP, RESERVE_INDEX, IS_DEPOSIT_REWARD, REWARD_INDEX, REWARD_COIN_TYPE],
        tools.close_reward,
        params_model=RewardIndexParams,
        category="reward",
        success_query="Close reward at index {reward_index}",
        failure_reasoning="Failed to close reward",
        failure_query="Failed to close reward at index {reward_index}",
    )
    catalogue.register(
        "claim_rewards_and_send",
        "Claim rewards and send them to user on suilend",
        [OWNER_ID, OBLIGATION_CAP, REWARDS],
        tools.claim_rewards_and_send,
        params_model=ClaimRewardsParams,
        category="reward",
        success_query="Claim rewards for {owner_id}",
        failure_reasoning="Failed to claim and send rewards",
        failure_query="Failed to claim rewards for {owner_id}",
    )
    catalogue.register(
        "claim_rewards_and_deposit",
        "Claim rewards and deposit them on suilend",
        [OWNER_ID, OBLIGATION_CAP, REWARDS],
        tools.claim_rewards_and_deposit,
        params_model=ClaimRewardsParams,
        category="reward",
        success_query="Claim and deposit rewards for {owner_id}",
        failure_reasoning="Failed to claim and deposit rewards",
        failure_query="Failed to claim and deposit rewards for {owner_id}",
    )

    # Liquidity
    catalogue.register(
        "deposit_liquidity",
        "Deposit liquidity and get CTokens on suilend",
        [OWNER_ID, COIN_TYPE, _param("value", "Amount to deposit")],
        tools.deposit_liquidity,
        params_model=DepositLiquidityParams,
        category="liquidity",
        success_query="Deposited {value} of {coin_type} for CTokens",
        failure_reasoning="Failed to deposit liquidity and get CTokens",
        failure_query="Failed to deposit {value} of {coin_type}",
    )
    catalogue.register(
        "redeem_ctokens",
        "Redeem CTokens and withdraw liquidity on suilend",
        [OWNER_ID, _param("ctoken_coin_types", "Array of CToken coin types to redeem", "array")],
        tools.redeem_ctokens,
        params_model=RedeemCtokensParams,
        category="liquidity",
        success_query="Redeemed CTokens for types: {ctoken_coin_types}",
        failure_reasoning="Failed to redeem CTokens and withdraw liquidity",
        failure_query="Failed to redeem CTokens for types: {ctoken_coin_types}",
    )

    logger.debug("Registered %d suilend tools", len(catalogue.list_items()))
    return tools
