"""Claimable activity reward of a single candidate contract."""

import logging

from ..core.networks import NetworkConfig
from ..core.types import ActivityReward, ReadRequest
from ..core.units import REWARD_DECIMALS, format_token_amount
from ..data.chain_reader import ChainReader
from .committee import is_zero_address

logger = logging.getLogger(__name__)


def failed_reward(candidate_contract: str) -> ActivityReward:
    return ActivityReward(
        ok=False,
        candidate_contract=candidate_contract,
        candidate=candidate_contract,
        beneficiary=candidate_contract,
        reward=0,
        formatted_reward=format_token_amount(0, "WTON", REWARD_DECIMALS),
    )


async def resolve_activity_reward(
    reader: ChainReader, config: NetworkConfig, candidate_contract: str
) -> ActivityReward:
    """
    Resolve the candidate behind a candidate contract and its claimable reward.

    The beneficiary is the operator manager's manager() when the candidate is
    an operator manager, otherwise the candidate itself. Looking it up is best
    effort and never changes `ok` or `reward`.
    """
    candidate_result = await reader.read_one(
        ReadRequest(address=candidate_contract, abi="candidate", function="candidate")
    )
    if not candidate_result.ok or is_zero_address(candidate_result.value):
        logger.warning(f"{candidate_contract} has no readable candidate(): {candidate_result.error}")
        return failed_reward(candidate_contract)
    candidate = candidate_result.value

    reward_result = await reader.read_one(
        ReadRequest(
            address=config.dao_committee,
            abi="committee",
            function="getClaimableActivityReward",
            args=(candidate,),
        )
    )
    if not reward_result.ok:
        logger.warning(f"Failed to read claimable activity reward of {candidate}: {reward_result.error}")
        return failed_reward(candidate_contract)
    reward = int(reward_result.value or 0)

    beneficiary = candidate
    manager_result = await reader.read_one(
        ReadRequest(address=candidate, abi="operator_manager", function="manager")
    )
    if manager_result.ok and not is_zero_address(manager_result.value):
        beneficiary = manager_result.value

    return ActivityReward(
        ok=True,
        candidate_contract=candidate_contract,
        candidate=candidate,
        beneficiary=beneficiary,
        reward=reward,
        formatted_reward=format_token_amount(reward, "WTON", REWARD_DECIMALS),
    )
