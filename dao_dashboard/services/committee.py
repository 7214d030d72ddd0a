"""
Committee directory pipeline.

Each stage takes the chain reader, the network config and the previous
stage's output, issues one batch, and returns fresh objects:

    read_max_members -> scan_seats -> resolve_candidates
        -> link_operators (optional) -> aggregate_staking
"""

import logging

from ..core.contracts import ZERO_ADDRESS
from ..core.exceptions import CommitteeReadError
from ..core.networks import NetworkConfig
from ..core.types import (
    CandidateInfo,
    Member,
    OccupiedSeat,
    ReadRequest,
    ReadResult,
    StakingInfo,
)
from ..core.units import REWARD_DECIMALS, WTON_DECIMALS, format_token_amount
from ..data.chain_reader import ChainReader

logger = logging.getLogger(__name__)

STAKING_READS_PER_MEMBER = 4


def is_zero_address(address: str | None) -> bool:
    return not address or address.lower() == ZERO_ADDRESS


def _has_address(result: ReadResult) -> bool:
    return result.ok and isinstance(result.value, str) and not is_zero_address(result.value)


def parse_candidate_info(value) -> CandidateInfo | None:
    """Decode a candidateInfos() tuple. Empty or zeroed entries give None."""
    if not value:
        return None
    candidate_contract, index_members, joined, reward_period, claimed = value
    if is_zero_address(candidate_contract):
        return None
    return CandidateInfo(
        candidate_contract=candidate_contract,
        index_members=index_members,
        member_joined_time=joined,
        reward_period=reward_period,
        claimed_timestamp=claimed,
    )


async def read_max_members(reader: ChainReader, config: NetworkConfig) -> int:
    """Read the committee capacity. Nothing else can run without it."""
    result = await reader.read_one(
        ReadRequest(address=config.dao_committee, abi="committee", function="maxMember")
    )
    if not result.ok:
        raise CommitteeReadError(f"Failed to read maxMember: {result.error}")
    return int(result.value)


async def scan_seats(
    reader: ChainReader, config: NetworkConfig, max_members: int
) -> list[OccupiedSeat]:
    """
    List occupied seats in seat order.

    Empty seats (zero address) and seats whose read failed are both dropped.
    """
    requests = [
        ReadRequest(address=config.dao_committee, abi="committee", function="members", args=(i,))
        for i in range(max_members)
    ]
    results = await reader.read_batch(requests)

    seats = []
    for seat_index, result in enumerate(results):
        if not result.ok:
            logger.debug(f"Seat {seat_index} unreadable, treating as empty: {result.error}")
            continue
        if _has_address(result):
            seats.append(OccupiedSeat(address=result.value, seat_index=seat_index))
    return seats


async def resolve_candidates(
    reader: ChainReader, config: NetworkConfig, seats: list[OccupiedSeat]
) -> list[Member]:
    """Attach candidateInfos() to every occupied seat. Batch index i is seats[i]."""
    requests = [
        ReadRequest(
            address=config.dao_committee,
            abi="committee",
            function="candidateInfos",
            args=(seat.address,),
        )
        for seat in seats
    ]
    results = await reader.read_batch(requests)

    members = []
    for seat, result in zip(seats, results):
        candidate_info = None
        if result.ok:
            try:
                candidate_info = parse_candidate_info(result.value)
            except (TypeError, ValueError) as e:
                logger.warning(f"Malformed candidateInfos for {seat.address}: {e}")
        else:
            logger.warning(f"Failed to read candidateInfos for {seat.address}: {result.error}")

        members.append(
            Member(
                candidate=seat.address,
                seat_index=seat.seat_index,
                candidate_info=candidate_info,
            )
        )
    return members


async def scan_directory(reader: ChainReader, config: NetworkConfig) -> list[Member]:
    """Seats plus candidate metadata, without operator links."""
    max_members = await read_max_members(reader, config)
    seats = await scan_seats(reader, config, max_members)
    return await resolve_candidates(reader, config, seats)


async def link_operators(
    reader: ChainReader, config: NetworkConfig, members: list[Member]
) -> list[Member]:
    """
    Resolve each member's operator manager and the manager it delegates to.

    The manager() batch only covers members with a valid operator manager, so
    its results are mapped back through valid_to_member.
    """
    operator_requests = [
        ReadRequest(
            address=config.layer2_manager,
            abi="layer2_manager",
            function="operatorOfLayer",
            args=(member.candidate_info.candidate_contract if member.candidate_info else None,),
        )
        for member in members
    ]
    operator_results = await reader.read_batch(operator_requests)

    linked = [member.model_copy(update={"operator_manager": None, "manager": None}) for member in members]

    # valid operator index -> original member index
    valid_to_member: dict[int, int] = {}
    manager_requests = []
    for member_index, result in enumerate(operator_results):
        if not _has_address(result):
            continue
        linked[member_index].operator_manager = result.value
        valid_to_member[len(manager_requests)] = member_index
        manager_requests.append(
            ReadRequest(address=result.value, abi="operator_manager", function="manager")
        )

    if not manager_requests:
        return linked

    manager_results = await reader.read_batch(manager_requests)
    for valid_index, result in enumerate(manager_results):
        member_index = valid_to_member.get(valid_index)
        if member_index is None:
            continue
        if _has_address(result):
            linked[member_index].manager = result.value
        else:
            logger.debug(
                f"No manager for operator {linked[member_index].operator_manager}: {result.error}"
            )

    return linked


def _staking_requests(config: NetworkConfig, member: Member) -> list[ReadRequest]:
    candidate_contract = member.candidate_info.candidate_contract if member.candidate_info else None
    return [
        ReadRequest(address=candidate_contract, abi="candidate", function="memo"),
        ReadRequest(address=candidate_contract, abi="candidate", function="totalStaked"),
        ReadRequest(
            address=config.dao_committee,
            abi="committee",
            function="getClaimableActivityReward",
            args=(member.candidate,),
        ),
        ReadRequest(
            address=config.seig_manager,
            abi="seig_manager",
            function="lastCommitBlock",
            args=(candidate_contract,),
        ),
    ]


def _int_or_none(result: ReadResult) -> int | None:
    if not result.ok or result.value is None:
        return None
    return int(result.value)


async def aggregate_staking(
    reader: ChainReader, config: NetworkConfig, members: list[Member]
) -> list[StakingInfo]:
    """Memo, stake, reward and last seigniorage update for every member."""
    requests = [req for member in members for req in _staking_requests(config, member)]
    results = await reader.read_batch(requests)

    staking_info = []
    for i, member in enumerate(members):
        start = i * STAKING_READS_PER_MEMBER
        memo_result, staked_result, reward_result, commit_result = results[
            start : start + STAKING_READS_PER_MEMBER
        ]

        total_staked = _int_or_none(staked_result)
        claimable = _int_or_none(reward_result)
        last_commit_block = _int_or_none(commit_result) or 0

        last_update_time = 0
        if last_commit_block > 0:
            block_result = await reader.get_block_timestamp(last_commit_block)
            if block_result.ok:
                last_update_time = int(block_result.value)
            else:
                logger.warning(
                    f"Failed to get timestamp of block {last_commit_block}: {block_result.error}"
                )

        staking_info.append(
            StakingInfo(
                candidate=member.candidate,
                candidate_info=member.candidate_info,
                memo=str(memo_result.value) if memo_result.ok and memo_result.value is not None else "",
                total_staked=format_token_amount(total_staked, "WTON", WTON_DECIMALS),
                total_staked_raw=total_staked,
                claimable_activity_reward=format_token_amount(claimable, "WTON", REWARD_DECIMALS),
                claimable_activity_reward_raw=claimable,
                last_commit_block=last_commit_block,
                last_update_seigniorage_time=last_update_time,
                operator_manager=member.operator_manager,
                manager=member.manager,
            )
        )
    return staking_info
