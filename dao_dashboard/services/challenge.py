"""Challenge eligibility: may a candidate take over a committee seat?"""

import logging

from ..core.exceptions import CommitteeReadError
from ..core.networks import NetworkConfig
from ..core.types import ChallengeInfo, Member, ReadRequest
from ..data.chain_reader import ChainReader
from .committee import read_max_members, resolve_candidates, scan_seats

logger = logging.getLogger(__name__)

ALREADY_MEMBER = "Challenger is already a DAO committee member"
SLOT_EMPTY_OR_INVALID = "Member slot is empty or invalid"
SELF_CHALLENGE = "Cannot challenge your own seat"


def _same_address(a: str | None, b: str | None) -> bool:
    return bool(a) and bool(b) and a.lower() == b.lower()


def decide_challenge(
    challenger_stake: int,
    member_stake: int,
    minimum_stake: int,
    slot_valid: bool,
    member_contract: str | None,
    challenger_contract: str,
) -> str | None:
    """
    Return the reason a challenge is not allowed, or None if it is.

    Rules are checked in order and the first match wins.
    """
    if challenger_stake < minimum_stake:
        return f"Challenger stake ({challenger_stake}) must be at least {minimum_stake} TON"
    if challenger_stake <= member_stake:
        return (
            f"Challenger stake ({challenger_stake}) must be greater than "
            f"member stake ({member_stake})"
        )
    if not slot_valid:
        return SLOT_EMPTY_OR_INVALID
    if _same_address(member_contract, challenger_contract):
        return SELF_CHALLENGE
    return None


def _total_staked(candidate_contract: str) -> ReadRequest:
    return ReadRequest(address=candidate_contract, abi="candidate", function="totalStaked")


def _find_incumbent(members: list[Member], seat_index: int) -> Member | None:
    for member in members:
        if member.candidate_info and member.candidate_info.index_members == seat_index:
            return member
    return None


def _slot_valid(members: list[Member], seat_index: int) -> bool:
    """
    A seat without a resolvable incumbent is still a valid target when no
    occupant sits there. An occupant whose metadata could not be read leaves
    the seat invalid.
    """
    return all(member.seat_index != seat_index for member in members)


async def evaluate_challenge(
    reader: ChainReader,
    config: NetworkConfig,
    seat_index: int,
    challenger_contract: str,
) -> ChallengeInfo:
    """Check whether challenger_contract may replace the member at seat_index. Never raises."""
    try:
        max_members = await read_max_members(reader, config)
        seats = await scan_seats(reader, config, max_members)
        members = await resolve_candidates(reader, config, seats)

        for member in members:
            if member.candidate_info and _same_address(
                member.candidate_info.candidate_contract, challenger_contract
            ):
                return ChallengeInfo(
                    member_candidate=member.candidate,
                    challenger_candidate=challenger_contract,
                    required_stake=0,
                    current_stake=0,
                    challenge_reason=ALREADY_MEMBER,
                )

        incumbent = _find_incumbent(members, seat_index)
        minimum = ReadRequest(address=config.seig_manager, abi="seig_manager", function="minimumAmount")

        if incumbent is not None:
            results = await reader.read_batch(
                [
                    _total_staked(incumbent.candidate_info.candidate_contract),
                    _total_staked(challenger_contract),
                    minimum,
                ]
            )
        else:
            results = await reader.read_batch([_total_staked(challenger_contract), minimum])

        failed = [r.error for r in results if not r.ok]
        if failed:
            raise CommitteeReadError(f"Failed to read stakes: {failed[0]}")

        if incumbent is not None:
            member_stake, challenger_stake, minimum_stake = (int(r.value) for r in results)
            slot_valid = True
        else:
            member_stake = 0
            challenger_stake, minimum_stake = (int(r.value) for r in results)
            slot_valid = _slot_valid(members, seat_index)

        reason = decide_challenge(
            challenger_stake=challenger_stake,
            member_stake=member_stake,
            minimum_stake=minimum_stake,
            slot_valid=slot_valid,
            member_contract=incumbent.candidate_info.candidate_contract if incumbent else None,
            challenger_contract=challenger_contract,
        )

        return ChallengeInfo(
            member_candidate=incumbent.candidate if incumbent else "",
            challenger_candidate=challenger_contract,
            required_stake=member_stake,
            current_stake=challenger_stake,
            challenge_reason=reason,
        )

    except Exception as e:
        logger.error(f"Challenge evaluation for seat {seat_index} failed: {e}")
        return ChallengeInfo(
            member_candidate="",
            challenger_candidate=challenger_contract,
            required_stake=0,
            current_stake=0,
            challenge_reason=f"Failed to get challenge info: {e}",
        )
