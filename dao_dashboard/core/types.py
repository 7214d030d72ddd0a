"""Data models for the DAO committee dashboard."""

from typing import Any

from pydantic import BaseModel, computed_field


class ReadRequest(BaseModel):
    """A single view call: contract address, ABI name, function and arguments."""

    address: str | None
    abi: str
    function: str
    args: tuple[Any, ...] = ()


class ReadResult(BaseModel):
    """Outcome of one view call. Exactly one of value/error is meaningful."""

    value: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class OccupiedSeat(BaseModel):
    """A committee seat holding a non-zero occupant."""

    address: str
    seat_index: int


class CandidateInfo(BaseModel):
    """candidateInfos() entry of a committee member."""

    candidate_contract: str
    index_members: int
    member_joined_time: int
    reward_period: int
    claimed_timestamp: int

    model_config = {"frozen": True}


class Member(BaseModel):
    """
    Seat occupant with its resolved links.

    candidate_info is None when the seat is occupied but its metadata could
    not be read; that is not the same thing as an empty seat.
    """

    candidate: str
    seat_index: int
    candidate_info: CandidateInfo | None = None
    operator_manager: str | None = None
    manager: str | None = None


class StakingInfo(BaseModel):
    """Staking and reward state of one committee member."""

    candidate: str
    candidate_info: CandidateInfo | None = None
    memo: str = ""

    # Formatted amounts, e.g. "1234.5 WTON"
    total_staked: str
    claimable_activity_reward: str

    # Raw on-chain amounts, None when the read failed
    total_staked_raw: int | None = None
    claimable_activity_reward_raw: int | None = None

    last_commit_block: int = 0
    last_update_seigniorage_time: int = 0

    operator_manager: str | None = None
    manager: str | None = None


class ChallengeInfo(BaseModel):
    """Result of checking whether a candidate may take over a committee seat."""

    member_candidate: str
    challenger_candidate: str
    required_stake: int
    current_stake: int
    challenge_reason: str | None = None

    @computed_field
    @property
    def can_challenge(self) -> bool:
        return self.challenge_reason is None


class ActivityReward(BaseModel):
    """Claimable activity reward of one candidate contract."""

    ok: bool
    candidate_contract: str
    candidate: str
    beneficiary: str
    reward: int
    formatted_reward: str
