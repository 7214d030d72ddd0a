"""Main service for committee directory, staking and challenge queries."""

import logging

from ..core.networks import NetworkConfig, get_network_config
from ..core.types import ActivityReward, ChallengeInfo, Member, StakingInfo
from ..data.chain_reader import ChainReader, Web3ChainReader
from . import activity_reward, challenge, committee

logger = logging.getLogger(__name__)


class CommitteeService:
    """Orchestrates the committee read pipelines for one network."""

    def __init__(
        self,
        network: str | None = "mainnet",
        rpc_url: str | None = None,
        reader: ChainReader | None = None,
        config: NetworkConfig | None = None,
    ):
        self.config = config or get_network_config(network)
        self.reader = reader or Web3ChainReader(self.config, rpc_url)

    @property
    def network(self) -> str:
        return self.config.network.value

    async def get_member_count(self) -> int:
        """Committee capacity (maxMember). Returns 0 if it cannot be read."""
        try:
            return await committee.read_max_members(self.reader, self.config)
        except Exception as e:
            logger.error(f"Failed to get DAO member count on {self.network}: {e}")
            return 0

    async def scan_committee(self, include_operator_links: bool = False) -> list[Member]:
        """
        Main entry point: all occupied seats with candidate metadata.
        Returns an empty list when the committee cannot be enumerated.
        """
        try:
            members = await committee.scan_directory(self.reader, self.config)
            if include_operator_links:
                members = await committee.link_operators(self.reader, self.config, members)
            return members
        except Exception as e:
            logger.error(f"Failed to get DAO members on {self.network}: {e}")
            return []

    async def get_staking_directory(self, include_operator_links: bool = False) -> list[StakingInfo]:
        """Staking info for every committee member."""
        members = await self.scan_committee(include_operator_links)
        if not members:
            return []
        try:
            return await committee.aggregate_staking(self.reader, self.config, members)
        except Exception as e:
            logger.error(f"Failed to get DAO members staking info on {self.network}: {e}")
            return []

    async def check_membership(self, address: str) -> bool:
        """True if address is a member's seat occupant or that member's manager."""
        members = await self.scan_committee(include_operator_links=True)
        needle = address.lower()
        return any(
            member.candidate.lower() == needle
            or (member.manager is not None and member.manager.lower() == needle)
            for member in members
        )

    async def evaluate_challenge(self, seat_index: int, challenger_contract: str) -> ChallengeInfo:
        return await challenge.evaluate_challenge(
            self.reader, self.config, seat_index, challenger_contract
        )

    async def resolve_activity_reward(self, candidate_contract: str) -> ActivityReward:
        try:
            return await activity_reward.resolve_activity_reward(
                self.reader, self.config, candidate_contract
            )
        except Exception as e:
            logger.error(f"Failed to get activity reward of {candidate_contract} on {self.network}: {e}")
            return activity_reward.failed_reward(candidate_contract)
