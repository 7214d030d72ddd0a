"""Tests for the CommitteeService entry points."""

from __future__ import annotations

import pytest
from conftest import (
    CHALLENGER,
    CONTRACT_A,
    CONTRACT_B,
    MANAGER_A,
    MEMBER_A,
    MEMBER_B,
    OPERATOR_A,
)

from dao_dashboard.services.committee_service import CommitteeService

RAY = 10**27


@pytest.fixture
def service(committee_reader, config):
    return CommitteeService(reader=committee_reader, config=config)


@pytest.fixture
def broken_service(reader, config):
    """No maxMember response: the committee cannot be enumerated."""
    return CommitteeService(reader=reader, config=config)


@pytest.fixture
def with_operator(committee_reader, config):
    committee_reader.set(config.layer2_manager, "operatorOfLayer", CONTRACT_A, value=OPERATOR_A)
    committee_reader.set(OPERATOR_A, "manager", value=MANAGER_A)
    return committee_reader


class TestCommitteeService:
    def test_network_defaults_to_mainnet(self, reader):
        assert CommitteeService("unknown", reader=reader).network == "mainnet"
        assert CommitteeService("sepolia", reader=reader).network == "sepolia"

    async def test_member_count(self, service):
        assert await service.get_member_count() == 3

    async def test_member_count_failure(self, broken_service):
        assert await broken_service.get_member_count() == 0

    async def test_scan_committee(self, service):
        members = await service.scan_committee()

        assert [(m.candidate, m.seat_index) for m in members] == [(MEMBER_A, 0), (MEMBER_B, 2)]
        assert all(m.operator_manager is None for m in members)

    async def test_scan_committee_with_operators(self, service, with_operator):
        members = await service.scan_committee(include_operator_links=True)

        assert members[0].operator_manager == OPERATOR_A
        assert members[0].manager == MANAGER_A
        assert members[1].manager is None

    async def test_scan_failure_is_empty(self, broken_service):
        assert await broken_service.scan_committee() == []
        assert await broken_service.get_staking_directory() == []

    async def test_staking_directory(self, service, committee_reader):
        committee_reader.set(CONTRACT_B, "totalStaked", value=7 * RAY)

        info = await service.get_staking_directory()

        assert [s.candidate for s in info] == [MEMBER_A, MEMBER_B]
        assert info[0].total_staked == "0 WTON"
        assert info[1].total_staked == "7 WTON"

    async def test_staking_directory_with_operators(self, service, with_operator):
        info = await service.get_staking_directory(include_operator_links=True)

        assert info[0].manager == MANAGER_A
        assert info[0].operator_manager == OPERATOR_A

    async def test_check_membership_by_candidate(self, service):
        assert await service.check_membership(MEMBER_B.upper().replace("0X", "0x")) is True

    async def test_check_membership_by_manager(self, service, with_operator):
        assert await service.check_membership(MANAGER_A) is True

    async def test_check_membership_unknown(self, service):
        assert await service.check_membership(CHALLENGER) is False

    async def test_check_membership_failure(self, broken_service):
        assert await broken_service.check_membership(MEMBER_A) is False

    async def test_evaluate_challenge_never_raises(self, broken_service):
        info = await broken_service.evaluate_challenge(0, CHALLENGER)
        assert info.can_challenge is False

    async def test_activity_reward_failure(self, broken_service):
        result = await broken_service.resolve_activity_reward(CHALLENGER)
        assert result.ok is False
        assert result.beneficiary == CHALLENGER
