"""Shared fixtures: an in-memory chain reader and a test network config."""

from __future__ import annotations

from typing import Any

import pytest

from dao_dashboard.core.contracts import ZERO_ADDRESS
from dao_dashboard.core.networks import NetworkConfig, get_network_config
from dao_dashboard.core.types import ReadRequest, ReadResult

# ─── Addresses ────────────────────────────────────────────────

MEMBER_A = "0x00000000000000000000000000000000000000a1"
MEMBER_B = "0x00000000000000000000000000000000000000b1"
MEMBER_C = "0x00000000000000000000000000000000000000c1"
CONTRACT_A = "0x00000000000000000000000000000000000000a2"
CONTRACT_B = "0x00000000000000000000000000000000000000b2"
CONTRACT_C = "0x00000000000000000000000000000000000000c2"
OPERATOR_A = "0x00000000000000000000000000000000000000a3"
MANAGER_A = "0x00000000000000000000000000000000000000a4"
CHALLENGER = "0x00000000000000000000000000000000000000d2"
CHALLENGER_CANDIDATE = "0x00000000000000000000000000000000000000d1"


def _norm(value: Any) -> Any:
    return value.lower() if isinstance(value, str) else value


class FakeChainReader:
    """
    Answers reads from a response table keyed by (address, function, args).

    Unknown keys behave like a reverted call. Every batch and single read is
    recorded so tests can assert on what was asked.
    """

    def __init__(self) -> None:
        self.responses: dict[tuple, Any] = {}
        self.blocks: dict[int, Any] = {}
        self.batches: list[list[ReadRequest]] = []
        self.single_reads: list[ReadRequest] = []
        self.block_reads: list[int] = []

    def set(self, address: str, function: str, *args: Any, value: Any) -> FakeChainReader:
        self.responses[(_norm(address), function, tuple(_norm(a) for a in args))] = value
        return self

    def _resolve(self, request: ReadRequest) -> ReadResult:
        key = (_norm(request.address), request.function, tuple(_norm(a) for a in request.args))
        if request.address is None or key not in self.responses:
            return ReadResult(error=f"execution reverted: {request.function}")
        value = self.responses[key]
        if isinstance(value, Exception):
            return ReadResult(error=str(value))
        return ReadResult(value=value)

    async def read_one(self, request: ReadRequest) -> ReadResult:
        self.single_reads.append(request)
        return self._resolve(request)

    async def read_batch(self, requests: list[ReadRequest]) -> list[ReadResult]:
        self.batches.append(list(requests))
        return [self._resolve(r) for r in requests]

    async def get_block_timestamp(self, block_number: int) -> ReadResult:
        self.block_reads.append(block_number)
        value = self.blocks.get(block_number)
        if value is None:
            return ReadResult(error=f"block {block_number} not found")
        if isinstance(value, Exception):
            return ReadResult(error=str(value))
        return ReadResult(value=value)

    # ─── committee helpers ────────────────────────────────────

    def committee(self, config: NetworkConfig, seats: list[str | Exception]) -> FakeChainReader:
        """Set maxMember and members(i) for every seat."""
        self.set(config.dao_committee, "maxMember", value=len(seats))
        for i, occupant in enumerate(seats):
            self.set(config.dao_committee, "members", i, value=occupant)
        return self

    def candidate(
        self,
        config: NetworkConfig,
        occupant: str,
        contract: str,
        seat_index: int,
        joined: int = 1_700_000_000,
    ) -> FakeChainReader:
        self.set(
            config.dao_committee,
            "candidateInfos",
            occupant,
            value=(contract, seat_index, joined, 0, 0),
        )
        return self


@pytest.fixture
def config() -> NetworkConfig:
    return get_network_config("mainnet")


@pytest.fixture
def reader() -> FakeChainReader:
    return FakeChainReader()


@pytest.fixture
def committee_reader(config: NetworkConfig, reader: FakeChainReader) -> FakeChainReader:
    """Three seats: A at 0, empty 1, B at 2."""
    reader.committee(config, [MEMBER_A, ZERO_ADDRESS, MEMBER_B])
    reader.candidate(config, MEMBER_A, CONTRACT_A, 0)
    reader.candidate(config, MEMBER_B, CONTRACT_B, 2)
    return reader
