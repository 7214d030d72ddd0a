"""On-chain reads via Web3, single and batched."""

import logging
from typing import Any, Protocol

from web3 import Web3

from ..core.config import get_settings
from ..core.contracts import ABIS
from ..core.networks import NetworkConfig
from ..core.types import ReadRequest, ReadResult

logger = logging.getLogger(__name__)


class ChainReader(Protocol):
    """
    Read access to one network.

    read_batch returns exactly one ReadResult per request, in request order.
    A failing item is reported in its own result and never aborts the batch.
    """

    async def read_one(self, request: ReadRequest) -> ReadResult: ...

    async def read_batch(self, requests: list[ReadRequest]) -> list[ReadResult]: ...

    async def get_block_timestamp(self, block_number: int) -> ReadResult: ...


def _error_message(error: Exception) -> str:
    return str(error) or type(error).__name__


class Web3ChainReader:
    """ChainReader backed by a Web3 HTTP provider."""

    def __init__(
        self,
        network: NetworkConfig,
        rpc_url: str | None = None,
        batch_size: int | None = None,
    ):
        self.network = network
        self.w3 = Web3(Web3.HTTPProvider(rpc_url or network.rpc_url))
        self.batch_size = batch_size or get_settings().rpc_batch_size

    def _build_call(self, request: ReadRequest) -> Any:
        """Turn a ReadRequest into a bound contract function. Raises if it cannot."""
        if not request.address:
            raise ValueError(f"{request.function}: no contract address")
        contract = self.w3.eth.contract(
            address=Web3.to_checksum_address(request.address),
            abi=ABIS[request.abi],
        )
        args = [
            Web3.to_checksum_address(arg)
            if isinstance(arg, str) and Web3.is_address(arg)
            else arg
            for arg in request.args
        ]
        return getattr(contract.functions, request.function)(*args)

    async def read_one(self, request: ReadRequest) -> ReadResult:
        try:
            return ReadResult(value=self._build_call(request).call())
        except Exception as e:
            logger.debug(f"Read {request.function}@{request.address} failed: {e}")
            return ReadResult(error=_error_message(e))

    async def read_batch(self, requests: list[ReadRequest]) -> list[ReadResult]:
        """
        Read many view functions at once.

        Tries JSON-RPC batch requests first (one round trip per chunk). Not all
        RPCs support batching, and a batch fails as a whole if any call in it
        reverts, so a failed chunk is retried call by call.
        """
        results: list[ReadResult | None] = [None] * len(requests)

        # Requests that cannot even be built fail on their own
        calls: list[tuple[int, Any]] = []
        for index, request in enumerate(requests):
            try:
                calls.append((index, self._build_call(request)))
            except Exception as e:
                results[index] = ReadResult(error=_error_message(e))

        for start in range(0, len(calls), self.batch_size):
            chunk = calls[start : start + self.batch_size]
            try:
                with self.w3.batch_requests() as batch:
                    for _, call in chunk:
                        batch.add(call)
                    values = batch.execute()
                for (index, _), value in zip(chunk, values):
                    results[index] = ReadResult(value=value)
                continue
            except Exception as e:
                logger.debug(f"Batch of {len(chunk)} calls failed, reading sequentially: {e}")

            for index, call in chunk:
                try:
                    results[index] = ReadResult(value=call.call())
                except Exception as e:
                    results[index] = ReadResult(error=_error_message(e))

        return [r if r is not None else ReadResult(error="no result") for r in results]

    async def get_block_timestamp(self, block_number: int) -> ReadResult:
        try:
            block = self.w3.eth.get_block(block_number)
            return ReadResult(value=int(block["timestamp"]))
        except Exception as e:
            logger.debug(f"Failed to get block {block_number}: {e}")
            return ReadResult(error=_error_message(e))
