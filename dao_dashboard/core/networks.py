"""Per-network chain context and contract address tables."""

from enum import Enum

from pydantic import BaseModel

from .config import Settings, get_settings


class Network(str, Enum):
    MAINNET = "mainnet"
    SEPOLIA = "sepolia"

    @classmethod
    def from_name(cls, name: str | None) -> "Network":
        """Resolve a network name, falling back to mainnet for anything unknown."""
        try:
            return cls((name or "").strip().lower())
        except ValueError:
            return cls.MAINNET


class NetworkConfig(BaseModel):
    """RPC endpoint and contract addresses used by every read."""

    network: Network
    rpc_url: str
    dao_committee: str
    seig_manager: str
    layer2_manager: str

    model_config = {"frozen": True}


NETWORK_ADDRESSES = {
    Network.MAINNET: {
        "seig_manager": "0x0b55a0f463b6defb81c6063973763951712d0e5f",
        "layer2_manager": "0xD6Bf6B2b7553c8064Ba763AD6989829060FdFC1D",
    },
    Network.SEPOLIA: {
        "seig_manager": "0x2320542ae933FbAdf8f5B97cA348c7CeDA90fAd7",
        "layer2_manager": "0x58B4C2FEf19f5CDdd944AadD8DC99cCC71bfeFDc",
    },
}


def get_network_config(
    network: str | Network | None = None, settings: Settings | None = None
) -> NetworkConfig:
    """Build the configuration for a network name (unknown names mean mainnet)."""
    settings = settings or get_settings()
    resolved = network if isinstance(network, Network) else Network.from_name(network)

    if resolved is Network.SEPOLIA:
        rpc_url = settings.sepolia_rpc_url
        dao_committee = settings.sepolia_dao_committee_address
    else:
        rpc_url = settings.mainnet_rpc_url
        dao_committee = settings.mainnet_dao_committee_address

    return NetworkConfig(
        network=resolved,
        rpc_url=rpc_url,
        dao_committee=dao_committee,
        **NETWORK_ADDRESSES[resolved],
    )
