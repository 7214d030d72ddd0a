"""Configuration management using pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # RPC Configuration
    mainnet_rpc_url: str = "https://eth.llamarpc.com"
    sepolia_rpc_url: str = "https://ethereum-sepolia-rpc.publicnode.com"

    # JSON-RPC batch size (requests per HTTP round trip)
    rpc_batch_size: int = 50

    # DAO Committee proxies
    mainnet_dao_committee_address: str = "0xDD9f0cCc044B0781289Ee318e5971b0139602C26"
    sepolia_dao_committee_address: str = "0xA2101482b28E3D99ff6ced517bA41EFf4971a386"

    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
