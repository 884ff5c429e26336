from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from constants.constants import DEFAULT_ARWEAVE_GATEWAY, DEFAULT_IPFS_GATEWAY


class AppSettings(BaseSettings):
    """General application settings."""

    name: str = Field("Onchain Token Data", validation_alias="APP_NAME")
    debug: bool = Field(False, validation_alias="DEBUG")
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


class EthereumSettings(BaseSettings):
    """Settings related to the Ethereum node connection used by the CLI."""

    provider_uri: Optional[str] = Field(
        default=None,
        validation_alias="PROVIDER_URI",
        description="Ethereum Node JSON-RPC URL",
    )
    # Timeout for RPC calls (seconds)
    rpc_timeout: int = Field(default=60, gt=0, validation_alias="RPC_TIMEOUT")

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


class MetadataSettings(BaseSettings):
    """Settings for the default metadata fetcher and URI normalization."""

    ipfs_gateway: str = Field(default=DEFAULT_IPFS_GATEWAY, validation_alias="METADATA_IPFS_GATEWAY")
    arweave_gateway: str = Field(default=DEFAULT_ARWEAVE_GATEWAY, validation_alias="METADATA_ARWEAVE_GATEWAY")
    # Total timeout for a metadata GET (seconds)
    http_timeout: int = Field(default=30, gt=0, validation_alias="METADATA_HTTP_TIMEOUT")
    user_agent: str = Field(default="onchain-token-data/0.1", validation_alias="METADATA_USER_AGENT")

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


class Settings(BaseSettings):
    """
    Main Settings class that composes all sub-settings.
    Each section is a BaseSettings of its own so flat env vars map onto the nested structure.
    """

    app: AppSettings = Field(default_factory=AppSettings)
    ethereum: EthereumSettings = Field(default_factory=EthereumSettings)
    metadata: MetadataSettings = Field(default_factory=MetadataSettings)

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


# Singleton instance
settings = Settings()
