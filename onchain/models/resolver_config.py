from typing import Any, Awaitable, Callable, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# url -> parsed JSON, sync or async
FetchHandler = Callable[[str], Union[Any, Awaitable[Any]]]


class ResolverConfig(BaseModel):
    """
    Options for token_data().

    include_token_metadata: resolve tokenURI (ERC721) / uri (ERC1155) into tokenMetadata.
    include_contract_metadata: resolve contractURI into contractMetadata (ERC721 only).
    ipfs_gateway_domain: gateway used for ipfs:// URIs instead of the configured default.
    fetch_handler: replaces the default aiohttp GET; its return value is stored verbatim.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, arbitrary_types_allowed=True)

    include_token_metadata: bool = Field(default=False, alias="includeTokenMetadata")
    include_contract_metadata: bool = Field(default=False, alias="includeContractMetadata")
    ipfs_gateway_domain: Optional[str] = Field(default=None, alias="ipfsGatewayDomain")
    fetch_handler: Optional[FetchHandler] = Field(default=None, alias="fetchHandler", exclude=True)
