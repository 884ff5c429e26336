from onchain.models.resolver_config import FetchHandler, ResolverConfig
from onchain.models.token_record import ERC20TokenData, ERC721TokenData, ERC1155TokenData, TokenRecord
from onchain.models.token_type import (
    ERC20Type,
    ERC721Type,
    ERC1155Type,
    TokenStandard,
    TokenSubType,
    TokenTypeDescriptor,
)

__all__ = [
    "ERC20TokenData",
    "ERC20Type",
    "ERC721TokenData",
    "ERC721Type",
    "ERC1155TokenData",
    "ERC1155Type",
    "FetchHandler",
    "ResolverConfig",
    "TokenRecord",
    "TokenStandard",
    "TokenSubType",
    "TokenTypeDescriptor",
]
