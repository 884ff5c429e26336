from onchain.exceptions import MetadataFetchError, RequiredFieldFetchError, TokenDataError, UnsupportedTokenType
from onchain.models import (
    ERC20TokenData,
    ERC20Type,
    ERC721TokenData,
    ERC721Type,
    ERC1155TokenData,
    ERC1155Type,
    FetchHandler,
    ResolverConfig,
    TokenRecord,
    TokenStandard,
    TokenSubType,
    TokenTypeDescriptor,
)
from onchain.service.metadata_resolver_service import MetadataResolverService, default_fetch_handler, normalize_uri
from onchain.service.standard_detector_service import StandardDetectorService
from onchain.service.token_data_service import token_data

__all__ = [
    "ERC20TokenData",
    "ERC20Type",
    "ERC721TokenData",
    "ERC721Type",
    "ERC1155TokenData",
    "ERC1155Type",
    "FetchHandler",
    "MetadataFetchError",
    "MetadataResolverService",
    "RequiredFieldFetchError",
    "ResolverConfig",
    "StandardDetectorService",
    "TokenDataError",
    "TokenRecord",
    "TokenStandard",
    "TokenSubType",
    "TokenTypeDescriptor",
    "UnsupportedTokenType",
    "default_fetch_handler",
    "normalize_uri",
    "token_data",
]
