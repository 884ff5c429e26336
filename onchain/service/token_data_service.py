from typing import Any, Mapping, Optional, Union

from onchain.exceptions import MetadataFetchError
from onchain.models.resolver_config import ResolverConfig
from onchain.models.token_record import ERC721TokenData, ERC1155TokenData, TokenRecord
from onchain.models.token_type import ERC721Type, ERC1155Type
from onchain.service.metadata_resolver_service import MetadataResolverService, expand_erc1155_uri
from onchain.service.standard_detector_service import StandardDetectorService
from utils.async_utils import gather_all
from utils.logger_utils import get_logger

logger = get_logger("Token Data Service")


async def token_data(
    web3,
    address: str,
    token_id: Optional[int] = None,
    config: Union[ResolverConfig, Mapping[str, Any], None] = None,
) -> TokenRecord:
    """
    Detects the token standard of `address` and returns its typed record.

    Args:
        web3: AsyncWeb3 instance used for every contract call.
        address: Contract address, any case.
        token_id: Token id, required for ERC721 and ERC1155 contracts.
        config: ResolverConfig (or a dict of its fields, camelCase accepted).

    Raises:
        UnsupportedTokenType: no standard matched ("Unsupported token type").
        RequiredFieldFetchError: ownerOf failed or no token id was given for an NFT.
        MetadataFetchError: metadata was requested but could not be produced.
    """
    config = _to_resolver_config(config)
    if token_id is not None:
        token_id = int(token_id)

    detector = StandardDetectorService(web3)
    detection = await detector.detect_token(address)

    if detection.erc20_data is not None:
        return detection.erc20_data

    resolver = MetadataResolverService(config)
    if isinstance(detection.type, ERC721Type):
        return await _erc721_token_data(detector, resolver, config, detection.address, token_id, detection.type)
    if isinstance(detection.type, ERC1155Type):
        return await _erc1155_token_data(detector, resolver, config, detection.address, token_id, detection.type)

    raise TypeError(f"Unhandled token type {detection.type!r}")


async def _erc721_token_data(detector, resolver, config, address, token_id, token_type) -> ERC721TokenData:
    owner, token_uri = await detector.read_erc721(address, token_id, token_type)

    if config.include_token_metadata and not token_uri:
        raise MetadataFetchError(f"tokenURI is not available for token {token_id} of {address}", uri=token_uri)

    token_metadata, contract_metadata = await gather_all(
        resolver.resolve(token_uri) if config.include_token_metadata else _absent(),
        _resolve_contract_metadata(detector, resolver, address) if config.include_contract_metadata else _absent(),
    )

    return ERC721TokenData(
        owner=owner,
        token_uri=token_uri,
        token_metadata=token_metadata,
        contract_metadata=contract_metadata,
        type=token_type,
    )


async def _erc1155_token_data(detector, resolver, config, address, token_id, token_type) -> ERC1155TokenData:
    uri = await detector.read_erc1155_uri(address, token_id)

    token_metadata = None
    if config.include_token_metadata:
        if not uri:
            raise MetadataFetchError(f"uri is not available for token {token_id} of {address}", uri=uri)
        token_metadata = await resolver.resolve(expand_erc1155_uri(uri, token_id))

    return ERC1155TokenData(uri=uri, token_metadata=token_metadata, type=token_type)


async def _resolve_contract_metadata(detector, resolver, address) -> Any:
    contract_uri = await detector.read_contract_uri(address)
    if contract_uri is None:
        logger.debug(f"{address} exposes no contractURI, skipping contract metadata")
        return None
    return await resolver.resolve(contract_uri)


def _to_resolver_config(config) -> ResolverConfig:
    if config is None:
        return ResolverConfig()
    if isinstance(config, ResolverConfig):
        return config
    return ResolverConfig.model_validate(config)


async def _absent():
    return None
