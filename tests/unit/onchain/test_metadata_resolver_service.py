import base64
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from config.settings import settings
from onchain.exceptions import MetadataFetchError
from onchain.models.resolver_config import ResolverConfig
from onchain.service.metadata_resolver_service import (
    MetadataResolverService,
    default_fetch_handler,
    expand_erc1155_uri,
    normalize_uri,
    parse_json_data_uri,
)

CID = "QmeSjSinHpPnmXmspMjwiXyN6zS4E9zccariGR3jxcaWtq"
CID_V1 = "bafybeigdyrzt5sfp7udm7hu76uh7y26nf3efuylqabf3oclgtqy55fbzdi"


@pytest.fixture
def default_gateway():
    with patch.object(settings.metadata, "ipfs_gateway", "https://ipfs.io"):
        yield "https://ipfs.io"


def _data_uri(payload: bytes) -> str:
    return "data:application/json;base64," + base64.b64encode(payload).decode("ascii")


@pytest.mark.asyncio
async def test_resolve_base64_data_uri_without_network():
    fetch_handler = MagicMock()
    resolver = MetadataResolverService(ResolverConfig(fetch_handler=fetch_handler))

    result = await resolver.resolve(_data_uri(b'{"a":1}'))

    assert result == {"a": 1}
    fetch_handler.assert_not_called()


def test_parse_utf8_data_uri():
    uri = 'data:application/json;utf8,{"name":"On%20chain"}'

    assert parse_json_data_uri(uri) == {"name": "On chain"}


@pytest.mark.parametrize(
    "uri",
    [
        "data:application/json;base64,bm90IGpzb24=",  # "not json"
        "data:application/json;base64,abc",
        "data:application/json;base64",
    ],
)
def test_parse_invalid_data_uri_raises(uri):
    with pytest.raises(MetadataFetchError):
        parse_json_data_uri(uri)


@pytest.mark.asyncio
async def test_resolve_ipfs_uses_custom_gateway():
    fetch_handler = AsyncMock(return_value={"name": "Ape #1"})
    resolver = MetadataResolverService(
        ResolverConfig(ipfsGatewayDomain="https://dweb.link", fetchHandler=fetch_handler)
    )

    result = await resolver.resolve(f"ipfs://{CID}/1")

    fetch_handler.assert_awaited_once_with(f"https://dweb.link/ipfs/{CID}/1")
    assert result == {"name": "Ape #1"}


@pytest.mark.asyncio
async def test_resolve_accepts_sync_fetch_handler():
    resolver = MetadataResolverService(ResolverConfig(fetch_handler=lambda url: {"url": url}))

    assert await resolver.resolve("https://example.com/1.json") == {"url": "https://example.com/1.json"}


@pytest.mark.asyncio
async def test_resolve_wraps_fetch_handler_errors():
    fetch_handler = AsyncMock(side_effect=aiohttp.ClientError("404"))
    resolver = MetadataResolverService(ResolverConfig(fetch_handler=fetch_handler))

    with pytest.raises(MetadataFetchError) as exc_info:
        await resolver.resolve("https://example.com/1.json")

    assert isinstance(exc_info.value.__cause__, aiohttp.ClientError)
    assert exc_info.value.uri == "https://example.com/1.json"


@pytest.mark.asyncio
@pytest.mark.parametrize("uri", [None, ""])
async def test_resolve_without_uri_raises(uri):
    with pytest.raises(MetadataFetchError):
        await MetadataResolverService().resolve(uri)


def test_normalize_ipfs_default_gateway(default_gateway):
    assert normalize_uri(f"ipfs://{CID}/1") == f"{default_gateway}/ipfs/{CID}/1"


def test_normalize_ipfs_redundant_ipfs_segment(default_gateway):
    assert normalize_uri(f"ipfs://ipfs/{CID}") == f"{default_gateway}/ipfs/{CID}"


@pytest.mark.parametrize("gateway", ["dweb.link", "https://dweb.link/", "https://dweb.link/ipfs/"])
def test_normalize_gateway_domain_forms(gateway):
    assert normalize_uri(f"ipfs://{CID}", gateway) == f"https://dweb.link/ipfs/{CID}"


def test_normalize_http_unchanged():
    uri = "https://api.example.com/token/1?x=y"

    assert normalize_uri(uri, "https://dweb.link") == uri


def test_normalize_arweave():
    with patch.object(settings.metadata, "arweave_gateway", "https://arweave.net"):
        assert normalize_uri("ar://abc123") == "https://arweave.net/abc123"


@pytest.mark.parametrize("uri", [f"/ipfs/{CID}/1", f"ipfs/{CID}/1", f"{CID}/1"])
def test_normalize_gateway_relative_and_bare_cid(default_gateway, uri):
    assert normalize_uri(uri) == f"{default_gateway}/ipfs/{CID}/1"


def test_normalize_bare_cid_v1(default_gateway):
    assert normalize_uri(CID_V1) == f"{default_gateway}/ipfs/{CID_V1}"


@pytest.mark.parametrize("uri", ["not a uri", "ftp://example.com/1.json"])
def test_normalize_unfetchable_raises(uri):
    with pytest.raises(MetadataFetchError):
        normalize_uri(uri)


def test_expand_erc1155_uri():
    template = "https://example.com/api/{id}.json"

    assert expand_erc1155_uri(template, 314592) == (
        "https://example.com/api/000000000000000000000000000000000000000000000000000000000004cce0.json"
    )
    assert expand_erc1155_uri("https://example.com/static.json", 1) == "https://example.com/static.json"


@pytest.mark.asyncio
async def test_default_fetch_handler_parses_json_body():
    response = MagicMock()
    response.read = AsyncMock(return_value=b'{"name": "Ape #1"}')
    session = MagicMock()
    session.get.return_value.__aenter__.return_value = response

    with patch("onchain.service.metadata_resolver_service.aiohttp.ClientSession") as MockSession:
        MockSession.return_value.__aenter__.return_value = session

        result = await default_fetch_handler("https://example.com/1.json")

    assert result == {"name": "Ape #1"}
    session.get.assert_called_once_with("https://example.com/1.json")
    response.raise_for_status.assert_called_once()


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [b"", b"  \n"])
async def test_default_fetch_handler_empty_body_is_metadata_error(body):
    response = MagicMock()
    response.read = AsyncMock(return_value=body)
    session = MagicMock()
    session.get.return_value.__aenter__.return_value = response

    with patch("onchain.service.metadata_resolver_service.aiohttp.ClientSession") as MockSession:
        MockSession.return_value.__aenter__.return_value = session

        with pytest.raises(MetadataFetchError) as exc_info:
            await MetadataResolverService().resolve("https://example.com/1.json")

    assert isinstance(exc_info.value.__cause__, ValueError)


@pytest.mark.asyncio
async def test_default_fetch_handler_http_error_becomes_metadata_error():
    response = MagicMock()
    response.raise_for_status.side_effect = aiohttp.ClientResponseError(MagicMock(), (), status=404)
    session = MagicMock()
    session.get.return_value.__aenter__.return_value = response

    with patch("onchain.service.metadata_resolver_service.aiohttp.ClientSession") as MockSession:
        MockSession.return_value.__aenter__.return_value = session

        with pytest.raises(MetadataFetchError):
            await MetadataResolverService().resolve("https://example.com/missing.json")
