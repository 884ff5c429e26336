import base64
import binascii
import inspect
import re
from typing import Any, Optional
from urllib.parse import unquote

import aiohttp
import orjson

from config.settings import settings
from constants.constants import ARWEAVE_SCHEME, HTTP_SCHEMES, IPFS_SCHEME, JSON_DATA_URI_PREFIX
from onchain.exceptions import MetadataFetchError
from onchain.models.resolver_config import ResolverConfig
from utils.logger_utils import get_logger

logger = get_logger("Metadata Resolver Service")

# CIDv0 (base58btc sha256 multihash) or CIDv1 (base32), optionally followed by a path
CID_PATTERN = re.compile(r"^(Qm[1-9A-HJ-NP-Za-km-z]{44}|b[a-z2-7]{58,})(/.*)?$")


class MetadataResolverService(object):
    """
    Turns a token or contract metadata URI into parsed JSON.

    Inline data URIs are decoded in-process. Everything else is normalized to an HTTP(S) URL
    (ipfs:// through the configured gateway) and handed to the fetch handler.
    """

    def __init__(self, config: Optional[ResolverConfig] = None):
        self._config = config or ResolverConfig()

    async def resolve(self, uri: Optional[str]) -> Any:
        if not uri:
            raise MetadataFetchError("No metadata URI to resolve", uri=uri)

        if is_json_data_uri(uri):
            return parse_json_data_uri(uri)

        url = normalize_uri(uri, self._config.ipfs_gateway_domain)
        return await self._fetch(url, uri)

    async def _fetch(self, url: str, uri: str) -> Any:
        fetch_handler = self._config.fetch_handler or default_fetch_handler
        logger.debug(f"Fetching metadata from {url}")
        try:
            result = fetch_handler(url)
            if inspect.isawaitable(result):
                result = await result
        except MetadataFetchError:
            raise
        except Exception as e:
            raise MetadataFetchError(f"Failed to fetch metadata from {url}: {e}", uri=uri) from e
        return result


async def default_fetch_handler(url: str) -> Any:
    """
    Plain GET, body parsed as JSON regardless of the Content-Type the gateway sends.
    An empty body is a JSON decode error, not None.
    """
    timeout = aiohttp.ClientTimeout(total=settings.metadata.http_timeout)
    headers = {"User-Agent": settings.metadata.user_agent, "Accept": "application/json"}
    async with aiohttp.ClientSession(timeout=timeout, headers=headers) as session:
        async with session.get(url) as response:
            response.raise_for_status()
            body = await response.read()
    return orjson.loads(body)


def is_json_data_uri(uri: str) -> bool:
    return uri.strip().lower().startswith(JSON_DATA_URI_PREFIX)


def parse_json_data_uri(uri: str) -> Any:
    """
    Decodes data:application/json[;charset=...][;base64],<payload>.
    Without ;base64 the payload is percent-decoded text.
    """
    header, separator, payload = uri.strip().partition(",")
    if not separator:
        raise MetadataFetchError("Malformed data URI: missing ',' separator", uri=uri)

    try:
        if ";base64" in header.lower():
            raw = base64.b64decode(payload)
        else:
            raw = unquote(payload)
        return orjson.loads(raw)
    except (binascii.Error, ValueError) as e:
        raise MetadataFetchError(f"Failed to parse inline JSON metadata: {e}", uri=uri) from e


def normalize_uri(uri: str, ipfs_gateway_domain: Optional[str] = None) -> str:
    """
    Returns an HTTP(S) URL for uri.

    ipfs://CID/path            -> {gateway}/ipfs/CID/path
    http(s)://...              -> unchanged
    ar://TX                    -> {arweave gateway}/TX
    /ipfs/CID, ipfs/CID, CID   -> {gateway}/ipfs/CID
    """
    uri = uri.strip()
    lowered = uri.lower()
    gateway = _gateway_base(ipfs_gateway_domain or settings.metadata.ipfs_gateway)

    if lowered.startswith(IPFS_SCHEME):
        path = uri[len(IPFS_SCHEME):]
        # ipfs://ipfs/CID is a common mistake
        if path.lower().startswith("ipfs/"):
            path = path[len("ipfs/"):]
        return f"{gateway}/ipfs/{path}"

    if lowered.startswith(HTTP_SCHEMES):
        return uri

    if lowered.startswith(ARWEAVE_SCHEME):
        return f"{_gateway_base(settings.metadata.arweave_gateway)}/{uri[len(ARWEAVE_SCHEME):]}"

    if lowered.startswith(("/ipfs/", "ipfs/")):
        return f"{gateway}/{uri.lstrip('/')}"

    if CID_PATTERN.match(uri):
        return f"{gateway}/ipfs/{uri}"

    raise MetadataFetchError(f"Unsupported metadata URI: {uri}", uri=uri)


def expand_erc1155_uri(template: str, token_id: int) -> str:
    """ERC1155 clients substitute {id} with the 64 char lowercase hex token id."""
    return template.replace("{id}", f"{token_id:064x}")


def _gateway_base(gateway: str) -> str:
    gateway = gateway.strip().rstrip("/")
    if "://" not in gateway:
        gateway = f"https://{gateway}"
    # Only the host is configurable, /ipfs/ is always appended
    if gateway.lower().endswith("/ipfs"):
        gateway = gateway[: -len("/ipfs")]
    return gateway
