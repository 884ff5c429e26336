import asyncio
from typing import Optional, Tuple

import click
import orjson

from config.settings import settings
from onchain.models.resolver_config import ResolverConfig
from onchain.service.token_data_service import token_data
from utils.async_utils import gather_with_concurrency
from utils.logger_utils import configure_logging, get_logger
from utils.web3_utils import get_async_web3

logger = get_logger("Get Token Data CLI")


@click.command()
@click.argument("addresses", nargs=-1, required=True)
@click.option(
    "-p",
    "--provider-uri",
    default=settings.ethereum.provider_uri,
    show_default=True,
    type=str,
    help="JSON-RPC endpoint of the chain the contracts live on, e.g. https://eth.llamarpc.com",
)
@click.option("-t", "--token-id", default=None, type=int, help="Token id, required for ERC721 and ERC1155 contracts.")
@click.option("--include-token-metadata", is_flag=True, default=False, help="Resolve tokenURI / uri into JSON.")
@click.option("--include-contract-metadata", is_flag=True, default=False, help="Resolve contractURI into JSON (ERC721).")
@click.option("--ipfs-gateway", default=None, type=str, help="Gateway used for ipfs:// URIs, e.g. https://dweb.link")
@click.option("--max-concurrency", default=5, show_default=True, type=int, help="Addresses looked up in parallel.")
@click.option("--log-file", default=None, show_default=True, type=str, help="Path to the log file.")
def get_token_data(
    addresses: Tuple[str, ...],
    provider_uri: Optional[str],
    token_id: Optional[int],
    include_token_metadata: bool,
    include_contract_metadata: bool,
    ipfs_gateway: Optional[str],
    max_concurrency: int,
    log_file: Optional[str],
):
    """
    Detects the token standard of each ADDRESS and prints its token data as JSON lines.
    """
    configure_logging(log_file, settings.app.log_level)
    if not provider_uri:
        raise click.UsageError("--provider-uri (or PROVIDER_URI) is required")

    config = ResolverConfig(
        include_token_metadata=include_token_metadata,
        include_contract_metadata=include_contract_metadata,
        ipfs_gateway_domain=ipfs_gateway,
    )
    logger.info(f"Looking up {len(addresses)} contract(s)...")

    failed = asyncio.run(_get_token_data(addresses, provider_uri, token_id, config, max_concurrency))
    if failed:
        raise click.exceptions.Exit(1)


async def _get_token_data(addresses, provider_uri, token_id, config, max_concurrency) -> int:
    web3 = get_async_web3(provider_uri, timeout=settings.ethereum.rpc_timeout)
    try:
        results = await gather_with_concurrency(
            max_concurrency,
            *(token_data(web3, address, token_id, config) for address in addresses),
            return_exceptions=True,
        )
    finally:
        await web3.provider.disconnect()

    failed = 0
    for address, result in zip(addresses, results):
        if isinstance(result, Exception):
            failed += 1
            logger.error(f"Failed to get token data for {address}: {result}")
            item = {"address": address, "error": str(result)}
        else:
            item = {"address": address, **result.model_dump(mode="json", by_alias=True)}
        click.echo(orjson.dumps(item).decode("utf-8"))
    return failed


if __name__ == "__main__":
    get_token_data()
