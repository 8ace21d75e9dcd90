import asyncio
import sys
from typing import Optional

from loguru import logger

from near_linkdrop.account import Account
from near_linkdrop.config import ProvisionSettings, load_settings
from near_linkdrop.constants import LINKS_FILE_NAME, VIEWS_FILE_NAME
from near_linkdrop.dapps.ft.async_client import FT
from near_linkdrop.dapps.linkdrop.async_client import LinkdropProxy
from near_linkdrop.exceptions.exceptions import ConfigurationError
from near_linkdrop.gateway import ContractGateway
from near_linkdrop.keys import generate_key_batch
from near_linkdrop.keystore import FileSystemKeyStore
from near_linkdrop.pipeline import ProvisioningPipeline, ProvisioningResult
from near_linkdrop.writer import (
    build_redemption_links,
    write_redemption_links,
    write_view_snapshot,
)


def setup_logging(level: str = "INFO"):
    logger.remove()
    logger.add(sys.stderr, level=level)


async def provision(
    settings: ProvisionSettings, gateway: Optional[ContractGateway] = None
) -> ProvisioningResult:
    """
    Run one provisioning pass and write its results to ``settings.output_dir``.
    """
    logger.info(f"LINKDROP_PROXY_CONTRACT_ID: {settings.contract_id}")
    logger.info(f"FUNDING_ACCOUNT_ID: {settings.funding_account_id}")
    logger.info(f"LINKDROP_NEAR_AMOUNT: {settings.linkdrop_near_amount}")

    keystore = FileSystemKeyStore(settings.near_credentials_dir)
    funding_key = keystore.get_private_key(
        settings.network_id, settings.funding_account_id
    )
    if funding_key is None:
        path = keystore.key_path(settings.network_id, settings.funding_account_id)
        raise ConfigurationError(
            f"no credentials for funding account {settings.funding_account_id} "
            f"at {path}"
        )
    contract_account = Account(
        settings.contract_id,
        keystore.get_private_key(settings.network_id, settings.contract_id),
        rpc_addr=settings.node_url,
    )
    funding_account = Account(
        settings.funding_account_id,
        funding_key,
        rpc_addr=settings.node_url,
    )
    gateway = gateway or ContractGateway()
    pipeline = ProvisioningPipeline(
        settings,
        contract=LinkdropProxy(gateway, contract_account, settings.contract_id),
        funder=LinkdropProxy(gateway, funding_account, settings.contract_id),
        ft=FT(gateway, funding_account),
    )

    logger.info(f"Creating {settings.num_keys} keypairs")
    key_pairs = generate_key_batch(settings.num_keys)
    try:
        result = await pipeline.run(key_pairs)
    finally:
        await contract_account.shutdown()
        await funding_account.shutdown()

    links = build_redemption_links(key_pairs, settings.contract_id, settings.wallet)
    write_redemption_links(links, settings.output_dir / LINKS_FILE_NAME)
    try:
        write_view_snapshot(result.views, settings.output_dir / VIEWS_FILE_NAME)
    except OSError as e:
        logger.error(f"error writing view snapshot: {e!r}")

    if result.failed_stages:
        failed = ", ".join(result.failed_stages)
        logger.warning(f"finished with failed stages: {failed}")
    return result


def main() -> int:
    setup_logging()
    try:
        settings = load_settings()
        setup_logging(settings.log_level)
        asyncio.run(provision(settings))
    except ConfigurationError as e:
        logger.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
