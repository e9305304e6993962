"""
Hedera migration configuration.
"""

from typing import Dict, Any

from django.conf import settings

from .exceptions import MigrationConfigurationError

# Public mirror nodes per network
MIRROR_NODE_URLS = {
    'mainnet': 'https://mainnet-public.mirrornode.hedera.com',
    'testnet': 'https://testnet.mirrornode.hedera.com',
    'previewnet': 'https://previewnet.mirrornode.hedera.com',
}

SUPPORTED_NETWORKS = ('mainnet', 'testnet', 'previewnet')

NFT_TOKEN_TYPE = 'NON_FUNGIBLE_UNIQUE'

TOKEN_INFO_ROUTE = '/api/v1/tokens/{token_id}'
TOKEN_NFTS_ROUTE = '/api/v1/tokens/{token_id}/nfts?limit={limit}'


def network_label(network: str) -> str:
    """Human readable network name used in result lines ("Mainnet", "Testnet")."""
    return network.capitalize()


def get_hedera_config() -> Dict[str, Any]:
    """
    Get target network configuration.

    Raises:
        MigrationConfigurationError: if the operator account or key is missing
    """
    account_id = settings.HEDERA_ACCOUNT_ID
    private_key = settings.HEDERA_PRIVATE_KEY

    if not account_id or not private_key:
        raise MigrationConfigurationError(
            'Environment variables ACCOUNT_ID and PRIVATE_KEY must be present'
        )

    network = settings.HEDERA_NETWORK
    if network not in SUPPORTED_NETWORKS:
        raise MigrationConfigurationError(f"Unsupported target network: {network}")

    return {
        'network': network,
        'account_id': account_id,
        'private_key': private_key,
        'supply_key': settings.HEDERA_SUPPLY_KEY or None,
        'max_transaction_fee': settings.HEDERA_MAX_TRANSACTION_FEE,
    }


def get_mirror_config() -> Dict[str, Any]:
    """Get source mirror node configuration."""
    network = settings.SOURCE_NETWORK
    return {
        'network': network,
        'base_url': (settings.MIRROR_NODE_URL or MIRROR_NODE_URLS.get(network, MIRROR_NODE_URLS['mainnet'])).rstrip('/'),
        'page_limit': settings.MIRROR_PAGE_LIMIT,
        'timeout': settings.MIRROR_TIMEOUT,
        'page_retries': settings.MIRROR_PAGE_RETRIES,
        'retry_delay': settings.MIRROR_RETRY_DELAY,
    }


def get_migration_config() -> Dict[str, Any]:
    """Get migration behaviour configuration."""
    return {
        'source_network': settings.SOURCE_NETWORK,
        'target_network': settings.HEDERA_NETWORK,
        'batch_size': settings.MINT_BATCH_SIZE,
        'keys_dir': settings.MIGRATION_KEYS_DIR,
        'fee_rules': {
            'royalty_numerator': settings.ROYALTY_FEE_NUMERATOR,
            'royalty_denominator': settings.ROYALTY_FEE_DENOMINATOR,
            'fallback_fee_hbar': settings.FALLBACK_FEE_HBAR,
        },
    }
