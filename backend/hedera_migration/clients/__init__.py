"""
Network clients for the source mirror node and the target ledger.

The ledger client module imports the Hedera SDK and is loaded on demand.
"""

from .mirror_client import MirrorNodeClient

__all__ = [
    'MirrorNodeClient',
]
