"""
Hedera NFT migration app.

Copies NFT collections from a source Hedera network (read through its
mirror node) to a target Hedera network.
"""

__version__ = '1.0.0'
