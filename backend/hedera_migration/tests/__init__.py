"""
Test suite for the Hedera NFT migrator.

Test Categories:
- Model tests: descriptors, inventories, results
- Client tests: mirror node requests
- Pipeline tests: inspection, inventory pagination, replication
- Service and command tests: end to end runs against fakes
"""
