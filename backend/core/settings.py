"""
Django settings for the Hedera NFT migrator.

Every value can be overridden from the process environment or from a
``.env`` file in the working directory.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent

load_dotenv()

SECRET_KEY = os.getenv('DJANGO_SECRET_KEY', 'hedera-migration-insecure-key')
DEBUG = os.getenv('DEBUG', 'false').lower() == 'true'
ALLOWED_HOSTS = []

INSTALLED_APPS = [
    'hedera_migration',
]

# The migrator keeps no state of its own
DATABASES = {}

USE_TZ = True
TIME_ZONE = 'UTC'

# Operator credentials (target network)
HEDERA_ACCOUNT_ID = os.getenv('ACCOUNT_ID')
HEDERA_PRIVATE_KEY = os.getenv('PRIVATE_KEY')
HEDERA_SUPPLY_KEY = os.getenv('SUPPLY_KEY')
HEDERA_NETWORK = os.getenv('HEDERA_NETWORK', 'testnet').lower()
HEDERA_MAX_TRANSACTION_FEE = int(os.getenv('MAX_TRANSACTION_FEE_HBAR', '80'))

# Source network mirror node
SOURCE_NETWORK = os.getenv('SOURCE_NETWORK', 'mainnet').lower()
# Defaults to the public mirror node of SOURCE_NETWORK
MIRROR_NODE_URL = os.getenv('MIRROR_NODE_URL')
MIRROR_PAGE_LIMIT = int(os.getenv('MIRROR_PAGE_LIMIT', '100'))
MIRROR_TIMEOUT = int(os.getenv('MIRROR_TIMEOUT', '30'))
MIRROR_PAGE_RETRIES = int(os.getenv('MIRROR_PAGE_RETRIES', '5'))
MIRROR_RETRY_DELAY = float(os.getenv('MIRROR_RETRY_DELAY', '2.0'))

# Migration behaviour
MINT_BATCH_SIZE = int(os.getenv('MINT_BATCH_SIZE', '10'))
MIGRATION_KEYS_DIR = os.getenv('MIGRATION_KEYS_DIR', '.')
ROYALTY_FEE_NUMERATOR = int(os.getenv('ROYALTY_FEE_NUMERATOR', '1'))
ROYALTY_FEE_DENOMINATOR = int(os.getenv('ROYALTY_FEE_DENOMINATOR', '100'))
FALLBACK_FEE_HBAR = int(os.getenv('FALLBACK_FEE_HBAR', '1'))

# Logging
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()
LOG_FORMAT = os.getenv('LOG_FORMAT', 'console').lower()
