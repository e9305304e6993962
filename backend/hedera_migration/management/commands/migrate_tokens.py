"""
Django management command to migrate NFT tokens between Hedera networks.
"""

import asyncio
from typing import List

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from hedera_migration.clients.mirror_client import MirrorNodeClient
from hedera_migration.config import get_hedera_config, get_migration_config, network_label
from hedera_migration.exceptions import MigrationConfigurationError
from hedera_migration.logging_utils import configure_logging
from hedera_migration.migration import MigrationService, save_supply_key, summary_lines


def parse_token_list(value: str) -> List[str]:
    """Split a comma separated token list, ignoring blanks."""
    if not value:
        return []
    return [token.strip() for token in value.split(',') if token.strip()]


class Command(BaseCommand):
    help = 'Migrate NFT tokens from the source network mirror node to the target Hedera network'

    requires_system_checks = []

    def add_arguments(self, parser):
        parser.add_argument(
            'token_list',
            nargs='?',
            type=str,
            help='Comma separated list of token IDs to migrate, e.g. 0.0.111,0.0.222',
        )

    def handle(self, *args, **options):
        configure_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)

        token_ids = parse_token_list(options['token_list'])
        if not token_ids:
            raise CommandError('Token list is empty')

        try:
            hedera_config = get_hedera_config()
        except MigrationConfigurationError as e:
            raise CommandError(str(e))

        ledger_client = self._build_ledger_client(hedera_config)
        supply_key = self._resolve_supply_key(ledger_client, hedera_config, token_ids)

        migration_config = get_migration_config()
        self.stdout.write(
            self.style.SUCCESS(
                f"Migrating {len(token_ids)} token(s) from "
                f"{network_label(migration_config['source_network'])} to "
                f"{network_label(migration_config['target_network'])}..."
            )
        )

        results = asyncio.run(self._run_migration(ledger_client, supply_key, token_ids))

        for result in results:
            if not result.succeeded and not result.is_fatal:
                self.stderr.write(result.message)

        self.stdout.write(self.style.SUCCESS('Migration complete'))
        self.stdout.write('\n'.join(summary_lines(results)))

        aborted = [result for result in results if result.is_fatal]
        if aborted:
            raise CommandError(aborted[0].message)

    def _build_ledger_client(self, hedera_config):
        from hedera_migration.clients.hedera_client import HederaLedgerClient

        return HederaLedgerClient.from_config(hedera_config)

    def _resolve_supply_key(self, ledger_client, hedera_config, token_ids):
        if hedera_config['supply_key']:
            return ledger_client.load_supply_key(hedera_config['supply_key'])

        self.stdout.write('No supply key provided. Generating a new one and saving it to file')
        supply_key = ledger_client.generate_supply_key()
        path = save_supply_key(
            token_ids,
            ledger_client.key_to_string(supply_key),
            stdout=self.stdout,
        )
        if path is not None:
            self.stdout.write(f'Token details file created {path}')
        return supply_key

    async def _run_migration(self, ledger_client, supply_key, token_ids):
        ledger_client.connect()
        try:
            async with MirrorNodeClient() as mirror_client:
                service = MigrationService(mirror_client, ledger_client, supply_key)
                return await service.run(token_ids)
        finally:
            ledger_client.close()
