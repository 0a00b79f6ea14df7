"""Command-line access to the URL shortener.

This tool follows this procedure for every command:
- Step 1: Initialize JSON logging (stderr)
- Step 2: Load configuration for the current APP_ENV
- Step 3: Build the configured data store backend
- Step 4: Run the command and print its result as JSON (stdout)

CLI usage:
    $ python -m shortlink shorten https://www.example.com/some/long/path
    $ python -m shortlink resolve aZ3kP9q
    $ python -m shortlink resolve aZ3kP9q --hit
    $ python -m shortlink top-domains -n 5

NOTE: with the in-memory backend every invocation starts with an empty store.
      Point `active_backend` at Redis to share records between invocations.
"""

import argparse
import json
import logging

from shortlink.constants import Defaults
from shortlink.dao import dao_from_config
from shortlink.models import UrlRecordModel
from shortlink.services import UrlShortenerService
from shortlink.utils import initialize_logging, load_config


logger = logging.getLogger(__name__)


def _record_payload(service: UrlShortenerService, record: UrlRecordModel) -> dict:
    return {
        'short_code': record.short_code,
        'short_url': service.short_url(record.short_code),
        'long_url': record.long_url,
        'created_at': record.created_at.isoformat(),
        'access_count': record.access_count,
    }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='shortlink',
        description='Shorten URLs, resolve short codes and report domain metrics',
    )
    parser.add_argument(
        '--config',
        default=None,
        help='Path of the YAML configuration document (default: config/<APP_ENV>.yml)',
    )
    commands = parser.add_subparsers(dest='command', required=True)

    shorten = commands.add_parser('shorten', help='Shorten a long URL (idempotent)')
    shorten.add_argument('url', help='Long URL to shorten')

    resolve = commands.add_parser('resolve', help='Look up the record of a short code')
    resolve.add_argument('short_code', help='Short code to resolve')
    resolve.add_argument(
        '--hit',
        action='store_true',
        help='Count the lookup as an access (like a redirect would)',
    )

    top_domains = commands.add_parser('top-domains', help='Most shortened domains')
    top_domains.add_argument(
        '-n',
        type=int,
        default=Defaults.TOP_DOMAINS,
        help=f'Number of domains to report (default: {Defaults.TOP_DOMAINS})',
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point.

    Returns:
        int: process exit code; 1 when a short code is not found, 0 otherwise.

    Raises:
        BadConfigurationError: when the configuration document is invalid.
        DataStoreError: when the data store is unreachable.
    """
    args = build_parser().parse_args(argv)

    initialize_logging()
    config = load_config(args.config)
    service = UrlShortenerService(dao_from_config(config), base_url=config['base_url'])

    if args.command == 'shorten':
        record = service.shorten(args.url)
        print(json.dumps(_record_payload(service, record)))
        return 0

    if args.command == 'resolve':
        record = service.resolve(args.short_code)
        if record is None:
            logger.info('Short code not found.', extra={'shortCode': args.short_code})
            print(json.dumps({'message': f'URL not found for short code: {args.short_code}'}))
            return 1
        if args.hit:
            service.record_access(args.short_code)
            record = service.resolve(args.short_code) or record
        print(json.dumps(_record_payload(service, record)))
        return 0

    metrics = service.top_domains(args.n)
    print(json.dumps([{'domain': m.domain, 'count': m.count} for m in metrics]))
    return 0
