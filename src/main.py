# src/main.py - v1
"""CLI entry point: inspect and maintain a swarmcache store.

Usage:
    swarmcache last-block [--set N]
    swarmcache short-codes [--purge]
    swarmcache history <pubkey>
    swarmcache hashtags
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from swarmcache.version import __version__

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        from swarmcache.config.settings import load_settings

        settings = load_settings()
        _setup_logging(settings, args.verbose)
        return asyncio.run(_run(args, settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="swarmcache",
        description=f"swarmcache v{__version__} - cache and checkpoint store",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- last-block ---
    p_block = subparsers.add_parser(
        "last-block", help="Show or set the last processed block",
    )
    p_block.add_argument(
        "--set", dest="block", type=int, default=None,
        help="Store this block number as the checkpoint",
    )
    p_block.set_defaults(func=_cmd_last_block)

    # --- short-codes ---
    p_codes = subparsers.add_parser(
        "short-codes", help="List stored short codes",
    )
    p_codes.add_argument(
        "--purge", action="store_true",
        help="Delete expired and unreadable short codes",
    )
    p_codes.set_defaults(func=_cmd_short_codes)

    # --- history ---
    p_history = subparsers.add_parser(
        "history", help="Print a user's transaction history record",
    )
    p_history.add_argument("pubkey", help="User public key")
    p_history.set_defaults(func=_cmd_history)

    # --- hashtags ---
    p_hashtags = subparsers.add_parser(
        "hashtags", help="Print the cached hashtag list",
    )
    p_hashtags.set_defaults(func=_cmd_hashtags)

    return parser


async def _run(args: argparse.Namespace, settings) -> int:
    from swarmcache.cache.cache_store import CacheStore
    from swarmcache.store.store_factory import create_store

    store = create_store(settings)
    try:
        cache = CacheStore(store, settings.cache_options())
        return await args.func(args, cache)
    finally:
        store.close()


async def _cmd_last_block(args: argparse.Namespace, cache) -> int:
    """Show or set the block checkpoint."""
    if args.block is not None:
        await cache.set_last_block(args.block)
        logger.info("Checkpoint set to %d", args.block)
    print(await cache.get_last_block())
    return 0


async def _cmd_short_codes(args: argparse.Namespace, cache) -> int:
    """List short codes with their live/expired status."""
    from swarmcache.cache.keys import SHORT_CODE_PREFIX, now_ms

    now = now_ms()
    count = 0
    async for key, value in cache.get_short_codes():
        count += 1
        code = key[len(SHORT_CODE_PREFIX):]
        try:
            valid_until = json.loads(value)["validUntil"]
            status = "live" if valid_until >= now else "expired"
        except (ValueError, KeyError, TypeError):
            status = "unreadable"
        print(f"  {code:24s} {status}")

    print(f"\n{count} short codes")
    if args.purge:
        removed = await cache.short_codes.purge_expired()
        print(f"Purged {removed} short codes")
    return 0


async def _cmd_history(args: argparse.Namespace, cache) -> int:
    """Print a transaction history record as JSON."""
    record = await cache.get_transaction_history(args.pubkey)
    print(record.model_dump_json(by_alias=True, indent=2))
    return 0


async def _cmd_hashtags(args: argparse.Namespace, cache) -> int:
    """Print the hashtag list as JSON."""
    print(json.dumps(await cache.get_hashtag_list(), indent=2))
    return 0


def _setup_logging(settings, verbose: bool) -> None:
    """Configure logging for CLI usage."""
    from swarmcache.logging.logger import setup_logging

    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )


if __name__ == "__main__":
    sys.exit(main())
