#!/usr/bin/env python3
"""
FarmScope - Main Entry Point

Loads the configuration, sets up logging and dispatches to snapshot
generation, the HTTP service or config bootstrapping.
"""

import sys
import asyncio
import argparse
from typing import List, Optional

from farmscope.core.base import ScraperError
from farmscope.core.config import AppConfig, ConfigManager
from farmscope.core.logging import setup_logging, get_logger
from farmscope.cli.arguments import CLIManager
from farmscope.core.orchestrator import SnapshotOrchestrator


def load_config(cli_manager: CLIManager, args: argparse.Namespace) -> AppConfig:
    """Load the configuration and apply command line overrides"""
    config = ConfigManager(cli_manager.get_config_path(args)).load_config()

    if getattr(args, 'output_dir', None):
        config.batch.output_dir = args.output_dir

    if getattr(args, 'no_delay', False):
        config.batch.category_delay = 0
        config.batch.item_delay = 0
        config.batch.advisory_delay = 0

    if getattr(args, 'host', None):
        config.server.host = args.host

    if getattr(args, 'port', None):
        config.server.port = args.port

    if getattr(args, 'log_level', None):
        config.logging.level = args.log_level

    return config


async def generate(config: AppConfig, datasets: List[str]) -> int:
    """Run the batch traversal for the requested datasets"""
    logger = get_logger()
    logger.info(f"Generating datasets: {', '.join(datasets)}")

    async with SnapshotOrchestrator(config) as orchestrator:
        results = await orchestrator.run(datasets)

    records = sum(
        stats.get('categories', 0) + stats.get('pests', 0) + stats.get('advisories', 0)
        for stats in results
    )
    logger.info(f"Generation completed: {records} records across {len(results)} snapshot(s)")

    return 0 if records > 0 else 1


def serve(config: AppConfig) -> int:
    """Run the HTTP API until interrupted"""
    import uvicorn
    from farmscope.api.app import create_app

    get_logger().info(f"Starting API on {config.server.host}:{config.server.port}")
    uvicorn.run(create_app(config), host=config.server.host, port=config.server.port,
                log_level=config.logging.level.lower())
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    cli_manager = CLIManager()
    args = cli_manager.parse_arguments(argv)

    try:
        return run_command(cli_manager, args)
    except KeyboardInterrupt:
        print("\nFarmScope interrupted by user")
        return 130


def run_command(cli_manager: CLIManager, args: argparse.Namespace) -> int:
    """Dispatch a parsed command line"""
    if args.command == 'init-config':
        path = ConfigManager(args.config).write_default_config()
        print(f"Default configuration written to {path}")
        return 0

    try:
        config = load_config(cli_manager, args)
    except ScraperError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    logging_config = config.logging
    setup_logging(
        level=logging_config.level,
        log_file=logging_config.file,
        max_size=logging_config.max_size,
        backup_count=logging_config.backup_count
    )
    logger = get_logger()

    if args.command == 'serve':
        return serve(config)

    try:
        return asyncio.run(generate(config, cli_manager.get_datasets(args)))
    except ScraperError as e:
        logger.error(f"Snapshot generation failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
