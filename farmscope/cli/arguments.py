"""
Command Line Argument Parsing for FarmScope

Handles the generate, serve and init-config commands and their
configuration overrides.
"""

import argparse
from pathlib import Path
from typing import List, Optional

from farmscope import __version__

DEFAULT_CONFIG_PATH = "config/config.yaml"
DATASET_CHOICES = ["pest", "farmerscope", "all"]


class CLIManager:
    """
    Command line interface manager for FarmScope

    Parses the subcommand and its options, validates them, and applies
    overrides on top of the loaded configuration.
    """

    def __init__(self):
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all commands

        Returns:
            Configured argument parser
        """
        parser = argparse.ArgumentParser(
            prog="farmscope",
            description="Scrape farm and pest advisories into JSON snapshots or serve them live",
            formatter_class=argparse.ArgumentDefaultsHelpFormatter,
            epilog=self._get_epilog()
        )
        parser.add_argument(
            "--version",
            action="version",
            version=f"FarmScope v{__version__}"
        )

        # Options shared by every command
        common = argparse.ArgumentParser(add_help=False)
        common.add_argument(
            "--config",
            help=f"Path to configuration file (defaults to {DEFAULT_CONFIG_PATH} when present)"
        )
        common.add_argument(
            "--log-level",
            choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
            help="Logging level"
        )

        commands = parser.add_subparsers(dest="command", metavar="COMMAND")
        commands.required = True

        generate = commands.add_parser(
            "generate",
            parents=[common],
            help="Scrape the sites and write snapshot files",
            formatter_class=argparse.ArgumentDefaultsHelpFormatter
        )
        generate.add_argument(
            "--dataset",
            choices=DATASET_CHOICES,
            default="all",
            help="Which snapshot to generate"
        )
        generate.add_argument(
            "--output-dir",
            help="Directory the snapshot files are written to"
        )
        generate.add_argument(
            "--no-delay",
            action="store_true",
            help="Skip the pause between outbound requests"
        )

        serve = commands.add_parser(
            "serve",
            parents=[common],
            help="Run the HTTP API",
            formatter_class=argparse.ArgumentDefaultsHelpFormatter
        )
        serve.add_argument("--host", help="Interface to bind")
        serve.add_argument("--port", type=int, help="Port to listen on")

        init_config = commands.add_parser(
            "init-config",
            help="Write the default configuration file",
            formatter_class=argparse.ArgumentDefaultsHelpFormatter
        )
        init_config.add_argument(
            "--config",
            default=DEFAULT_CONFIG_PATH,
            help="Where to write the configuration file"
        )
        init_config.add_argument(
            "--force",
            action="store_true",
            help="Overwrite an existing file"
        )

        return parser

    def _get_epilog(self) -> str:
        """
        Get epilog text for help message

        Returns:
            Formatted epilog text
        """
        return """
Examples:
  # Generate both snapshots into ./public/data
  python -m farmscope generate

  # Only the pest dataset, into another directory, without delays
  python -m farmscope generate --dataset pest --output-dir ./out --no-delay

  # Serve the live API
  python -m farmscope serve --port 8080

  # Write config/config.yaml with the defaults
  python -m farmscope init-config
"""

    def parse_arguments(self, args: Optional[List[str]] = None) -> argparse.Namespace:
        """
        Parse command line arguments

        Args:
            args: Command line arguments (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        parsed_args = self.parser.parse_args(args)
        self.validate_arguments(parsed_args)
        return parsed_args

    def validate_arguments(self, args: argparse.Namespace) -> bool:
        """
        Validate parsed arguments for consistency

        Args:
            args: Parsed arguments namespace

        Returns:
            True if arguments are valid
        """
        if args.command == "init-config":
            if Path(args.config).exists() and not args.force:
                self.parser.error(f"Configuration file already exists: {args.config} (use --force)")
            return True

        # An explicit config path must point at a file
        if args.config and not Path(args.config).is_file():
            self.parser.error(f"Configuration file not found: {args.config}")

        if args.command == "serve" and args.port is not None and not 0 < args.port < 65536:
            self.parser.error("Port must be between 1 and 65535")

        return True

    def get_datasets(self, args: argparse.Namespace) -> List[str]:
        """
        Datasets selected by --dataset

        Returns:
            Dataset names in generation order
        """
        if args.dataset == "all":
            return ["pest", "farmerscope"]
        return [args.dataset]

    def get_config_path(self, args: argparse.Namespace) -> str:
        """Configuration path to load"""
        return args.config or DEFAULT_CONFIG_PATH

    def print_help(self) -> None:
        """Print help message"""
        self.parser.print_help()
