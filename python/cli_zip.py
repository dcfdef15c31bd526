#!/usr/bin/env python3
"""
Legacy-encoded ZIP CLI Tool

Packs a directory into <directory>.zip with entry names written in a legacy
Japanese encoding (cp932 by default), optionally protected with a password.

Usage:
    python3 cli_zip.py /path/to/photos
    python3 cli_zip.py /path/to/photos --password secret
    python3 cli_zip.py /path/to/photos --length-of-password 12
"""

import argparse
import logging
import sys
from typing import Optional

from colored_logger import get_colored_logger, level_from_name, setup_colored_logging
from zip_ops.archive_manager import ArchiveManager
from zip_ops.config import ZipSettings, load_config, set_config_value
from zip_ops.errors import JipperError, UsageError

logger = get_colored_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130


class ZipCLI:
    """Command-line interface for legacy-encoded archive creation."""

    def __init__(self):
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="jipper",
            description="Create a (password-protected) zip file with Shift-JIS-encoded filenames.",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Plain archive, written to /path/to/photos.zip
  jipper /path/to/photos

  # Encrypt with a password of your choice
  jipper /path/to/photos --password secret

  # Encrypt with a generated 12 character password (printed once)
  jipper /path/to/photos --length-of-password 12
            """,
        )

        parser.add_argument("input_directory", help="The directory to zip.")
        parser.add_argument(
            "--password",
            "-p",
            help="The password to encrypt the zip file (wins over --length-of-password).",
        )
        parser.add_argument(
            "--length-of-password",
            "-l",
            type=int,
            dest="length_of_password",
            help="The length of the password to generate.",
        )
        parser.add_argument(
            "--exclude",
            "-x",
            action="append",
            default=[],
            metavar="PATTERN",
            help="Additional glob pattern of names to leave out (repeatable).",
        )
        parser.add_argument(
            "--encoding",
            "-e",
            help="Target encoding for entry names (default: cp932).",
        )
        parser.add_argument(
            "--level",
            type=int,
            help="Deflate compression level 0-9 (default: 6).",
        )
        parser.add_argument("--config", help="Path to a YAML config file.")

        verbosity = parser.add_mutually_exclusive_group()
        verbosity.add_argument(
            "--quiet", "-q", action="store_true", help="Only show warnings, errors and notices"
        )
        verbosity.add_argument(
            "--verbose", "-v", action="store_true", help="Show debug output"
        )

        return parser

    def _build_settings(self, args) -> ZipSettings:
        config = load_config(args.config)

        if args.encoding:
            set_config_value(config, "encoding", "target", args.encoding)
        if args.level is not None:
            set_config_value(config, "archive", "compression_level", args.level)

        settings = ZipSettings.from_config(config)
        settings.exclude_patterns.extend(
            p for p in args.exclude if p not in settings.exclude_patterns
        )
        return settings

    def _apply_log_level(self, args, settings: ZipSettings) -> None:
        if args.verbose:
            level = logging.DEBUG
        elif args.quiet:
            level = logging.WARNING
        else:
            level = level_from_name(settings.log_level)
        logging.getLogger().setLevel(level)

    def run(self, args: Optional[list] = None) -> int:
        """Run the CLI with the given arguments."""
        parsed_args = self.parser.parse_args(args)

        try:
            settings = self._build_settings(parsed_args)
            self._apply_log_level(parsed_args, settings)

            manager = ArchiveManager(settings)
            result = manager.create_archive(
                parsed_args.input_directory,
                password=parsed_args.password,
                password_length=parsed_args.length_of_password,
            )
            return EXIT_OK if result is not None else EXIT_FAILURE

        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return EXIT_INTERRUPTED
        except UsageError as e:
            logger.error("%s", e)
            return EXIT_USAGE
        except JipperError as e:
            logger.error("Failed to create archive: %s", e)
            logger.debug("Full error details:", exc_info=True)
            return EXIT_FAILURE


def main():
    """Main entry point for the CLI."""
    setup_colored_logging(level=logging.INFO)

    cli = ZipCLI()
    return cli.run()


if __name__ == "__main__":
    sys.exit(main())
