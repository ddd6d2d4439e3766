#!/usr/bin/env python3

from pathlib import Path
from typing import Optional
from medialibfs import __version__
from medialibfs.config import ConfigManager
from medialibfs.content import ContentProducer, Failure, Folders, content_kind
from medialibfs.errors import ParseError
from medialibfs.directory_node import parse_path
from medialibfs.filesystem import mount_medialibfs
from medialibfs.localization import Localizer
from medialibfs.media_directory import MediaDirectory
from medialibfs.query_params import collect_filters
import argparse
import logging
import sys


def setup_logging(args: argparse.Namespace) -> logging.Logger:
    """Configure logging based on command-line arguments.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Configured logger instance.
    """
    log_level = logging.DEBUG if args.debug else logging.INFO
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Listing commands print results on stdout
    handlers = [logging.StreamHandler(sys.stderr)]
    if args.command == "mount" and not getattr(args, "foreground", False):
        log_path = Path.home() / ".local" / "share" / "medialibfs" / "logs"
        log_path.mkdir(parents=True, exist_ok=True)
        log_file = log_path / "medialibfs.log"
        handlers.append(logging.FileHandler(str(log_file)))

    logging.basicConfig(level=log_level, format=log_format, handlers=handlers)

    return logging.getLogger("MediaLibFS")


class CommandHandler:
    """Shared configuration handling for subcommands."""

    def __init__(self, args: argparse.Namespace, logger: logging.Logger):
        """Initialize the command handler.

        Args:
            args: Parsed command-line arguments.
            logger: Logger instance.
        """
        self.args = args
        self.logger = logger
        self.config: Optional[ConfigManager] = None

    def load_config(self) -> bool:
        """Load the config file and apply command-line overrides.

        Returns:
            False if the config file is unusable; the error is logged.
        """
        try:
            self.config = ConfigManager(
                config_dir=getattr(self.args, "config_dir", None),
                logger=self.logger,
            )
        except (OSError, ValueError) as e:
            self.logger.error(f"Cannot load configuration: {e}")
            return False

        self.config.apply_overrides(
            origin=getattr(self.args, "origin", None),
            store=getattr(self.args, "store", None),
        )
        if getattr(self.args, "no_all_items", False):
            self.config.show_all_items = False
        return True

    def build_directory(self) -> MediaDirectory:
        producer = ContentProducer(
            store_factory=self.config.store_factory(),
            localizer=Localizer(strings=self.config.strings, logger=self.logger),
            show_all_items=self.config.show_all_items,
            logger=self.logger,
        )
        return MediaDirectory(producer, logger=self.logger)

    def execute(self) -> int:
        raise NotImplementedError


class MountCommandHandler(CommandHandler):
    """Handles the 'mount' command logic."""

    def execute(self) -> int:
        """Execute the mount command.

        Returns:
            Exit code (0 for success, 1 for failure).
        """
        self.logger.info(f"MediaLibFS version {__version__}")
        if not self.load_config():
            return 1

        mount_point = Path(self.args.mount_point)
        mount_point.mkdir(parents=True, exist_ok=True)

        try:
            store_factory = self.config.store_factory()
        except ValueError as e:
            self.logger.error(str(e))
            return 1

        try:
            self.logger.info(f"Mounting {self.config.origin} at {mount_point}")
            mount_medialibfs(
                mount_point=str(mount_point),
                store_factory=store_factory,
                origin=self.config.origin,
                show_all_items=self.config.show_all_items,
                strings=self.config.strings,
                foreground=self.args.foreground,
            )
            return 0
        except Exception as e:
            self.logger.error(f"Mount failed: {e}")
            return 1


class ListCommandHandler(CommandHandler):
    """Handles the 'ls' command: prints one directory listing."""

    def execute(self) -> int:
        if not self.load_config():
            return 1

        try:
            directory = self.build_directory()
        except ValueError as e:
            self.logger.error(str(e))
            return 1

        listing = directory.get_directory(self.args.path)
        result = listing.result
        if isinstance(result, Failure):
            self.logger.error(f"Cannot list {self.args.path}: {result.reason}")
            return 1

        if listing.label:
            print(f"# {listing.label}")
        if isinstance(result, Folders):
            for item in result.items:
                print(f"{item.label}\t{item.path}")
            if result.partial:
                self.logger.warning("Some entries could not be listed")
        else:
            for record in result.items:
                print(f"{record.get('label', '')}\t{record.get('id', '')}")
        return 0


class ResolveCommandHandler:
    """Handles the 'resolve' command: shows how a path parses, no store needed."""

    def __init__(self, args: argparse.Namespace, logger: logging.Logger):
        self.args = args
        self.logger = logger

    def execute(self) -> int:
        try:
            node = parse_path(self.args.path)
        except ParseError as e:
            self.logger.error(str(e))
            return 1

        for current in node.chain():
            value = f" = {current.name}" if current.name else ""
            print(f"{current.kind.name}{value}")
        print(f"path: {node.build_path()}")
        print(f"lists: {content_kind(node).name}")

        filters = collect_filters(node)
        print(f"content: {filters.content}")
        for slot, value in sorted(filters.as_dict().items()):
            print(f"{slot}: {value}")
        return 0


def main(argv: Optional[list] = None) -> int:
    """Command-line entry point for MediaLibFS."""
    parser = argparse.ArgumentParser(
        description="MediaLibFS - Browse a media library as a virtual directory tree"
    )
    parser.add_argument(
        "--version", "-v", action="version", version=f"MediaLibFS {__version__}"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # Mount command
    mount_parser = subparsers.add_parser("mount", help="Mount the library filesystem")
    mount_parser.add_argument(
        "--mount-point", "-m", required=True, help="Mount point directory"
    )
    mount_parser.add_argument(
        "--store", "-s", help="Store factory as 'package.module:attribute'"
    )
    mount_parser.add_argument("--origin", "-o", help="Library origin tag")
    mount_parser.add_argument("--config-dir", "-c", help="Configuration directory")
    mount_parser.add_argument(
        "--no-all-items", action="store_true", help="Hide 'All ...' folders"
    )
    mount_parser.add_argument(
        "--foreground", "-f", action="store_true", help="Run in foreground"
    )
    mount_parser.add_argument(
        "--debug", "-d", action="store_true", help="Enable debug logging"
    )
    mount_parser.set_defaults(
        func=lambda args: MountCommandHandler(args, setup_logging(args)).execute()
    )

    # ls command
    ls_parser = subparsers.add_parser("ls", help="List one library directory")
    ls_parser.add_argument("path", help="Library path, e.g. library/genres/")
    ls_parser.add_argument(
        "--store", "-s", help="Store factory as 'package.module:attribute'"
    )
    ls_parser.add_argument("--config-dir", "-c", help="Configuration directory")
    ls_parser.add_argument(
        "--no-all-items", action="store_true", help="Hide 'All ...' folders"
    )
    ls_parser.add_argument(
        "--debug", "-d", action="store_true", help="Enable debug logging"
    )
    ls_parser.set_defaults(
        func=lambda args: ListCommandHandler(args, setup_logging(args)).execute()
    )

    # resolve command
    resolve_parser = subparsers.add_parser(
        "resolve", help="Show how a library path resolves"
    )
    resolve_parser.add_argument("path", help="Library path")
    resolve_parser.add_argument(
        "--debug", "-d", action="store_true", help="Enable debug logging"
    )
    resolve_parser.set_defaults(
        func=lambda args: ResolveCommandHandler(args, setup_logging(args)).execute()
    )

    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
