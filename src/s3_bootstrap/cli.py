#!/usr/bin/env python3
"""
CLI entry point for s3-bootstrap.

Downloads a single object from S3, optionally executes it, and optionally
shuts the host down afterwards.
"""

import argparse
import sys
from typing import NoReturn, Optional, Sequence

from s3_bootstrap import __version__ as package_version
from s3_bootstrap.application.bootstrap_service import (
    BootstrapRequest,
    BootstrapService,
    validate_request,
)
from s3_bootstrap.domain.artifact import PostExecAction
from s3_bootstrap.domain.errors import ConfigError, UsageError
from s3_bootstrap.infrastructure.artifact_writer import ArtifactWriter
from s3_bootstrap.infrastructure.config import DEFAULT_SHUTDOWN_DELAY, BootstrapConfig
from s3_bootstrap.infrastructure.credential_manager import get_credential_manager
from s3_bootstrap.infrastructure.executor import Executor
from s3_bootstrap.infrastructure.logger import setup_logger
from s3_bootstrap.infrastructure.s3_object_repository import S3ObjectRepository
from s3_bootstrap.infrastructure.shutdown_scheduler import ShutdownScheduler
from s3_bootstrap.infrastructure.signal_handler import CancellationCoordinator

__version__ = "0.1.0"
__author__ = "John Ayers"

USAGE_EXIT_CODE = 1


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "cli",
        "description": "Command-line interface for s3-bootstrap",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-19",
    }


class BootstrapArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors with exit status 1."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(USAGE_EXIT_CODE, f"{self.prog}: error: {message}\n")


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = BootstrapArgumentParser(
        prog="s3-bootstrap",
        description="Download an object from S3 and optionally execute it",
        usage="%(prog)s [--exec] [--save path] s3://bucket/path/to/file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {package_version}",
    )

    parser.add_argument(
        "locator",
        metavar="s3://bucket/path/to/file",
        help="S3 URL of the object to download",
    )

    parser.add_argument(
        "--save",
        metavar="PATH",
        help="Save the downloaded file to the specified path instead of a temporary location",
    )

    parser.add_argument(
        "--exec",
        dest="execute",
        action="store_true",
        help="Execute the downloaded file",
    )

    parser.add_argument(
        "--post-exec",
        metavar="ACTION",
        help="Action to take after execution (only used with --exec). Valid values: shutdown",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Debug mode - print the post-exec shutdown command instead of running it",
    )

    parser.add_argument(
        "--shutdown-delay",
        type=float,
        metavar="SECONDS",
        help="Seconds to wait before shutting down (default: 20)",
    )

    parser.add_argument(
        "--region",
        help="AWS region (default: resolved from the environment or instance)",
    )

    parser.add_argument(
        "--profile",
        help="Named AWS profile (default: ambient credential chain)",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    return parser


def build_request(
    args: argparse.Namespace, shutdown_delay: float = DEFAULT_SHUTDOWN_DELAY
) -> BootstrapRequest:
    """Turn parsed arguments into a validated bootstrap request.

    Args:
        args: Parsed command-line arguments
        shutdown_delay: Seconds to wait before a post-exec shutdown

    Returns:
        BootstrapRequest instance

    Raises:
        UsageError: If the flag combination is invalid
    """
    request = BootstrapRequest(
        locator=args.locator,
        save_path=args.save or None,
        execute=args.execute,
        post_exec=PostExecAction.from_flag(args.post_exec),
        debug=args.debug,
        shutdown_delay=shutdown_delay,
    )
    validate_request(request)
    return request


def create_service(
    config: BootstrapConfig, cancellation: CancellationCoordinator
) -> BootstrapService:
    """Wire the bootstrap service to its AWS and OS adapters.

    Args:
        config: Loaded configuration
        cancellation: Armed cancellation coordinator

    Returns:
        BootstrapService instance
    """

    def repository_factory() -> S3ObjectRepository:
        session = get_credential_manager().load_session(config)
        return S3ObjectRepository(session, timeout=config.fetch_timeout)

    return BootstrapService(
        repository_factory=repository_factory,
        writer=ArtifactWriter(),
        executor=Executor(),
        shutdown_factory=lambda delay, debug: ShutdownScheduler(delay, debug=debug),
        cancellation=cancellation,
    )


def main(argv: Optional[Sequence[str]] = None) -> NoReturn:
    """Main entry point for the CLI.

    Parses arguments, arms interrupt handling and runs the bootstrap lifecycle.
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    logger = setup_logger(verbose=args.verbose)

    # Flag combinations are checked before any configuration or network access
    try:
        build_request(args)
    except UsageError as e:
        parser.error(str(e))

    try:
        config = BootstrapConfig.from_env().with_overrides(
            region=args.region,
            profile=args.profile,
            shutdown_delay=args.shutdown_delay,
        )
    except ConfigError as e:
        logger.error(str(e))
        sys.exit(e.exit_code)

    logger.debug(
        f"Loaded configuration (region={config.region or 'default'}, "
        f"profile={config.profile or 'default'}, "
        f"fetch_timeout={config.fetch_timeout:g}, "
        f"shutdown_delay={config.shutdown_delay:g})"
    )

    request = build_request(args, shutdown_delay=config.shutdown_delay)

    cancellation = CancellationCoordinator()
    cancellation.arm()

    try:
        service = create_service(config, cancellation)
        result = service.run(request)
        exit_code = result.exit_code
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        exit_code = 1
    finally:
        cancellation.disarm()

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
