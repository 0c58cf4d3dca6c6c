"""Main CLI application for cmakebridge."""

import logging
import sys
from typing import Annotated

import typer

from cmakebridge.cli.decorators.error_handling import print_stack_trace_if_verbose
from cmakebridge.config.models import BridgeSettings
from cmakebridge.config.user_config import load_settings
from cmakebridge.core.errors import ConfigError
from cmakebridge.core.logging import setup_logging


__all__ = ["app", "main", "AppContext"]

logger = logging.getLogger(__name__)


class AppContext:
    """Application context for storing shared state."""

    def __init__(
        self,
        settings: BridgeSettings,
        verbose: int = 0,
        log_file: str | None = None,
        config_file: str | None = None,
    ):
        self.settings = settings
        self.verbose = verbose
        self.log_file = log_file
        self.config_file = config_file


def _log_level_name(verbose: int, debug: bool, settings: BridgeSettings) -> str:
    if debug or verbose >= 2:
        return "DEBUG"
    if verbose == 1:
        return "INFO"
    return settings.log_level


app = typer.Typer(
    name="cmakebridge",
    help="""Build external CMake projects for a host module build.

Common workflows:
  • Build a target:     cmakebridge build zlib ../ThirdParty/zlib -m Source/MyModule
  • Inspect a manifest: cmakebridge manifest build/buildinfo_Release.output
  • Show generator:     cmakebridge toolchain --platform Linux --sdk-dir /opt/clang
  • Check staleness:    cmakebridge status zlib ../ThirdParty/zlib -m Source/MyModule""",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "-v",
            "--verbose",
            count=True,
            help="Increase verbosity (-v=INFO, -vv=DEBUG)",
        ),
    ] = 0,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Enable debug logging (equivalent to -vv)"),
    ] = False,
    log_file: Annotated[
        str | None, typer.Option("--log-file", help="Log to file")
    ] = None,
    config_file: Annotated[
        str | None,
        typer.Option("-c", "--config", help="Path to configuration file"),
    ] = None,
    version: Annotated[
        bool, typer.Option("--version", help="Show version and exit")
    ] = False,
) -> None:
    """cmakebridge external build orchestrator."""
    if version:
        from cmakebridge import __version__

        print(f"cmakebridge v{__version__}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        print(ctx.get_help())
        raise typer.Exit()

    try:
        settings = load_settings(config_file)
    except ConfigError as e:
        setup_logging(log_level_name="ERROR", log_file=log_file)
        logger.error("Cannot load configuration: %s", e)
        raise typer.Exit(1) from e

    setup_logging(
        log_level_name=_log_level_name(verbose, debug, settings), log_file=log_file
    )
    ctx.obj = AppContext(
        settings=settings, verbose=verbose, log_file=log_file, config_file=config_file
    )


def main() -> int:
    """Main CLI entry point."""
    exit_code = 0
    try:
        # Commands are registered when the cmakebridge.cli package is imported
        app()
    except SystemExit as e:
        exit_code = e.code if isinstance(e.code, int) else 0
    except Exception as e:
        logger.exception("Unexpected error: %s", e)
        print_stack_trace_if_verbose()
        exit_code = 1
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
