"""Reusable CLI options describing the host build context."""

from pathlib import Path
from typing import Annotated

import typer

from cmakebridge.targets.models import (
    Architecture,
    BuildContext,
    CompilerFamily,
    Configuration,
    Platform,
)


PlatformOption = Annotated[
    Platform | None,
    typer.Option("--platform", "-p", help="Target platform (default: this machine)"),
]
ConfigurationOption = Annotated[
    Configuration,
    typer.Option("--configuration", help="Host build configuration"),
]
ArchitectureOption = Annotated[
    Architecture | None,
    typer.Option("--arch", help="Target architecture (default: this machine)"),
]
CompilerOption = Annotated[
    CompilerFamily,
    typer.Option("--compiler", help="Host compiler family"),
]
SystemCompilerOption = Annotated[
    bool,
    typer.Option(
        "--use-system-compiler",
        help="Let CMake pick the compiler instead of the bundled toolchain",
    ),
]
DebugCrtOption = Annotated[
    bool,
    typer.Option(
        "--debug-crt",
        help="Host Debug builds link the debug C runtime",
    ),
]
ModuleDirOption = Annotated[
    Path,
    typer.Option(
        "--module-dir",
        "-m",
        help="Host module directory the target location is relative to",
    ),
]
JsonOption = Annotated[
    bool,
    typer.Option("--json", help="Print machine readable JSON"),
]


def build_context(
    platform: Platform | None = None,
    configuration: Configuration = Configuration.DEVELOPMENT,
    architecture: Architecture | None = None,
    compiler: CompilerFamily = CompilerFamily.DEFAULT,
    use_system_compiler: bool = False,
    debug_crt: bool = False,
) -> BuildContext:
    """Create a BuildContext from command line options."""
    return BuildContext(
        platform=platform or Platform.current(),
        configuration=configuration,
        architecture=architecture or Architecture.current(),
        compiler=compiler,
        use_system_compiler=use_system_compiler,
        host_platform=Platform.current(),
        debug_builds_use_debug_crt=debug_crt,
    )
