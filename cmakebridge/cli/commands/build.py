"""Build command for the cmakebridge CLI."""

import json
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from cmakebridge.cli.app import AppContext
from cmakebridge.cli.decorators import handle_errors
from cmakebridge.cli.helpers.parameters import (
    ArchitectureOption,
    CompilerOption,
    ConfigurationOption,
    DebugCrtOption,
    JsonOption,
    ModuleDirOption,
    PlatformOption,
    SystemCompilerOption,
    build_context,
)
from cmakebridge.targets.models import (
    BuildTarget,
    CompilerFamily,
    Configuration,
    PipelineResult,
)
from cmakebridge.targets.module_rules import ModuleRules
from cmakebridge.targets.orchestrator import create_build_orchestrator
from cmakebridge.targets.service import CMakeTargetService


def _print_rules_table(console: Console, result: PipelineResult, rules: ModuleRules) -> None:
    status = "[green]success[/green]" if result.success else "[red]failed[/red]"
    console.print(
        f"[bold]{result.target_name}[/bold] ({result.build_type}): {status}"
        f" in {result.build_time_seconds or 0.0:.1f}s"
    )
    console.print(
        "States: " + " -> ".join(state.value for state in result.transitions)
    )
    for error in result.errors:
        console.print(f"[red]{error}[/red]")

    table = Table(title="Module rules", show_header=True, header_style="bold cyan")
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Values")

    rows = {
        "Include paths": rules.public_include_paths,
        "Libraries": rules.public_additional_libraries,
        "Runtime library paths": rules.public_runtime_library_paths,
        "System libraries": rules.public_system_libraries,
        "External dependencies": rules.external_dependencies,
    }
    for field, values in rows.items():
        table.add_row(field, "\n".join(values) if values else "[dim]-[/dim]")
    table.add_row(
        "C++ standard", rules.cpp_standard.value if rules.cpp_standard else "[dim]-[/dim]"
    )
    console.print(table)


@handle_errors
def build(
    ctx: typer.Context,
    target_name: Annotated[str, typer.Argument(help="CMake target name")],
    target_location: Annotated[
        str, typer.Argument(help="Source directory, relative to the module directory")
    ],
    module_dir: ModuleDirOption = Path("."),
    platform: PlatformOption = None,
    configuration: ConfigurationOption = Configuration.DEVELOPMENT,
    arch: ArchitectureOption = None,
    compiler: CompilerOption = CompilerFamily.DEFAULT,
    use_system_compiler: SystemCompilerOption = False,
    debug_crt: DebugCrtOption = False,
    extra_args: Annotated[
        str,
        typer.Option("--extra-args", "-e", help="Arguments passed to the configure step"),
    ] = "",
    json_output: JsonOption = False,
) -> None:
    """Configure (when needed) and build an external CMake target."""
    app_ctx: AppContext = ctx.obj
    context = build_context(
        platform, configuration, arch, compiler, use_system_compiler, debug_crt
    )
    target = BuildTarget.from_args(target_name, target_location, module_dir, extra_args)
    orchestrator = create_build_orchestrator(
        settings=app_ctx.settings, host_platform=context.host_platform
    )

    rules = ModuleRules()
    result = CMakeTargetService(orchestrator).load(target, context, rules)

    if json_output:
        print(
            json.dumps(
                {"result": result.to_dict_full(), "rules": rules.to_dict_full()},
                indent=2,
            )
        )
    else:
        _print_rules_table(Console(), result, rules)

    if not result.success:
        raise typer.Exit(1)


def register_commands(app: typer.Typer) -> None:
    """Register build commands with the main app."""
    app.command(name="build")(build)
