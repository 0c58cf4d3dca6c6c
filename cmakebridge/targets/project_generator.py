"""Generation of the root CMakeLists.txt and toolchain file for a target."""

import importlib.resources
import logging
from pathlib import Path

from cmakebridge.core.errors import FileSystemError
from cmakebridge.core.structlog_logger import get_struct_logger
from cmakebridge.protocols.file_adapter_protocol import FileAdapterProtocol
from cmakebridge.protocols.template_adapter_protocol import TemplateAdapterProtocol
from cmakebridge.targets.models import (
    BuildContext,
    BuildPaths,
    BuildTarget,
    Configuration,
    GeneratorDescriptor,
)
from cmakebridge.utils.error_utils import create_template_error


logger = get_struct_logger(__name__)

PROJECT_TEMPLATE = "CMakeLists.in"
WINDOWS_TOOLCHAIN_TEMPLATE = "toolchains/windows_toolchain.in"
UNIX_TOOLCHAIN_TEMPLATE = "toolchains/unix_toolchain.in"


def packaged_templates_dir() -> Path:
    """Directory of the templates shipped with the package."""
    return Path(str(importlib.resources.files("cmakebridge") / "templates"))


def project_release_runtime(context: BuildContext, build_type: str) -> bool:
    """Whether the generated CMakeLists.txt pins the release C runtime.

    Debug builds on Windows link the release runtime unless the host itself
    is a Debug build linking the debug runtime. Other builds keep CMake's
    per-configuration default.
    """
    if not context.platform.is_windows or build_type != "Debug":
        return False
    return not (
        context.configuration is Configuration.DEBUG
        and context.debug_builds_use_debug_crt
    )


def toolchain_release_runtime(
    target: BuildTarget, context: BuildContext, build_type: str
) -> bool:
    """Whether the generated Windows toolchain file selects the release runtime.

    A pinned build type links the runtime matching it; otherwise the release
    runtime is used unless the host is a Debug build linking the debug runtime.
    """
    if not context.platform.is_windows:
        return False
    if target.forced_build_type:
        return build_type == "Release"
    return not (
        context.configuration is Configuration.DEBUG
        and context.debug_builds_use_debug_crt
    )


def on_off(value: bool) -> str:
    return "ON" if value else "OFF"


class ProjectGenerator:
    """Materializes the descriptors CMake is configured with.

    Generation is unconditional; deciding whether a reconfigure is needed is
    the orchestrator's job.
    """

    def __init__(
        self,
        template_adapter: TemplateAdapterProtocol,
        file_adapter: FileAdapterProtocol,
        templates_dir: Path | None = None,
        build_dir_name: str = "build",
    ):
        self.template_adapter = template_adapter
        self.file_adapter = file_adapter
        self.templates_dir = templates_dir or packaged_templates_dir()
        self.build_dir_name = build_dir_name

    def generate_project_descriptor(
        self,
        target: BuildTarget,
        context: BuildContext,
        paths: BuildPaths,
        build_type: str,
    ) -> Path:
        """Write ``<generated>/<target>/CMakeLists.txt`` from the project template."""
        substitutions = {
            "BUILD_TARGET_NAME": target.target_name,
            "BUILD_TARGET_DIR": paths.target_dir.as_posix(),
            "BUILD_TARGET_THIRDPARTY_DIR": paths.generated_root.as_posix(),
            "BUILD_TARGET_BUILD_DIR": self.build_dir_name,
            "FORCE_RELEASE_RUNTIME": on_off(
                project_release_runtime(context, build_type)
            ),
        }
        self.template_adapter.render_template(
            self.templates_dir / PROJECT_TEMPLATE,
            substitutions,
            output_path=paths.project_descriptor,
        )
        logger.debug(
            "project_descriptor_generated",
            target=target.target_name,
            path=str(paths.project_descriptor),
        )
        return paths.project_descriptor

    def generate_toolchain_descriptor(
        self,
        target: BuildTarget,
        context: BuildContext,
        descriptor: GeneratorDescriptor,
        paths: BuildPaths,
        build_type: str,
    ) -> Path | None:
        """Write the platform toolchain file.

        Returns:
            Path to pass as ``CMAKE_TOOLCHAIN_FILE``. For platforms without a
            toolchain template this is the included toolchain file, if any.
        """
        if context.platform.is_windows:
            template = WINDOWS_TOOLCHAIN_TEMPLATE
            substitutions = {
                "FORCE_RELEASE_RUNTIME": on_off(
                    toolchain_release_runtime(target, context, build_type)
                ),
            }
        elif context.platform.is_unix:
            template = UNIX_TOOLCHAIN_TEMPLATE
            substitutions = {
                "USE_COMPILER": "0" if context.use_system_compiler else "1",
                "COMPILER": descriptor.c_compiler,
                "CPPCOMPILER": descriptor.cpp_compiler,
                "LINKER": descriptor.linker,
            }
        else:
            return target.included_toolchain_file

        self.template_adapter.render_template(
            self.templates_dir / template,
            substitutions,
            output_path=paths.toolchain_file,
            append=self._included_toolchain(target),
        )
        logger.debug(
            "toolchain_descriptor_generated",
            target=target.target_name,
            template=template,
            included=str(target.included_toolchain_file)
            if target.included_toolchain_file
            else None,
        )
        return paths.toolchain_file

    def _included_toolchain(self, target: BuildTarget) -> str:
        if target.included_toolchain_file is None:
            return ""
        try:
            return self.file_adapter.read_text(target.included_toolchain_file)
        except FileSystemError as e:
            exc_info = logger.isEnabledFor(logging.DEBUG)
            logger.error(
                "included_toolchain_unreadable",
                path=str(target.included_toolchain_file),
                error=str(e),
                exc_info=exc_info,
            )
            raise create_template_error(
                target.included_toolchain_file, "include_toolchain", e
            ) from e


def create_project_generator(
    template_adapter: TemplateAdapterProtocol | None = None,
    file_adapter: FileAdapterProtocol | None = None,
    templates_dir: Path | None = None,
    build_dir_name: str = "build",
) -> ProjectGenerator:
    """Factory function to create a ProjectGenerator with default adapters."""
    from cmakebridge.adapters.file_adapter import create_file_adapter
    from cmakebridge.adapters.template_adapter import create_template_adapter

    file_adapter = file_adapter or create_file_adapter()
    return ProjectGenerator(
        template_adapter=template_adapter or create_template_adapter(file_adapter),
        file_adapter=file_adapter,
        templates_dir=templates_dir,
        build_dir_name=build_dir_name,
    )


__all__ = [
    "ProjectGenerator",
    "create_project_generator",
    "packaged_templates_dir",
    "project_release_runtime",
    "toolchain_release_runtime",
]
