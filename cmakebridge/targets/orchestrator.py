"""Incremental configure/build pipeline for one external CMake target.

A run walks the states of :class:`OrchestratorState`::

    UNINITIALIZED -> PATHS_RESOLVED -> CONFIGURE_SKIPPED | CONFIGURED
                  -> BUILT -> SUCCESS | FAILED

Configure is skipped when the built marker matches the modification time of
the target's own CMakeLists.txt to the second. Failures never escape
:meth:`BuildOrchestrator.run`; they are reported through the returned
:class:`PipelineResult`.
"""

import logging
import time
from datetime import datetime
from pathlib import Path

from cmakebridge.config.models import BridgeSettings
from cmakebridge.core.errors import (
    BuildFailedError,
    CMakeBridgeError,
    ConfigureFailedError,
    UnsupportedPlatformError,
)
from cmakebridge.core.structlog_logger import get_struct_logger_with_context
from cmakebridge.protocols.cmake_adapter_protocol import CMakeAdapterProtocol
from cmakebridge.protocols.file_adapter_protocol import FileAdapterProtocol
from cmakebridge.targets.manifest_store import (
    ManifestStore,
    timestamp_from_mtime,
    truncate_to_seconds,
)
from cmakebridge.targets.models import (
    BuildContext,
    BuildPaths,
    BuildTarget,
    FailureReason,
    GeneratorDescriptor,
    OrchestratorState,
    PipelineResult,
    Platform,
)
from cmakebridge.targets.project_generator import ProjectGenerator
from cmakebridge.targets.toolchain import ToolchainSynthesizer
from cmakebridge.utils.build_log_middleware import (
    BuildLogCaptureMiddleware,
    create_build_log_middleware,
)


def host_options(context: BuildContext, descriptor: GeneratorDescriptor) -> list[str]:
    """Options that depend on the machine running the build tool.

    On a Windows host the 64-bit toolset is requested from generators that
    accept a toolset, which are the Visual Studio ones and the default.
    """
    if not context.effective_host_platform.is_windows:
        return []
    name = descriptor.generator_name
    if name and not name.startswith("Visual Studio"):
        return []
    return ["-T", "host=x64"]


def configure_command(
    executable: str,
    context: BuildContext,
    descriptor: GeneratorDescriptor,
    paths: BuildPaths,
    build_type: str,
    toolchain_file: Path | None = None,
    cmake_args: str = "",
) -> str:
    """Assemble the configure command line."""
    parts = [executable]
    if descriptor.generator_name:
        parts.extend(["-G", f'"{descriptor.generator_name}"'])
    parts.extend(descriptor.generator_options)
    parts.extend(
        [
            f'-S "{paths.generated_target_dir.as_posix()}"',
            f'-B "{paths.build_dir.as_posix()}"',
            f"-DCMAKE_BUILD_TYPE={build_type}",
            f'-DCMAKE_INSTALL_PREFIX="{paths.generated_root.as_posix()}"',
        ]
    )
    if toolchain_file is not None:
        parts.append(f'-DCMAKE_TOOLCHAIN_FILE="{toolchain_file.as_posix()}"')
    if descriptor.has_compilers and not context.use_system_compiler:
        parts.append(f"-DCMAKE_C_COMPILER={descriptor.c_compiler}")
        parts.append(f"-DCMAKE_CXX_COMPILER={descriptor.cpp_compiler}")
    parts.extend(host_options(context, descriptor))
    if cmake_args:
        parts.append(cmake_args)
    return " ".join(parts)


def build_command(executable: str, paths: BuildPaths, build_type: str) -> str:
    return f'{executable} --build "{paths.build_dir.as_posix()}" --config {build_type}'


class BuildOrchestrator:
    """Runs the configure and build steps of an external target."""

    def __init__(
        self,
        file_adapter: FileAdapterProtocol,
        cmake_adapter: CMakeAdapterProtocol,
        manifest_store: ManifestStore,
        project_generator: ProjectGenerator,
        toolchain_synthesizer: ToolchainSynthesizer,
        settings: BridgeSettings | None = None,
    ):
        self.file_adapter = file_adapter
        self.cmake_adapter = cmake_adapter
        self.manifest_store = manifest_store
        self.project_generator = project_generator
        self.toolchain_synthesizer = toolchain_synthesizer
        self.settings = settings or BridgeSettings()

    def resolve_paths(self, target: BuildTarget, build_type: str) -> BuildPaths:
        return BuildPaths.resolve(
            target,
            build_type,
            third_party_dir=self.settings.third_party_dir,
            generated_dir_name=self.settings.generated_dir_name,
            build_dir_name=self.settings.build_dir_name,
        )

    def source_timestamp(self, paths: BuildPaths) -> datetime:
        """Modification time of the target's CMakeLists.txt, to the second."""
        mtime = self.file_adapter.get_mtime(paths.source_descriptor)
        return truncate_to_seconds(timestamp_from_mtime(mtime))

    def needs_configure(self, paths: BuildPaths) -> bool:
        """Whether the built marker is missing or older than the project."""
        marker = self.manifest_store.read_built_marker(paths.built_marker)
        if marker is None:
            return True
        return truncate_to_seconds(marker) != self.source_timestamp(paths)

    def run(self, target: BuildTarget, context: BuildContext) -> PipelineResult:
        """Configure (when stale) and build ``target``.

        Returns:
            PipelineResult; ``success`` is False after any failure and
            ``sentinel_path`` then names the file to report as a dependency
        """
        build_type = target.build_type_for(context)
        logger = get_struct_logger_with_context(
            __name__, target=target.target_name, build_type=build_type
        )
        result = PipelineResult(target_name=target.target_name, build_type=build_type)
        result.transition(OrchestratorState.UNINITIALIZED)
        start_time = time.time()
        build_log: BuildLogCaptureMiddleware | None = None

        result.sentinel_path = (
            (target.module_dir / target.source_location).resolve() / "build.failed"
        )

        if not context.platform.is_supported:
            error = UnsupportedPlatformError(context.platform.value)
            result.add_error(str(error), FailureReason.UNSUPPORTED_PLATFORM)
            logger.warning("platform_unsupported", platform=context.platform.value)
            return result

        try:
            paths = self.resolve_paths(target, build_type)
            self.file_adapter.mkdir(paths.generated_target_dir)
            self.file_adapter.mkdir(paths.build_dir)
            result.transition(OrchestratorState.PATHS_RESOLVED)

            if self.settings.capture_build_log:
                build_log = create_build_log_middleware(
                    paths.generated_target_dir, target.target_name, build_type
                )

            if self.needs_configure(paths):
                logger.info("configure_required", source=str(paths.source_descriptor))
                self._configure(target, context, paths, build_type, build_log)
                result.configured = True
                result.transition(OrchestratorState.CONFIGURED)
            else:
                logger.debug("configure_skipped")
                result.transition(OrchestratorState.CONFIGURE_SKIPPED)

            self._build(paths, build_type, build_log)
            result.transition(OrchestratorState.BUILT)

            if result.configured:
                self.manifest_store.write_built_marker(
                    paths.built_marker, self.source_timestamp(paths)
                )

            result.success = True
            result.transition(OrchestratorState.SUCCESS)
            result.add_message(f"Built {target.target_name} ({build_type})")

        except ConfigureFailedError as e:
            result.add_error(str(e), FailureReason.CONFIGURE_FAILED, e.exit_code)
        except BuildFailedError as e:
            result.add_error(str(e), FailureReason.BUILD_FAILED, e.exit_code)
        except CMakeBridgeError as e:
            exc_info = logger.isEnabledFor(logging.DEBUG)
            logger.error("pipeline_error", error=str(e), exc_info=exc_info)
            result.add_error(str(e), FailureReason.ERROR)
        finally:
            if build_log is not None:
                build_log.close()
            result.build_time_seconds = time.time() - start_time

        logger.info(
            "pipeline_finished",
            success=result.success,
            states=[state.value for state in result.transitions],
            duration=round(result.build_time_seconds or 0.0, 3),
        )
        return result

    def _configure(
        self,
        target: BuildTarget,
        context: BuildContext,
        paths: BuildPaths,
        build_type: str,
        build_log: BuildLogCaptureMiddleware | None,
    ) -> None:
        descriptor = self.toolchain_synthesizer.synthesize(context)
        self.project_generator.generate_project_descriptor(
            target, context, paths, build_type
        )
        toolchain_file = self.project_generator.generate_toolchain_descriptor(
            target, context, descriptor, paths, build_type
        )
        command = configure_command(
            self.cmake_adapter.executable,
            context,
            descriptor,
            paths,
            build_type,
            toolchain_file=toolchain_file,
            cmake_args=target.cmake_args,
        )
        exit_code = self._execute(command, paths, build_log)
        if exit_code != 0:
            raise ConfigureFailedError(exit_code)

    def _build(
        self,
        paths: BuildPaths,
        build_type: str,
        build_log: BuildLogCaptureMiddleware | None,
    ) -> None:
        command = build_command(self.cmake_adapter.executable, paths, build_type)
        exit_code = self._execute(command, paths, build_log)
        if exit_code != 0:
            raise BuildFailedError(exit_code)

    def _execute(
        self,
        command: str,
        paths: BuildPaths,
        build_log: BuildLogCaptureMiddleware | None,
    ) -> int:
        if build_log is not None:
            build_log.begin_section(command)
        return self.cmake_adapter.run(
            command, cwd=paths.module_dir, middleware=build_log
        )


def create_build_orchestrator(
    settings: BridgeSettings | None = None,
    file_adapter: FileAdapterProtocol | None = None,
    cmake_adapter: CMakeAdapterProtocol | None = None,
    host_platform: Platform | None = None,
) -> BuildOrchestrator:
    """Factory function wiring an orchestrator from settings."""
    from cmakebridge.adapters.cmake_adapter import create_cmake_adapter
    from cmakebridge.adapters.file_adapter import create_file_adapter
    from cmakebridge.targets.manifest_store import create_manifest_store
    from cmakebridge.targets.project_generator import create_project_generator
    from cmakebridge.targets.toolchain import create_toolchain_synthesizer

    settings = settings or BridgeSettings()
    file_adapter = file_adapter or create_file_adapter()
    cmake_adapter = cmake_adapter or create_cmake_adapter(
        host_platform=host_platform,
        executable=settings.cmake_executable,
        shell=settings.shell,
    )
    return BuildOrchestrator(
        file_adapter=file_adapter,
        cmake_adapter=cmake_adapter,
        manifest_store=create_manifest_store(file_adapter),
        project_generator=create_project_generator(
            file_adapter=file_adapter,
            templates_dir=settings.templates_dir,
            build_dir_name=settings.build_dir_name,
        ),
        toolchain_synthesizer=create_toolchain_synthesizer(sdk_dir=settings.sdk_dir),
        settings=settings,
    )
