"""Domain models for external CMake targets.

The models here describe one delegated build: which target is built
(:class:`BuildTarget`), for which host configuration (:class:`BuildContext`),
where its files live (:class:`BuildPaths`), how the external generator is
selected (:class:`GeneratorDescriptor`) and how a pipeline run ended
(:class:`PipelineResult`).
"""

import logging
import platform as _platform
import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

from pydantic import ConfigDict, Field, field_validator

from cmakebridge.models.base import BridgeBaseModel


logger = logging.getLogger(__name__)

BUILD_TYPE_PATTERN = re.compile(r"-DCMAKE_BUILD_TYPE=(\w*)")
TOOLCHAIN_FILE_PATTERN = re.compile(r"-DCMAKE_TOOLCHAIN_FILE=(\"[^\"]*\"|[^\s\"]+)")


class Platform(str, Enum):
    """Target platforms known to the host build."""

    WIN64 = "Win64"
    LINUX = "Linux"
    MAC = "Mac"
    ANDROID = "Android"
    IOS = "IOS"
    OTHER = "Other"

    @property
    def is_windows(self) -> bool:
        return self is Platform.WIN64

    @property
    def is_unix(self) -> bool:
        return self in (Platform.LINUX, Platform.MAC)

    @property
    def is_supported(self) -> bool:
        return self.is_windows or self.is_unix

    @classmethod
    def current(cls) -> "Platform":
        """Return the platform of the running interpreter."""
        system = _platform.system()
        if system == "Windows":
            return cls.WIN64
        if system == "Darwin":
            return cls.MAC
        if system == "Linux":
            return cls.LINUX
        return cls.OTHER


class Configuration(str, Enum):
    """Host build configurations."""

    DEBUG = "Debug"
    DEBUG_GAME = "DebugGame"
    DEVELOPMENT = "Development"
    TEST = "Test"
    SHIPPING = "Shipping"


class BuildType(str, Enum):
    """Build types passed to the external build system."""

    DEBUG = "Debug"
    RELEASE = "Release"

    @classmethod
    def from_configuration(cls, configuration: Configuration) -> "BuildType":
        if configuration in (Configuration.DEBUG, Configuration.DEBUG_GAME):
            return cls.DEBUG
        return cls.RELEASE


class Architecture(str, Enum):
    X64 = "x64"
    ARM64 = "arm64"
    X86 = "x86"
    ARM32 = "arm32"

    @classmethod
    def current(cls) -> "Architecture":
        machine = _platform.machine().lower()
        if machine in ("arm64", "aarch64"):
            return cls.ARM64
        if machine in ("i386", "i686", "x86"):
            return cls.X86
        if machine.startswith("arm"):
            return cls.ARM32
        return cls.X64


class CompilerFamily(str, Enum):
    DEFAULT = "Default"
    CLANG = "Clang"
    INTEL = "Intel"
    VISUAL_STUDIO_2017 = "VisualStudio2017"
    VISUAL_STUDIO_2019 = "VisualStudio2019"
    VISUAL_STUDIO_2022 = "VisualStudio2022"

    @property
    def is_visual_studio(self) -> bool:
        return self in (
            CompilerFamily.VISUAL_STUDIO_2017,
            CompilerFamily.VISUAL_STUDIO_2019,
            CompilerFamily.VISUAL_STUDIO_2022,
        )


class CppStandard(str, Enum):
    """C++ standard levels a manifest can request."""

    CPP11 = "11"
    CPP14 = "14"
    CPP17 = "17"
    CPP20 = "20"
    LATEST = "latest"

    @classmethod
    def from_manifest(cls, value: str) -> "CppStandard":
        """Map a manifest value, falling back to LATEST for unknown levels."""
        try:
            return cls(value.strip())
        except ValueError:
            logger.debug("Unrecognized cppStandard %r, using latest", value)
            return cls.LATEST


class OrchestratorState(str, Enum):
    UNINITIALIZED = "uninitialized"
    PATHS_RESOLVED = "paths_resolved"
    CONFIGURE_SKIPPED = "configure_skipped"
    CONFIGURED = "configured"
    BUILT = "built"
    SUCCESS = "success"
    FAILED = "failed"


class FailureReason(str, Enum):
    CONFIGURE_FAILED = "configure_failed"
    BUILD_FAILED = "build_failed"
    MANIFEST_MISSING = "manifest_missing"
    UNSUPPORTED_PLATFORM = "unsupported_platform"
    ERROR = "error"


class BuildContext(BridgeBaseModel):
    """Host build configuration a target is built against.

    Computed from the host invocation every time and passed explicitly to
    every component; never persisted.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    platform: Platform
    configuration: Configuration = Configuration.DEVELOPMENT
    architecture: Architecture = Architecture.X64
    compiler: CompilerFamily = CompilerFamily.DEFAULT
    use_system_compiler: bool = False
    host_platform: Platform | None = None
    debug_builds_use_debug_crt: bool = False
    engine_dir: Path | None = None
    third_party_source_dir: str = "ThirdParty/"

    @property
    def build_type(self) -> BuildType:
        return BuildType.from_configuration(self.configuration)

    @property
    def effective_host_platform(self) -> Platform:
        return self.host_platform or Platform.current()

    @classmethod
    def detect(
        cls,
        configuration: Configuration = Configuration.DEVELOPMENT,
        use_system_compiler: bool = False,
    ) -> "BuildContext":
        """Build a context describing a native build on this machine."""
        current = Platform.current()
        return cls(
            platform=current,
            configuration=configuration,
            architecture=Architecture.current(),
            use_system_compiler=use_system_compiler,
            host_platform=current,
        )


class BuildTarget(BridgeBaseModel):
    """One external project delegated to CMake.

    ``extra_args`` is scanned once at construction: an explicit
    ``-DCMAKE_BUILD_TYPE=<word>`` pins the build type, and a
    ``-DCMAKE_TOOLCHAIN_FILE=<path>`` is removed from the pass-through
    arguments so its contents can be appended to the generated toolchain.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    target_name: str
    source_location: str
    module_dir: Path
    extra_args: str = ""
    forced_build_type: str | None = None
    included_toolchain_file: Path | None = None
    cmake_args: str = ""

    @field_validator("target_name")
    @classmethod
    def validate_target_name(cls, v: str) -> str:
        if not v or any(sep in v for sep in ("/", "\\")):
            raise ValueError("Target name must be a non-empty directory name")
        return v

    @classmethod
    def from_args(
        cls,
        target_name: str,
        source_location: str,
        module_dir: Path,
        extra_args: str = "",
    ) -> "BuildTarget":
        forced_build_type: str | None = None
        build_type_match = BUILD_TYPE_PATTERN.search(extra_args)
        if build_type_match and build_type_match.group(1):
            forced_build_type = build_type_match.group(1)

        included_toolchain: Path | None = None
        cmake_args = extra_args
        toolchain_match = TOOLCHAIN_FILE_PATTERN.search(extra_args)
        if toolchain_match:
            included_toolchain = Path(toolchain_match.group(1).strip('"'))
            before = extra_args[: toolchain_match.start()].rstrip()
            after = extra_args[toolchain_match.end() :].lstrip()
            cmake_args = f"{before} {after}"

        return cls(
            target_name=target_name,
            source_location=source_location,
            module_dir=Path(module_dir).resolve(),
            extra_args=extra_args,
            forced_build_type=forced_build_type,
            included_toolchain_file=included_toolchain,
            cmake_args=cmake_args.strip(),
        )

    def build_type_for(self, context: BuildContext) -> str:
        """Build type used for the whole pipeline."""
        if self.forced_build_type:
            return self.forced_build_type
        return context.build_type.value


@dataclass(frozen=True)
class BuildPaths:
    """Filesystem locations of one target's pipeline.

    Derived only from the target, the build type and the directory naming
    settings so repeated runs see the same paths.

    Attributes:
        module_dir: Host module directory
        target_dir: Source directory of the external project
        source_descriptor: The project's own CMakeLists.txt (staleness source)
        generated_root: ``<thirdPartyRoot>/generated``, also the install prefix
        generated_target_dir: ``<generated_root>/<targetName>``
        project_descriptor: Generated root CMakeLists.txt
        toolchain_file: Generated toolchain descriptor
        build_dir: ``<generated_target_dir>/build``
        manifest_file: ``buildinfo_<BuildType>.output`` in the build dir
        built_marker: ``<BuildType>.built`` in the generated target dir
        sentinel_file: Never-created file reported after failures
    """

    module_dir: Path
    target_dir: Path
    source_descriptor: Path
    generated_root: Path
    generated_target_dir: Path
    project_descriptor: Path
    toolchain_file: Path
    build_dir: Path
    manifest_file: Path
    built_marker: Path
    sentinel_file: Path

    @classmethod
    def resolve(
        cls,
        target: BuildTarget,
        build_type: str,
        third_party_dir: str = "../ThirdParty",
        generated_dir_name: str = "generated",
        build_dir_name: str = "build",
    ) -> "BuildPaths":
        module_dir = target.module_dir
        target_dir = (module_dir / target.source_location).resolve()
        generated_root = (module_dir / third_party_dir).resolve() / generated_dir_name
        generated_target_dir = generated_root / target.target_name
        build_dir = generated_target_dir / build_dir_name

        return cls(
            module_dir=module_dir,
            target_dir=target_dir,
            source_descriptor=target_dir / "CMakeLists.txt",
            generated_root=generated_root,
            generated_target_dir=generated_target_dir,
            project_descriptor=generated_target_dir / "CMakeLists.txt",
            toolchain_file=generated_target_dir / "toolchain.cmake",
            build_dir=build_dir,
            manifest_file=build_dir / f"buildinfo_{build_type}.output",
            built_marker=generated_target_dir / f"{build_type}.built",
            sentinel_file=target_dir / "build.failed",
        )


@dataclass(frozen=True)
class GeneratorDescriptor:
    """Generator selection and compiler paths for one configure run.

    Empty compiler paths mean the external build picks its own compiler.
    """

    generator_name: str
    generator_options: tuple[str, ...] = ()
    c_compiler: str = ""
    cpp_compiler: str = ""
    linker: str = ""

    @property
    def has_compilers(self) -> bool:
        return bool(self.c_compiler)


class PipelineResult(BridgeBaseModel):
    """Outcome of one orchestrator run."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    target_name: str
    build_type: str
    success: bool = False
    state: OrchestratorState = OrchestratorState.UNINITIALIZED
    transitions: list[OrchestratorState] = Field(default_factory=list)
    configured: bool = False
    failure_reason: FailureReason | None = None
    exit_code: int | None = None
    sentinel_path: Path | None = None
    timestamp: datetime = Field(default_factory=datetime.now)
    build_time_seconds: float | None = None
    messages: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)

    def transition(self, state: OrchestratorState) -> None:
        """Move to ``state`` and record it."""
        self.state = state
        self.transitions = [*self.transitions, state]

    def add_message(self, message: str) -> None:
        self.messages = [*self.messages, message]
        logger.info(message)

    def add_error(
        self,
        error: str,
        reason: FailureReason = FailureReason.ERROR,
        exit_code: int | None = None,
    ) -> None:
        """Record a failure and move to the FAILED state."""
        self.errors = [*self.errors, error]
        logger.error(error)
        self.failure_reason = reason
        self.exit_code = exit_code
        self.success = False
        self.transition(OrchestratorState.FAILED)
