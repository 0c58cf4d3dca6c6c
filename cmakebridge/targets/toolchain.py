"""Generator and compiler selection for the external build.

Maps the host's platform, compiler family and architecture onto a CMake
generator, its architecture switch and, for Unix-like targets with a bundled
clang toolchain, explicit compiler paths plus a C++ flag set compatible with
the host's own compile settings.
"""

import logging
from pathlib import Path

from cmakebridge.core.structlog_logger import get_struct_logger
from cmakebridge.protocols.toolchain_protocols import (
    HostFlagProviderProtocol,
    SdkLocatorProtocol,
)
from cmakebridge.targets.models import (
    Architecture,
    BuildContext,
    CompilerFamily,
    GeneratorDescriptor,
    Platform,
)


logger = get_struct_logger(__name__)

UNIX_GENERATOR = "Unix Makefiles"

WINDOWS_GENERATORS: dict[CompilerFamily, str] = {
    CompilerFamily.DEFAULT: "",
    CompilerFamily.CLANG: "NMake Makefiles",
    CompilerFamily.INTEL: "NMake Makefiles",
    CompilerFamily.VISUAL_STUDIO_2017: "Visual Studio 15 2017",
    CompilerFamily.VISUAL_STUDIO_2019: "Visual Studio 16 2019",
    CompilerFamily.VISUAL_STUDIO_2022: "Visual Studio 17 2022",
}

VISUAL_STUDIO_ARCHITECTURES: dict[Architecture, str] = {
    Architecture.X64: "x64",
    Architecture.ARM64: "ARM64",
    Architecture.X86: "Win32",
    Architecture.ARM32: "ARM",
}

# Flags the host passes to its bundled clang for Linux targets
CLANG_CXX_FLAGS: tuple[str, ...] = (
    "-Wall",
    "-Werror",
    "-Wdelete-non-virtual-dtor",
    "-Wenum-conversion",
    "-Wbitfield-enum-conversion",
    "-Wno-enum-enum-conversion",
    "-Wno-enum-float-conversion",
    "-Wno-unused-but-set-variable",
    "-Wno-unused-but-set-parameter",
    "-Wno-ordered-compare-function-pointers",
    "-Wno-gnu-string-literal-operator-template",
    "-Wno-inconsistent-missing-override",
    "-Wno-invalid-offsetof",
    "-Wno-switch",
    "-Wno-tautological-compare",
    "-Wno-unknown-pragmas",
    "-Wno-unused-function",
    "-Wno-unused-lambda-capture",
    "-Wno-unused-local-typedef",
    "-Wno-unused-private-field",
    "-Wno-unused-variable",
    "-Wno-undefined-var-template",
    "-Wshadow",
    "-Wno-float-conversion",
    "-Wno-implicit-float-conversion",
    "-Wno-implicit-int-conversion",
    "-Wno-c++11-narrowing",
    "-fdiagnostics-absolute-paths",
    "-fdiagnostics-color",
    "-O3",
    "-fexceptions",
    "-DPLATFORM_EXCEPTIONS_DISABLED=0",
    "-gdwarf-4",
    "-ggnu-pubnames",
    "-fvisibility-ms-compat",
    "-fvisibility-inlines-hidden",
    "-fbinutils-version=2.36",
    "-fno-math-errno",
    "-fno-rtti",
    "-fPIC",
    "-ftls-model=local-dynamic",
    "-std=c++17",
    "-fpch-validate-input-files-content",
)

CLANG_TARGET_TRIPLES: dict[Architecture, str] = {
    Architecture.X64: "x86_64-unknown-linux-gnu",
    Architecture.ARM64: "aarch64-unknown-linux-gnueabi",
}


class StaticSdkLocator:
    """SDK locator returning a fixed, configured toolchain root."""

    def __init__(self, sdk_dir: Path | None = None):
        self.sdk_dir = sdk_dir

    def get_internal_sdk_path(self, platform: Platform) -> Path | None:
        if self.sdk_dir is None or not platform.is_unix:
            return None
        return self.sdk_dir


def windows_generator_name(compiler: CompilerFamily) -> str:
    return WINDOWS_GENERATORS.get(compiler, "")


def windows_generator_options(
    compiler: CompilerFamily, architecture: Architecture
) -> tuple[str, ...]:
    """Architecture switch; only Visual Studio generators select one."""
    if not compiler.is_visual_studio:
        return ()
    return ("-A", VISUAL_STUDIO_ARCHITECTURES[architecture])


def clang_cxx_flags(context: BuildContext, sdk_dir: Path) -> list[str]:
    """Host-compatible flag set for the bundled clang toolchain."""
    flags = list(CLANG_CXX_FLAGS)

    if context.architecture is Architecture.X64:
        flags.append("-mssse3")
        flags.append("-D_LINUX64")

    if context.engine_dir is not None:
        libcxx_root = (
            context.engine_dir
            / "Source"
            / f"{context.third_party_source_dir}Unix"
            / "LibCxx"
            / "include"
        )
        flags.append("-nostdinc++")
        flags.append(f"-isystem{libcxx_root.as_posix()}")
        flags.append(f"-isystem{(libcxx_root / 'c++' / 'v1').as_posix()}")

    triple = CLANG_TARGET_TRIPLES.get(context.architecture)
    if triple:
        flags.extend(["-target", triple])
    flags.append(f"--sysroot={sdk_dir.as_posix()}")
    return flags


class ToolchainSynthesizer:
    """Derives a :class:`GeneratorDescriptor` from a :class:`BuildContext`.

    Never raises: a failing SDK lookup or host flag provider degrades to the
    external build's default compiler.
    """

    def __init__(
        self,
        sdk_locator: SdkLocatorProtocol | None = None,
        host_flag_provider: HostFlagProviderProtocol | None = None,
    ):
        self.sdk_locator = sdk_locator or StaticSdkLocator()
        self.host_flag_provider = host_flag_provider

    def synthesize(self, context: BuildContext) -> GeneratorDescriptor:
        if context.platform.is_windows:
            descriptor = GeneratorDescriptor(
                generator_name=windows_generator_name(context.compiler),
                generator_options=windows_generator_options(
                    context.compiler, context.architecture
                ),
            )
        elif context.platform.is_unix:
            descriptor = self._synthesize_unix(context)
        else:
            descriptor = GeneratorDescriptor(generator_name="")

        logger.debug(
            "generator_synthesized",
            platform=context.platform.value,
            generator=descriptor.generator_name,
            options=list(descriptor.generator_options),
            c_compiler=descriptor.c_compiler or None,
        )
        return descriptor

    def _synthesize_unix(self, context: BuildContext) -> GeneratorDescriptor:
        sdk_dir = self._lookup_sdk(context.platform)
        if sdk_dir is None:
            return GeneratorDescriptor(generator_name=UNIX_GENERATOR)

        bin_dir = sdk_dir / "bin"
        flags = clang_cxx_flags(context, sdk_dir)
        flags.extend(self._host_flags(context))

        return GeneratorDescriptor(
            generator_name=UNIX_GENERATOR,
            generator_options=(f'-DCMAKE_CXX_FLAGS="{" ".join(flags)}"',),
            c_compiler=(bin_dir / "clang").as_posix(),
            cpp_compiler=(bin_dir / "clang++").as_posix(),
            linker=(bin_dir / "lld").as_posix(),
        )

    def _lookup_sdk(self, platform: Platform) -> Path | None:
        try:
            return self.sdk_locator.get_internal_sdk_path(platform)
        except Exception as e:
            exc_info = logger.isEnabledFor(logging.DEBUG)
            logger.warning("sdk_lookup_failed", error=str(e), exc_info=exc_info)
            return None

    def _host_flags(self, context: BuildContext) -> list[str]:
        if self.host_flag_provider is None:
            return []
        try:
            flags = self.host_flag_provider.try_extract_host_compile_flags(context)
        except Exception as e:
            exc_info = logger.isEnabledFor(logging.DEBUG)
            logger.warning("host_flags_unavailable", error=str(e), exc_info=exc_info)
            return []
        return list(flags or [])


def create_toolchain_synthesizer(
    sdk_dir: Path | None = None,
    sdk_locator: SdkLocatorProtocol | None = None,
    host_flag_provider: HostFlagProviderProtocol | None = None,
) -> ToolchainSynthesizer:
    """Create a synthesizer, using ``sdk_dir`` when no locator is given."""
    return ToolchainSynthesizer(
        sdk_locator=sdk_locator or StaticSdkLocator(sdk_dir),
        host_flag_provider=host_flag_provider,
    )
