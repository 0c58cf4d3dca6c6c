"""Tests for project and toolchain descriptor generation."""

from pathlib import Path

import pytest

from cmakebridge.core.errors import TemplateError
from cmakebridge.targets.models import (
    BuildContext,
    BuildPaths,
    BuildTarget,
    Configuration,
    GeneratorDescriptor,
    Platform,
)
from cmakebridge.targets.project_generator import (
    create_project_generator,
    packaged_templates_dir,
    project_release_runtime,
    toolchain_release_runtime,
)


UNIX_DESCRIPTOR = GeneratorDescriptor(
    generator_name="Unix Makefiles",
    c_compiler="/sdk/bin/clang",
    cpp_compiler="/sdk/bin/clang++",
    linker="/sdk/bin/lld",
)


@pytest.fixture
def generator():
    return create_project_generator()


@pytest.fixture
def paths(target) -> BuildPaths:
    return BuildPaths.resolve(target, "Release")


class TestProjectReleaseRuntime:
    """Test the C runtime pinned by the generated CMakeLists.txt."""

    def test_non_windows_never_forces(self, linux_context):
        assert project_release_runtime(linux_context, "Debug") is False

    def test_windows_release_build_keeps_default(self, windows_context):
        assert project_release_runtime(windows_context, "Release") is False

    def test_windows_debug_build_uses_release_runtime(self, windows_context):
        assert project_release_runtime(windows_context, "Debug") is True

    def test_windows_debug_host_with_debug_crt(self):
        context = BuildContext(
            platform=Platform.WIN64,
            configuration=Configuration.DEBUG,
            debug_builds_use_debug_crt=True,
        )

        assert project_release_runtime(context, "Debug") is False

    @pytest.mark.parametrize(
        "configuration", [Configuration.DEVELOPMENT, Configuration.SHIPPING]
    )
    def test_pinned_debug_on_release_host(self, generator, module_dir, configuration):
        """A pinned Debug build must not pull the debug CRT into a release host."""
        target = BuildTarget.from_args(
            "zlib", "../ThirdParty/zlib", module_dir, "-DCMAKE_BUILD_TYPE=Debug"
        )
        context = BuildContext(platform=Platform.WIN64, configuration=configuration)
        paths = BuildPaths.resolve(target, "Debug")

        output = generator.generate_project_descriptor(target, context, paths, "Debug")

        assert "set(FORCE_RELEASE_RUNTIME ON)" in output.read_text()


class TestToolchainReleaseRuntime:
    """Test the C runtime selected by the generated Windows toolchain."""

    def test_non_windows_never_forces(self, target, linux_context):
        assert toolchain_release_runtime(target, linux_context, "Release") is False

    def test_windows_uses_release_runtime_by_default(self, target):
        context = BuildContext(platform=Platform.WIN64, configuration=Configuration.DEBUG)

        assert toolchain_release_runtime(target, context, "Debug") is True

    def test_windows_debug_host_with_debug_crt(self, target):
        context = BuildContext(
            platform=Platform.WIN64,
            configuration=Configuration.DEBUG,
            debug_builds_use_debug_crt=True,
        )

        assert toolchain_release_runtime(target, context, "Debug") is False

    def test_pinned_build_type_decides(self, module_dir):
        context = BuildContext(
            platform=Platform.WIN64,
            configuration=Configuration.DEBUG,
            debug_builds_use_debug_crt=True,
        )
        release = BuildTarget.from_args(
            "zlib", "../ThirdParty/zlib", module_dir, "-DCMAKE_BUILD_TYPE=Release"
        )
        debug = BuildTarget.from_args(
            "zlib", "../ThirdParty/zlib", module_dir, "-DCMAKE_BUILD_TYPE=Debug"
        )

        assert toolchain_release_runtime(release, context, "Release") is True
        assert toolchain_release_runtime(debug, context, "Debug") is False


def test_packaged_templates_exist():
    templates = packaged_templates_dir()

    assert (templates / "CMakeLists.in").is_file()
    assert (templates / "toolchains" / "windows_toolchain.in").is_file()
    assert (templates / "toolchains" / "unix_toolchain.in").is_file()


class TestProjectDescriptor:
    def test_placeholders_are_substituted(self, generator, target, linux_context, paths):
        output = generator.generate_project_descriptor(
            target, linux_context, paths, "Release"
        )

        contents = output.read_text()
        assert output == paths.project_descriptor
        assert "@BUILD_TARGET_" not in contents
        assert "@FORCE_RELEASE_RUNTIME@" not in contents
        assert "project(zlib_bridge)" in contents
        assert f'set(BUILD_TARGET_DIR "{paths.target_dir.as_posix()}")' in contents
        assert (
            f'set(BUILD_TARGET_THIRDPARTY_DIR "{paths.generated_root.as_posix()}")'
            in contents
        )
        assert "set(FORCE_RELEASE_RUNTIME OFF)" in contents

    def test_custom_templates_dir(self, tmp_path, target, windows_context, paths):
        templates = tmp_path / "templates"
        templates.mkdir()
        (templates / "CMakeLists.in").write_text(
            "@BUILD_TARGET_NAME@|@BUILD_TARGET_BUILD_DIR@|@FORCE_RELEASE_RUNTIME@"
        )
        generator = create_project_generator(
            templates_dir=templates, build_dir_name="out"
        )

        output = generator.generate_project_descriptor(
            target, windows_context, paths, "Release"
        )

        assert output.read_text() == "zlib|out|OFF"

    def test_missing_template(self, tmp_path, target, linux_context, paths):
        generator = create_project_generator(templates_dir=tmp_path / "missing")

        with pytest.raises(TemplateError):
            generator.generate_project_descriptor(target, linux_context, paths, "Release")


class TestToolchainDescriptor:
    def test_unix_toolchain(self, generator, target, linux_context, paths):
        output = generator.generate_toolchain_descriptor(
            target, linux_context, UNIX_DESCRIPTOR, paths, "Release"
        )

        contents = output.read_text()
        assert output == paths.toolchain_file
        assert "set(USE_COMPILER 1)" in contents
        assert 'set(CMAKE_C_COMPILER "/sdk/bin/clang")' in contents
        assert 'set(CMAKE_CXX_COMPILER "/sdk/bin/clang++")' in contents
        assert 'set(CMAKE_LINKER "/sdk/bin/lld")' in contents

    def test_unix_toolchain_with_system_compiler(self, generator, target, paths):
        context = BuildContext(platform=Platform.LINUX, use_system_compiler=True)

        output = generator.generate_toolchain_descriptor(
            target, context, UNIX_DESCRIPTOR, paths, "Release"
        )

        assert "set(USE_COMPILER 0)" in output.read_text()

    def test_windows_toolchain(self, generator, target, windows_context, paths):
        output = generator.generate_toolchain_descriptor(
            target, windows_context, GeneratorDescriptor("Visual Studio 17 2022"), paths, "Release"
        )

        assert "set(FORCE_RELEASE_RUNTIME ON)" in output.read_text()

    def test_included_toolchain_is_appended(
        self, generator, module_dir, tmp_path, linux_context
    ):
        included = tmp_path / "x" / "tc.cmake"
        included.parent.mkdir()
        included.write_text("set(MY_SYSROOT /opt/sysroot)\n")
        target = BuildTarget.from_args(
            "zlib",
            "../ThirdParty/zlib",
            module_dir,
            f"-DCMAKE_BUILD_TYPE=Release -DCMAKE_TOOLCHAIN_FILE={included.as_posix()}",
        )
        paths = BuildPaths.resolve(target, "Release")

        output = generator.generate_toolchain_descriptor(
            target, linux_context, UNIX_DESCRIPTOR, paths, "Release"
        )

        contents = output.read_text()
        assert contents.endswith("set(MY_SYSROOT /opt/sysroot)\n")
        assert contents.index("CMAKE_POSITION_INDEPENDENT_CODE") < contents.index(
            "MY_SYSROOT"
        )

    def test_missing_included_toolchain(self, generator, module_dir, linux_context):
        target = BuildTarget.from_args(
            "zlib",
            "../ThirdParty/zlib",
            module_dir,
            "-DCMAKE_TOOLCHAIN_FILE=/does/not/exist.cmake",
        )
        paths = BuildPaths.resolve(target, "Release")

        with pytest.raises(TemplateError, match="include_toolchain"):
            generator.generate_toolchain_descriptor(
                target, linux_context, UNIX_DESCRIPTOR, paths, "Release"
            )

    def test_other_platforms_use_the_included_toolchain(self, generator, module_dir):
        target = BuildTarget.from_args(
            "zlib", "../ThirdParty/zlib", module_dir, "-DCMAKE_TOOLCHAIN_FILE=/x/tc.cmake"
        )
        paths = BuildPaths.resolve(target, "Release")

        result = generator.generate_toolchain_descriptor(
            target,
            BuildContext(platform=Platform.ANDROID),
            GeneratorDescriptor(""),
            paths,
            "Release",
        )

        assert result == Path("/x/tc.cmake")
        assert not paths.toolchain_file.exists()
