"""Core test fixtures for the cmakebridge project."""

import os
from collections.abc import Callable, Generator
from pathlib import Path
from unittest.mock import Mock

import pytest
from typer.testing import CliRunner

from cmakebridge.adapters.file_adapter import create_file_adapter
from cmakebridge.config.models import BridgeSettings
from cmakebridge.protocols import (
    CMakeAdapterProtocol,
    FileAdapterProtocol,
    TemplateAdapterProtocol,
)
from cmakebridge.targets.manifest_store import create_manifest_store
from cmakebridge.targets.models import (
    Architecture,
    BuildContext,
    BuildTarget,
    CompilerFamily,
    Configuration,
    Platform,
)
from cmakebridge.targets.orchestrator import BuildOrchestrator
from cmakebridge.targets.project_generator import create_project_generator
from cmakebridge.targets.toolchain import create_toolchain_synthesizer


# ---- Base Fixtures ----


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def mock_file_adapter() -> Mock:
    """Create a mock file adapter for testing."""
    return Mock(spec=FileAdapterProtocol)


@pytest.fixture
def mock_template_adapter() -> Mock:
    """Create a mock template adapter for testing."""
    return Mock(spec=TemplateAdapterProtocol)


@pytest.fixture
def mock_cmake_adapter() -> Mock:
    """Create a mock CMake adapter whose commands all succeed."""
    adapter = Mock(spec=CMakeAdapterProtocol)
    adapter.executable = "cmake"
    adapter.run.return_value = 0
    return adapter


# ---- Test Isolation Fixtures ----


@pytest.fixture(autouse=True)
def isolated_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """Keep user config files and CMAKEBRIDGE_* variables out of tests."""
    for key in list(os.environ):
        if key.startswith("CMAKEBRIDGE_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    yield


@pytest.fixture
def settings() -> BridgeSettings:
    """Default settings without build log capture."""
    return BridgeSettings(capture_build_log=False)


# ---- Build Fixtures ----


@pytest.fixture
def module_dir(tmp_path: Path) -> Path:
    """Host module directory with an external project next to it.

    Layout::

        <tmp>/Source/MyModule/
        <tmp>/Source/ThirdParty/zlib/CMakeLists.txt
    """
    module = tmp_path / "Source" / "MyModule"
    module.mkdir(parents=True)
    project = tmp_path / "Source" / "ThirdParty" / "zlib"
    project.mkdir(parents=True)
    (project / "CMakeLists.txt").write_text(
        "cmake_minimum_required(VERSION 3.15)\nproject(zlib C)\n"
    )
    return module.resolve()


@pytest.fixture
def target(module_dir: Path) -> BuildTarget:
    return BuildTarget.from_args("zlib", "../ThirdParty/zlib", module_dir)


@pytest.fixture
def linux_context() -> BuildContext:
    return BuildContext(
        platform=Platform.LINUX,
        configuration=Configuration.DEVELOPMENT,
        architecture=Architecture.X64,
        host_platform=Platform.LINUX,
    )


@pytest.fixture
def windows_context() -> BuildContext:
    return BuildContext(
        platform=Platform.WIN64,
        configuration=Configuration.DEVELOPMENT,
        architecture=Architecture.X64,
        compiler=CompilerFamily.VISUAL_STUDIO_2022,
        host_platform=Platform.WIN64,
    )


@pytest.fixture
def orchestrator_factory(
    mock_cmake_adapter: Mock, settings: BridgeSettings
) -> Callable[..., BuildOrchestrator]:
    """Build an orchestrator on the real file system with a mocked cmake."""

    def _factory(
        settings_override: BridgeSettings | None = None,
        sdk_dir: Path | None = None,
    ) -> BuildOrchestrator:
        active = settings_override or settings
        file_adapter = create_file_adapter()
        return BuildOrchestrator(
            file_adapter=file_adapter,
            cmake_adapter=mock_cmake_adapter,
            manifest_store=create_manifest_store(file_adapter),
            project_generator=create_project_generator(
                file_adapter=file_adapter, build_dir_name=active.build_dir_name
            ),
            toolchain_synthesizer=create_toolchain_synthesizer(sdk_dir=sdk_dir),
            settings=active,
        )

    return _factory


@pytest.fixture
def emit_manifest(mock_cmake_adapter: Mock) -> Callable[[str], None]:
    """Make the mocked build step write a manifest like the real project does."""

    def _install(manifest_text: str) -> None:
        def _run(command: str, cwd: Path | None = None, middleware=None) -> int:
            if "--build" in command:
                build_dir = Path(command.split('"')[1])
                build_type = command.rsplit(" ", 1)[-1]
                build_dir.mkdir(parents=True, exist_ok=True)
                (build_dir / f"buildinfo_{build_type}.output").write_text(
                    manifest_text
                )
            return 0

        mock_cmake_adapter.run.side_effect = _run

    return _install
