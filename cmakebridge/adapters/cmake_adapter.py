"""CMake adapter for running configure and build commands."""

import logging
from pathlib import Path

from cmakebridge.protocols.cmake_adapter_protocol import CMakeAdapterProtocol
from cmakebridge.targets.models import Platform
from cmakebridge.utils import stream_process
from cmakebridge.utils.stream_process import (
    OutputMiddleware,
    create_chained_middleware,
)


logger = logging.getLogger(__name__)

# Exit code reported when the shell itself cannot be started
SHELL_NOT_FOUND_EXIT_CODE = 127


class LoggerOutputMiddleware(OutputMiddleware[str]):
    """Middleware that forwards each output line to a logger."""

    def __init__(self, logger: logging.Logger, prefix: str = ""):
        self.logger = logger
        self.prefix = prefix

    def process(self, line: str, stream_type: str) -> str:
        if stream_type == "stdout":
            self.logger.info("%s%s", self.prefix, line)
        else:
            self.logger.warning("%s%s", self.prefix, line)
        return line


def default_shell(host_platform: Platform) -> list[str]:
    """Shell prefix used to run command lines on ``host_platform``."""
    if host_platform.is_windows:
        return ["cmd.exe", "/c"]
    return ["bash", "-c"]


def default_executable(host_platform: Platform) -> str:
    return "cmake.exe" if host_platform.is_windows else "cmake"


class CMakeAdapter:
    """Implementation of the CMake adapter.

    Commands are complete shell command lines so that quoting in the
    pass-through arguments behaves the way it does on a terminal.
    """

    def __init__(
        self,
        host_platform: Platform | None = None,
        executable: str | None = None,
        shell: list[str] | None = None,
    ):
        self.host_platform = host_platform or Platform.current()
        self._executable = executable or default_executable(self.host_platform)
        self.shell = shell or default_shell(self.host_platform)

    @property
    def executable(self) -> str:
        return self._executable

    def run(
        self,
        command: str,
        cwd: Path | None = None,
        middleware: OutputMiddleware[str] | None = None,
    ) -> int:
        """Run ``command`` through the shell and return its exit code.

        Every line is logged as it arrives; the full output is dumped again
        at error level when the command fails.
        """
        argv = [*self.shell, command]
        logger.info("Calling: %s", " ".join(argv))

        chain: list[OutputMiddleware[str]] = [LoggerOutputMiddleware(logger)]
        if middleware is not None:
            chain.append(middleware)

        try:
            return_code, output, _ = stream_process.run_command(
                argv,
                create_chained_middleware(chain),
                cwd=cwd,
                merge_stderr=True,
            )
        except FileNotFoundError as e:
            logger.error("Shell executable not found: %s", e)
            return SHELL_NOT_FOUND_EXIT_CODE

        if return_code != 0:
            logger.error(
                "Command exited with code %d, captured output:\n%s",
                return_code,
                "\n".join(output),
            )
        return return_code


def create_cmake_adapter(
    host_platform: Platform | None = None,
    executable: str | None = None,
    shell: list[str] | None = None,
) -> CMakeAdapterProtocol:
    """Factory function to create a CMakeAdapter instance.

    Example:
        >>> adapter = create_cmake_adapter()
        >>> adapter.run("cmake --version")
        0
    """
    logger.debug("Creating CMakeAdapter")
    return CMakeAdapter(host_platform=host_platform, executable=executable, shell=shell)
