"""Protocol for running the external build tool."""

from pathlib import Path
from typing import Protocol, runtime_checkable

from cmakebridge.utils.stream_process import OutputMiddleware


@runtime_checkable
class CMakeAdapterProtocol(Protocol):
    """Protocol for synchronous execution of configure and build commands."""

    @property
    def executable(self) -> str:
        """Build tool executable used in command lines."""
        ...

    def run(
        self,
        command: str,
        cwd: Path | None = None,
        middleware: OutputMiddleware[str] | None = None,
    ) -> int:
        """Run ``command`` through the platform shell and wait for it.

        Args:
            command: Full command line
            cwd: Working directory for the child process
            middleware: Extra middleware receiving every output line

        Returns:
            The process exit code
        """
        ...
