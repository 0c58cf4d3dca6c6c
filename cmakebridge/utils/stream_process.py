"""Process execution and streaming output handling.

This module provides tools for running subprocesses and handling their output
streams. Output is processed line by line through middleware components, which
is how configure and build output reaches the log while the external build is
still running.

Example:
    ```python
    from cmakebridge.utils.stream_process import run_command, DefaultOutputMiddleware

    return_code, stdout, stderr = run_command(
        ["bash", "-c", "cmake --version"], middleware=DefaultOutputMiddleware()
    )
    ```
"""

import shlex
import subprocess
from collections.abc import Sequence
from pathlib import Path
from threading import Thread
from typing import Any, Generic, TypeAlias, TypeVar, cast


T = TypeVar("T")  # Type of processed output

# (return_code, stdout, stderr)
ProcessResult: TypeAlias = tuple[int, list[T], list[T]]


class OutputMiddleware(Generic[T]):
    """Base class for processing command output streams.

    Implementations can format, filter, or transform the output as needed.
    Type parameter T represents the return type of the process method.
    """

    def process(self, line: str, stream_type: str) -> T:
        """Process a line of output from a subprocess stream.

        Args:
            line: A line of text from the process output
            stream_type: Either "stdout" or "stderr"

        Returns:
            Processed output of type T
        """
        raise NotImplementedError()


class DefaultOutputMiddleware(OutputMiddleware[str]):
    """Simple middleware that prints output with optional prefixes."""

    def __init__(self, stdout_prefix: str = "", stderr_prefix: str = "ERROR: ") -> None:
        self.stdout_prefix = stdout_prefix
        self.stderr_prefix = stderr_prefix

    def process(self, line: str, stream_type: str) -> str:
        prefix = self.stdout_prefix if stream_type == "stdout" else self.stderr_prefix
        print(f"{prefix}{line}")
        return line


class ChainedOutputMiddleware(OutputMiddleware[str]):
    """Pass each line through several middlewares in order.

    The output of one middleware becomes the input of the next, so every
    middleware in the chain must return a string.
    """

    def __init__(self, middlewares: Sequence[OutputMiddleware[str]]) -> None:
        self.middlewares = list(middlewares)

    def process(self, line: str, stream_type: str) -> str:
        for middleware in self.middlewares:
            line = middleware.process(line, stream_type)
        return line


def create_chained_middleware(
    middlewares: Sequence[OutputMiddleware[str]],
) -> ChainedOutputMiddleware:
    """Create a middleware that runs ``middlewares`` in sequence."""
    return ChainedOutputMiddleware(middlewares)


def run_command(
    cmd: str | list[str],
    middleware: OutputMiddleware[T] | None = None,
    cwd: Path | None = None,
    merge_stderr: bool = False,
) -> ProcessResult[T]:
    """Run a command and process its output through middleware.

    Args:
        cmd: Command to run, either as a string or list of arguments
        middleware: Optional middleware for processing output
            (uses DefaultOutputMiddleware if None)
        cwd: Working directory for the child process
        merge_stderr: Redirect stderr into stdout so both streams arrive
            interleaved in the order the child wrote them. All lines are then
            reported as "stdout" and the stderr list is empty.

    Returns:
        Tuple containing the return code, processed stdout lines and
        processed stderr lines

    Raises:
        FileNotFoundError: If the executable does not exist
    """
    if middleware is None:
        middleware = cast(OutputMiddleware[T], DefaultOutputMiddleware())

    if isinstance(cmd, str):
        cmd = shlex.split(cmd)

    process = subprocess.Popen(
        cmd,
        cwd=str(cwd) if cwd else None,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT if merge_stderr else subprocess.PIPE,
        text=True,
        bufsize=1,
        errors="replace",
    )

    def stream_output(stream: Any, stream_type: str) -> list[T]:
        captured: list[T] = []
        for line in iter(stream.readline, ""):
            if line:
                processed = middleware.process(line.rstrip(), stream_type)
                if processed is not None:
                    captured.append(processed)
        stream.close()
        return captured

    stdout_lines: list[T] = []
    stderr_lines: list[T] = []

    threads = [
        Thread(
            target=lambda: stdout_lines.extend(stream_output(process.stdout, "stdout")),
            daemon=True,
        )
    ]
    if not merge_stderr:
        threads.append(
            Thread(
                target=lambda: stderr_lines.extend(
                    stream_output(process.stderr, "stderr")
                ),
                daemon=True,
            )
        )

    for thread in threads:
        thread.start()

    return_code = process.wait()

    for thread in threads:
        thread.join()

    return return_code, stdout_lines, stderr_lines
