"""Build log capture middleware for configure and build processes."""

import logging
from datetime import datetime
from pathlib import Path
from threading import Lock
from typing import Any, TextIO

from cmakebridge.utils.stream_process import OutputMiddleware


logger = logging.getLogger(__name__)


class BuildLogCaptureMiddleware(OutputMiddleware[str]):
    """Middleware that tees external build output into a log file.

    One log file is kept per target and build type. Every command run through
    the middleware starts a new section headed by the command line, so the
    configure and build output of one pipeline run end up in the same file.
    Lines are returned unchanged for chaining with other middleware.
    """

    def __init__(self, log_file_path: Path, include_timestamps: bool = True) -> None:
        self.log_file_path = log_file_path
        self.include_timestamps = include_timestamps
        self._file_handle: TextIO | None = None
        self._lock = Lock()
        self._initialize_log_file()

    def _initialize_log_file(self) -> None:
        try:
            self.log_file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_handle = self.log_file_path.open("w", encoding="utf-8")
            self._file_handle.write(
                f"# cmakebridge build log - {datetime.now().isoformat()}\n"
            )
            self._file_handle.flush()
            logger.debug("Initialized build log file: %s", self.log_file_path)
        except OSError as e:
            exc_info = logger.isEnabledFor(logging.DEBUG)
            logger.error(
                "Failed to initialize build log file %s: %s",
                self.log_file_path,
                e,
                exc_info=exc_info,
            )
            self._file_handle = None

    def begin_section(self, title: str) -> None:
        """Write a section header, typically the command about to run."""
        self._write(f"\n# ---- {title}\n")

    def process(self, line: str, stream_type: str) -> str:
        if self.include_timestamps:
            timestamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]
            self._write(f"[{timestamp}] {line}\n")
        else:
            self._write(f"{line}\n")
        return line

    def _write(self, text: str) -> None:
        if self._file_handle is None:
            return
        try:
            with self._lock:
                self._file_handle.write(text)
                self._file_handle.flush()
        except OSError as e:
            # Losing the log file must not fail the build
            logger.warning("Failed to write to build log file: %s", e)

    def close(self) -> None:
        with self._lock:
            if self._file_handle:
                try:
                    self._file_handle.write(
                        f"\n# build log completed - {datetime.now().isoformat()}\n"
                    )
                    self._file_handle.close()
                except OSError as e:
                    logger.warning("Error closing build log file: %s", e)
                self._file_handle = None
                logger.debug("Closed build log file: %s", self.log_file_path)

    def __enter__(self) -> "BuildLogCaptureMiddleware":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        self.close()


def create_build_log_middleware(
    log_dir: Path,
    target_name: str,
    build_type: str,
    include_timestamps: bool = True,
) -> BuildLogCaptureMiddleware:
    """Factory function to create a build log capture middleware.

    Args:
        log_dir: Directory where the build log should be saved
        target_name: Name of the external target being built
        build_type: Build type of the pipeline run (Debug, Release, ...)
        include_timestamps: Whether to include timestamps in log entries

    Returns:
        BuildLogCaptureMiddleware writing to
        ``<log_dir>/cmakebridge_<build_type>.log``
    """
    log_file_path = log_dir / f"cmakebridge_{build_type}.log"
    logger.debug("Build log for %s: %s", target_name, log_file_path)
    return BuildLogCaptureMiddleware(
        log_file_path=log_file_path, include_timestamps=include_timestamps
    )
