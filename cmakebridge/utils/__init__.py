"""Utility helpers for cmakebridge."""

from .stream_process import (
    ChainedOutputMiddleware,
    DefaultOutputMiddleware,
    OutputMiddleware,
    ProcessResult,
    create_chained_middleware,
    run_command,
)


__all__ = [
    "ChainedOutputMiddleware",
    "DefaultOutputMiddleware",
    "OutputMiddleware",
    "ProcessResult",
    "create_chained_middleware",
    "run_command",
]
