"""Protocols for optional toolchain collaborators."""

from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    from cmakebridge.targets.models import BuildContext, Platform


@runtime_checkable
class SdkLocatorProtocol(Protocol):
    """Locates the host's internal toolchain root for a platform."""

    def get_internal_sdk_path(self, platform: "Platform") -> Path | None:
        """Return the SDK root, or None when the host has no bundled toolchain."""
        ...


@runtime_checkable
class HostFlagProviderProtocol(Protocol):
    """Best-effort access to the host's own compile flags."""

    def try_extract_host_compile_flags(self, context: "BuildContext") -> list[str] | None:
        """Return extra C++ flags, or None when they are unavailable."""
        ...
