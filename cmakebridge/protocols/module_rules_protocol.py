"""Protocol for the host module description sink."""

from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    from cmakebridge.targets.models import CppStandard


@runtime_checkable
class ModuleRulesProtocol(Protocol):
    """Compile/link description a host module exposes to cmakebridge."""

    public_include_paths: list[str]
    public_additional_libraries: list[str]
    public_runtime_library_paths: list[str]
    public_system_libraries: list[str]
    external_dependencies: list[str]
    cpp_standard: "CppStandard | None"
