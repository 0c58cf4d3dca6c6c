"""Host module description receiving the external build's outputs."""

from pathlib import Path

from pydantic import ConfigDict, Field

from cmakebridge.models.base import BridgeBaseModel
from cmakebridge.targets.models import CppStandard


class ModuleRules(BridgeBaseModel):
    """Compile and link description of one host module.

    The list fields are append-only from the point of view of this package;
    ``cpp_standard`` is the only single-valued setting it writes.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=False)

    public_include_paths: list[str] = Field(default_factory=list)
    public_additional_libraries: list[str] = Field(default_factory=list)
    public_runtime_library_paths: list[str] = Field(default_factory=list)
    public_system_libraries: list[str] = Field(default_factory=list)
    external_dependencies: list[str] = Field(default_factory=list)
    cpp_standard: CppStandard | None = None

    def missing_dependencies(self) -> list[str]:
        """Dependencies that do not exist on disk.

        A non-empty result means the host build will consider the module
        out of date on its next run.
        """
        return [dep for dep in self.external_dependencies if not Path(dep).exists()]
