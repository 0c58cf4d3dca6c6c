"""cmakebridge - build external CMake projects from a host module build."""

from importlib.metadata import PackageNotFoundError, version

from .targets.models import BuildContext, BuildTarget, PipelineResult
from .targets.module_rules import ModuleRules
from .targets.service import CMakeTargetService, add_target


try:
    __version__ = version(__package__ or "cmakebridge")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "BuildContext",
    "BuildTarget",
    "CMakeTargetService",
    "ModuleRules",
    "PipelineResult",
    "__version__",
    "add_target",
]
