"""External CMake target domain: models, pipeline and projection.

Only the models are re-exported here; the pipeline modules import the
adapters, which in turn depend on these models.
"""

from .models import (
    Architecture,
    BuildContext,
    BuildPaths,
    BuildTarget,
    BuildType,
    CompilerFamily,
    Configuration,
    CppStandard,
    FailureReason,
    GeneratorDescriptor,
    OrchestratorState,
    PipelineResult,
    Platform,
)
from .module_rules import ModuleRules


__all__ = [
    "Architecture",
    "BuildContext",
    "BuildPaths",
    "BuildTarget",
    "BuildType",
    "CompilerFamily",
    "Configuration",
    "CppStandard",
    "FailureReason",
    "GeneratorDescriptor",
    "ModuleRules",
    "OrchestratorState",
    "PipelineResult",
    "Platform",
]
