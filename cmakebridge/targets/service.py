"""Entry point used by host modules to pull in an external CMake target."""

from pathlib import Path

from cmakebridge.config.models import BridgeSettings
from cmakebridge.core.errors import ManifestMissingError
from cmakebridge.core.structlog_logger import get_struct_logger
from cmakebridge.protocols.module_rules_protocol import ModuleRulesProtocol
from cmakebridge.targets.manifest_store import ManifestStore
from cmakebridge.targets.models import (
    BuildContext,
    BuildTarget,
    FailureReason,
    PipelineResult,
)
from cmakebridge.targets.orchestrator import (
    BuildOrchestrator,
    create_build_orchestrator,
)
from cmakebridge.targets.projector import project


logger = get_struct_logger(__name__)


class CMakeTargetService:
    """Builds external targets and splices their outputs into module rules.

    Every failure leaves a nonexistent sentinel file in the module's
    external dependencies so the host keeps retrying the target.
    """

    def __init__(
        self,
        orchestrator: BuildOrchestrator,
        manifest_store: ManifestStore | None = None,
    ):
        self.orchestrator = orchestrator
        self.manifest_store = manifest_store or orchestrator.manifest_store

    def load(
        self,
        target: BuildTarget,
        context: BuildContext,
        rules: ModuleRulesProtocol,
    ) -> PipelineResult:
        """Build ``target`` and project its manifest into ``rules``."""
        result = self.orchestrator.run(target, context)
        if result.success and not self.add_rules(target, context, rules, result):
            result.success = False
        if not result.success and result.sentinel_path is not None:
            self.add_failed(rules, result.sentinel_path)
        return result

    def add_rules(
        self,
        target: BuildTarget,
        context: BuildContext,
        rules: ModuleRulesProtocol,
        result: PipelineResult,
    ) -> bool:
        """Project the manifest of a finished build; False when it is missing."""
        paths = self.orchestrator.resolve_paths(target, result.build_type)
        manifest = self.manifest_store.read_manifest(paths.manifest_file)
        if manifest is None:
            error = ManifestMissingError(str(paths.manifest_file))
            result.add_error(str(error), FailureReason.MANIFEST_MISSING)
            return False
        project(manifest, rules, context)
        return True

    def add_failed(self, rules: ModuleRulesProtocol, sentinel: Path) -> None:
        """Report ``sentinel`` as a dependency so the module stays stale."""
        rules.external_dependencies.append(str(sentinel))
        logger.warning("target_marked_failed", sentinel=str(sentinel))


def add_target(
    context: BuildContext,
    rules: ModuleRulesProtocol,
    target_name: str,
    target_location: str,
    extra_args: str = "",
    module_dir: Path | str = ".",
    settings: BridgeSettings | None = None,
    orchestrator: BuildOrchestrator | None = None,
) -> bool:
    """Build an external CMake target and add its outputs to ``rules``.

    Args:
        context: Host build configuration
        rules: Module description receiving includes, libraries and
            dependencies
        target_name: Name of the CMake target, also its generated directory
        target_location: Source directory, relative to ``module_dir``
        extra_args: Arguments passed through to the configure step
        module_dir: Directory of the host module
        settings: Settings; loaded from the environment when omitted
        orchestrator: Preconfigured orchestrator, mainly for tests

    Returns:
        True when the target built and its manifest was projected
    """
    target = BuildTarget.from_args(
        target_name, target_location, Path(module_dir), extra_args
    )
    orchestrator = orchestrator or create_build_orchestrator(
        settings=settings, host_platform=context.host_platform
    )
    result = CMakeTargetService(orchestrator).load(target, context, rules)
    return result.success
