"""Projection of a build manifest into a host module description."""

from collections.abc import Mapping
from pathlib import Path

from cmakebridge.core.structlog_logger import get_struct_logger
from cmakebridge.protocols.module_rules_protocol import ModuleRulesProtocol
from cmakebridge.targets.manifest_store import split_list
from cmakebridge.targets.models import BuildContext, CppStandard


logger = get_struct_logger(__name__)

# Directive asking the host to link the C++ standard library
SYSTEM_CPP_LIBRARY = "stdc++"


def project(
    manifest: Mapping[str, str],
    rules: ModuleRulesProtocol,
    context: BuildContext,
) -> None:
    """Append the manifest's outputs to ``rules``.

    Absent keys contribute nothing. Empty list tokens are skipped and token
    order is preserved.
    """
    rules.external_dependencies.extend(split_list(manifest.get("dependencies", "")))

    if "sourceDependencies" in manifest:
        source_path = manifest.get("sourcePath", "")
        for dependency in split_list(manifest["sourceDependencies"]):
            rules.external_dependencies.append(
                str(Path(source_path) / dependency) if source_path else dependency
            )

    rules.public_include_paths.extend(split_list(manifest.get("includes", "")))

    for directory in split_list(manifest.get("binaryDirectories", "")):
        logger.debug("runtime_library_path_added", path=directory)
        rules.public_runtime_library_paths.append(directory)

    rules.public_additional_libraries.extend(split_list(manifest.get("libraries", "")))

    cpp_standard = manifest.get("cppStandard", "").strip()
    if cpp_standard:
        rules.cpp_standard = CppStandard.from_manifest(cpp_standard)
        if context.platform.is_unix and not context.use_system_compiler:
            if SYSTEM_CPP_LIBRARY not in rules.public_system_libraries:
                rules.public_system_libraries.append(SYSTEM_CPP_LIBRARY)

    logger.debug(
        "manifest_projected",
        includes=len(rules.public_include_paths),
        libraries=len(rules.public_additional_libraries),
        dependencies=len(rules.external_dependencies),
        cpp_standard=rules.cpp_standard.value if rules.cpp_standard else None,
    )
