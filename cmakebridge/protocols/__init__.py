"""Protocol definitions for cmakebridge adapters and collaborators.

These protocols use Python's typing.Protocol system with the
@runtime_checkable decorator to enable both static type checking and
runtime isinstance() checks.
"""

from .cmake_adapter_protocol import CMakeAdapterProtocol
from .file_adapter_protocol import FileAdapterProtocol
from .module_rules_protocol import ModuleRulesProtocol
from .template_adapter_protocol import TemplateAdapterProtocol
from .toolchain_protocols import HostFlagProviderProtocol, SdkLocatorProtocol


__all__ = [
    "CMakeAdapterProtocol",
    "FileAdapterProtocol",
    "HostFlagProviderProtocol",
    "ModuleRulesProtocol",
    "SdkLocatorProtocol",
    "TemplateAdapterProtocol",
]
