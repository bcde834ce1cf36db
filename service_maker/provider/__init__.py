"""Service Maker provider patcher -- registers bindings in a service provider.

Usage::

    from service_maker.provider import ProviderFile, ProviderPatcher

    provider = ProviderFile("app/Providers/AppServiceProvider.php", ProviderPatcher())
    result = provider.apply(spec)
    print(result.binding, result.imports_added)
"""

from service_maker.provider.bindings import DEFAULT_INDENT, build_binding_statement
from service_maker.provider.patcher import (
    MalformedDocumentError,
    PatchError,
    ProviderPatcher,
    RegionNotFoundError,
    patch_provider,
)
from service_maker.provider.provider_file import ProviderFile, ProviderNotFoundError

__all__ = [
    "DEFAULT_INDENT",
    "MalformedDocumentError",
    "PatchError",
    "ProviderFile",
    "ProviderNotFoundError",
    "ProviderPatcher",
    "RegionNotFoundError",
    "build_binding_statement",
    "patch_provider",
]
