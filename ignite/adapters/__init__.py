"""Adapters — bindings for the external tools the wizard drives.

Public re-exports for convenient access.
"""

from ignite.adapters.base import Adapter, ExecutionContext
from ignite.adapters.languages.installer import InstallerAdapter
from ignite.adapters.mock import MockAdapter
from ignite.adapters.registry import AdapterRegistry
from ignite.adapters.scaffold.template import TemplateAdapter
from ignite.adapters.vcs.git import GitAdapter


def default_registry(mock_mode: bool = False) -> AdapterRegistry:
    """Registry with the real cloner, template generator and installer."""
    registry = AdapterRegistry(mock_mode=mock_mode)
    registry.register(GitAdapter())
    registry.register(TemplateAdapter())
    registry.register(InstallerAdapter())
    return registry


__all__ = [
    "Adapter",
    "AdapterRegistry",
    "ExecutionContext",
    "GitAdapter",
    "InstallerAdapter",
    "MockAdapter",
    "TemplateAdapter",
    "default_registry",
]
