"""Language adapters — dependency installation per ecosystem."""

from ignite.adapters.languages.installer import InstallerAdapter, detect_package_manager

__all__ = ["InstallerAdapter", "detect_package_manager"]
