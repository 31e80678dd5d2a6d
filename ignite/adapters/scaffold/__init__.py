"""Scaffold adapters — new-project templates."""

from ignite.adapters.scaffold.template import TemplateAdapter

__all__ = ["TemplateAdapter"]
