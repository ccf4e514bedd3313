"""
Builder turning a configuration into a ready :class:`DataAccess` facade.
"""

from __future__ import annotations

from .adapters import get_adapter_factory
from .config import Config
from .facade import DataAccess


class Builder(Config):
    """
    Configuration that can build the adapter it names.
    """

    def build(self) -> DataAccess:
        factory = get_adapter_factory(self.get_adapter())
        adapter = factory(self)
        return DataAccess(adapter)
