from .registry import PluginRegistry

__all__ = ["PluginRegistry"]
