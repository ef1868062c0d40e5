from __future__ import annotations

from typing import Dict, Generic, Iterator, List, Mapping, Optional, TypeVar


T = TypeVar("T")


class PluginRegistry(Generic[T]):
    def __init__(self, entries: Optional[Mapping[str, T]] = None) -> None:
        self._factories: Dict[str, T] = dict(entries or {})

    def register(self, name: str, factory: T, *, replace: bool = False) -> None:
        if name in self._factories and not replace:
            raise ValueError(f"Plugin '{name}' is already registered.")
        self._factories[name] = factory

    def update(self, entries: Mapping[str, T]) -> None:
        """Register every entry, replacing plugins of the same name."""
        for name, factory in entries.items():
            self.register(name, factory, replace=True)

    def get(self, name: str) -> T:
        try:
            return self._factories[name]
        except KeyError as exc:
            raise KeyError(f"Plugin '{name}' is not registered.") from exc

    def names(self) -> List[str]:
        return sorted(self._factories.keys())

    def copy(self) -> "PluginRegistry[T]":
        return PluginRegistry(self._factories)

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())
