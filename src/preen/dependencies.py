"""Dependency bookkeeping for one execution context.

Two collections are kept:

- the **dependency set**: every file that influenced the output, used by
  cache consumers for invalidation. Always contains the asset itself and
  only ever grows.
- the **required paths**: assets to be included once, before this one,
  in first-require order.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DependencySnapshot:
    """Point-in-time copy of a recorder's state."""

    dependency_paths: frozenset[str]
    required_paths: tuple[str, ...]


class DependencyRecorder:
    """Accumulates the dependency set and required paths of one file."""

    __slots__ = ("_dependency_paths", "_required_paths")

    def __init__(self, pathname: str) -> None:
        self._dependency_paths: set[str] = {pathname}
        # dict keeps insertion order and gives O(1) membership
        self._required_paths: dict[str, None] = {}

    @property
    def dependency_paths(self) -> frozenset[str]:
        return frozenset(self._dependency_paths)

    @property
    def required_paths(self) -> tuple[str, ...]:
        return tuple(self._required_paths)

    def add_dependency(self, path: str) -> None:
        self._dependency_paths.add(path)

    def add_required(self, path: str) -> bool:
        """Record *path* as required. Returns ``True`` if it was new."""
        self._dependency_paths.add(path)
        if path in self._required_paths:
            return False
        self._required_paths[path] = None
        return True

    def snapshot(self) -> DependencySnapshot:
        return DependencySnapshot(self.dependency_paths, self.required_paths)
