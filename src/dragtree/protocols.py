"""Protocols for dependency injection into the drag session."""

from typing import Protocol, runtime_checkable

from dragtree.models.node import Forest


@runtime_checkable
class ForestStateProtocol(Protocol):
    """Protocol for the holder of the authoritative forest."""

    @property
    def forest(self) -> Forest:
        """The current forest value."""
        ...

    def replace(self, forest: Forest) -> None:
        """Swap in a new forest value wholesale."""
        ...


class ForestState:
    """In-memory forest holder."""

    def __init__(self, forest: Forest = ()) -> None:
        self._forest = tuple(forest)

    @property
    def forest(self) -> Forest:
        return self._forest

    def replace(self, forest: Forest) -> None:
        self._forest = tuple(forest)
