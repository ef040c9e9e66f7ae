"""Storage protocol shared by every persistence backend."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from puha.tree.store import NodeStore


@runtime_checkable
class StateStorage(Protocol):
    """Protocol that all persistence backends must implement."""

    def load(self) -> NodeStore:
        """Return a freshly rebuilt store, empty if nothing was saved yet.

        Raises `CorruptStateError` if the saved state is not a valid tree.
        """
        ...

    def save(self, store: NodeStore) -> None:
        """Persist `store`. Raises `PersistenceError` on failure."""
        ...
