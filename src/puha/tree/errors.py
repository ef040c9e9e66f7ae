"""Error types raised by the tree model and the storage boundary."""

from __future__ import annotations

from collections.abc import Iterable


class PuhaError(Exception):
    """Base class for every failure surfaced by puha."""


class InvalidNameError(PuhaError, ValueError):
    """A name is empty, whitespace-only or contains the path delimiter."""

    def __init__(self, name: str, reason: str = "name must not be empty") -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"invalid name {name!r}: {reason}")


class NotFoundError(PuhaError, LookupError):
    """No node exists for the given identity, name or path."""

    def __init__(self, target: object, message: str | None = None) -> None:
        self.target = target
        super().__init__(message or f"not found: {target}")


class DuplicateNameError(PuhaError):
    """A sibling of the same kind already carries the name."""

    def __init__(self, name: str, kind: str, parent: str) -> None:
        self.name = name
        self.kind = kind
        self.parent = parent
        super().__init__(f"{kind} {name!r} already exists in {parent}")


class AmbiguousNameError(PuhaError):
    """A name matches several nodes; a fuller path is needed."""

    def __init__(self, name: str, candidates: Iterable[str], kinds: Iterable[str] = ()) -> None:
        self.name = name
        self.candidates = tuple(candidates)
        self.kinds = tuple(kinds)
        listing = ", ".join(self.labels)
        super().__init__(f"{name!r} is ambiguous, candidates: {listing}")

    @property
    def labels(self) -> tuple[str, ...]:
        """Candidate paths tagged with their kind, e.g. "Home/Box (space)"."""
        if len(self.kinds) != len(self.candidates):
            return self.candidates
        return tuple(f"{path} ({kind})" for path, kind in zip(self.candidates, self.kinds))


class CycleError(PuhaError):
    """A space would become its own ancestor."""

    def __init__(self, space: str, new_parent: str) -> None:
        self.space = space
        self.new_parent = new_parent
        super().__init__(f"cannot move {space} into {new_parent}: it is inside {space}")


class NotASpaceError(PuhaError):
    """A space was required but the target is an item."""

    def __init__(self, target: object) -> None:
        self.target = target
        super().__init__(f"not a space: {target}")


class NotAnItemError(PuhaError):
    """An item was required but the target is a space."""

    def __init__(self, target: object) -> None:
        self.target = target
        super().__init__(f"not an item: {target}")


class RootError(PuhaError):
    """The operation is not allowed on the root space."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"cannot {operation} the root space")


class CorruptStateError(PuhaError):
    """Persisted state does not describe a well-formed tree."""

    def __init__(self, location: str, reason: str) -> None:
        self.location = location
        self.reason = reason
        super().__init__(f"corrupt state at {location}: {reason}")


class PersistenceError(PuhaError):
    """Reading or writing persisted state failed."""
