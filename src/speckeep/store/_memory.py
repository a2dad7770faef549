"""In-memory spec store.

Holds specs in a dictionary and pushes a ``SpecChange`` to subscribers on
every write. Used for embedding and as the store in tests; the ``available``
flag simulates an unreachable backend.
"""

import threading
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import Self

from speckeep.exceptions import SpecNotFoundError, StoreUnavailableError
from speckeep.spec._models import ChangeType, Spec, SpecChange

type ChangeListener = Callable[[SpecChange], None]


@dataclass(slots=True)
class InMemorySpecStore:
    """Spec store backed by a dictionary.

    Implements ``SpecStore``.

    Example:
        >>> store = InMemorySpecStore()
        >>> store.put(spec)
        >>> store.get(spec.id) is spec
        True
    """

    available: bool = True
    _specs: dict[str, Spec] = field(default_factory=dict)
    _listeners: list[ChangeListener] = field(default_factory=list)
    _lock: threading.Lock = field(
        default_factory=threading.Lock, repr=False, compare=False
    )

    @classmethod
    def from_specs(cls, specs: Iterable[Spec]) -> Self:
        """Create a store pre-populated with specs, without notifying anyone."""
        store = cls()
        for spec in specs:
            store._specs[spec.id] = spec  # noqa: SLF001
        return store

    def _check_available(self) -> None:
        if not self.available:
            msg = "In-memory spec store is unavailable"
            raise StoreUnavailableError(msg, store="memory")

    # =========================================================================
    # SpecStore Methods
    # =========================================================================

    def list_all(self) -> Sequence[Spec]:
        """Return every spec in the store.

        Raises:
            StoreUnavailableError: If the store is marked unavailable.
        """
        self._check_available()
        with self._lock:
            return tuple(self._specs.values())

    def get(self, spec_id: str) -> Spec:
        """Return a spec by ID.

        Raises:
            SpecNotFoundError: If no spec has this ID.
            StoreUnavailableError: If the store is marked unavailable.
        """
        self._check_available()
        with self._lock:
            spec = self._specs.get(spec_id)
        if spec is None:
            msg = f"Spec not found: {spec_id}"
            raise SpecNotFoundError(msg, spec_id=spec_id)
        return spec

    # =========================================================================
    # Authoring Methods
    # =========================================================================

    def put(self, spec: Spec) -> SpecChange | None:
        """Create or replace a spec.

        Args:
            spec: The spec to store.

        Returns:
            The change delivered to subscribers, or None if an identical spec
            was already stored.
        """
        self._check_available()
        with self._lock:
            previous = self._specs.get(spec.id)
            if previous == spec:
                return None
            self._specs[spec.id] = spec
        change_type = ChangeType.CREATED if previous is None else ChangeType.MODIFIED
        change = SpecChange(change_type=change_type, spec_id=spec.id)
        self._notify(change)
        return change

    def delete(self, spec_id: str) -> SpecChange:
        """Delete a spec.

        Raises:
            SpecNotFoundError: If no spec has this ID.
        """
        self._check_available()
        with self._lock:
            if self._specs.pop(spec_id, None) is None:
                msg = f"Spec not found: {spec_id}"
                raise SpecNotFoundError(msg, spec_id=spec_id)
        change = SpecChange(change_type=ChangeType.DELETED, spec_id=spec_id)
        self._notify(change)
        return change

    # =========================================================================
    # Change Notification
    # =========================================================================

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """Register a listener called after every write.

        Args:
            listener: Callable receiving each ``SpecChange``.

        Returns:
            A callable that removes the listener.
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, change: SpecChange) -> None:
        with self._lock:
            listeners = tuple(self._listeners)
        for listener in listeners:
            listener(change)
