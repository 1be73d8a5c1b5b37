"""In-memory repository pattern.

Provides a generic base repository holding pydantic models in insertion
order, with a monotonic integer id generator and a single lock around the
collection. Verticals subclass this to add domain-specific writes.

Reads return copies, so callers can never mutate a stored record or
observe one mid-update.
"""

import threading
from typing import Callable, Generic, Iterable, Optional, TypeVar

from pydantic import BaseModel

# ---------------------------------------------------------------------------
# Type variable for model classes
# ---------------------------------------------------------------------------

ModelT = TypeVar("ModelT", bound=BaseModel)


# ---------------------------------------------------------------------------
# Base repository
# ---------------------------------------------------------------------------

class InMemoryRepository(Generic[ModelT]):
    """Generic ordered repository keyed by an integer ``id`` attribute.

    Subclass and build domain writes on the protected helpers::

        class TaskStore(InMemoryRepository[Task]):
            def insert(self, payload):
                return self._add(lambda new_id: Task(id=new_id, **payload))

    Every public and protected operation holds ``self._lock`` for its whole
    duration. The lock is re-entrant so subclasses can wrap several helper
    calls in one ``with self._lock`` block.
    """

    def __init__(self, items: Iterable[ModelT] = ()):
        self._lock = threading.RLock()
        self._items: list[ModelT] = []
        self._next_id = 1
        for item in items:
            self._items.append(item.model_copy())
            self._next_id = max(self._next_id, item.id + 1)

    # -- Id generation --

    @property
    def next_id(self) -> int:
        with self._lock:
            return self._next_id

    def _allocate_id(self) -> int:
        with self._lock:
            new_id = self._next_id
            self._next_id += 1
            return new_id

    # -- Lookup --

    def _index_of(self, item_id: int) -> Optional[int]:
        with self._lock:
            for index, item in enumerate(self._items):
                if item.id == item_id:
                    return index
            return None

    def list(self) -> list[ModelT]:
        """All items in insertion order."""
        with self._lock:
            return [item.model_copy() for item in self._items]

    def find(self, item_id: int) -> Optional[ModelT]:
        """Get a single item by id, or None."""
        with self._lock:
            index = self._index_of(item_id)
            if index is None:
                return None
            return self._items[index].model_copy()

    def count(self) -> int:
        with self._lock:
            return len(self._items)

    # -- Writes --

    def _add(self, build: Callable[[int], ModelT]) -> ModelT:
        """Assign the next id, build the item and append it as one step."""
        with self._lock:
            item = build(self._allocate_id())
            self._items.append(item)
            return item.model_copy()

    def _swap(self, index: int, item: ModelT) -> ModelT:
        with self._lock:
            self._items[index] = item
            return item.model_copy()

    def _remove(self, item_id: int) -> Optional[ModelT]:
        """Remove an item. Returns it, or None if not found."""
        with self._lock:
            index = self._index_of(item_id)
            if index is None:
                return None
            return self._items.pop(index)
