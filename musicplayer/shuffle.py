"""Randomised visitation order over playlist indices."""

import logging
import random

logger = logging.getLogger(__name__)


class ShuffleOrder:
    """
    A permutation of playlist indices with a cursor.

    Neighbours are resolved by position in the permutation, never by
    playlist index. An empty order means shuffle is off (or the playlist
    is empty).
    """

    def __init__(self, rng=None):
        self._rng = rng if rng is not None else random.Random()
        self._order: list[int] = []
        self._position = 0

    def __len__(self):
        return len(self._order)

    def __iter__(self):
        return iter(self._order)

    def __repr__(self):
        return f"ShuffleOrder({self._order!r}, position={self._position})"

    @property
    def order(self) -> list[int]:
        return list(self._order)

    @property
    def position(self) -> int:
        return self._position

    @property
    def current(self) -> int | None:
        if not self._order:
            return None
        return self._order[self._position]

    def generate(self, count: int, current: int | None = None,
                 avoid_first: int | None = None) -> None:
        """
        Build a fresh permutation of range(count).

        If `current` is given it is swapped into slot 0 and the cursor is
        left there, so the audible track does not change. `avoid_first`
        keeps an index out of slot 0 (when there is another to put there),
        so a new pass never opens with the track that closed the last one.
        """
        order = list(range(count))
        # Fisher-Yates
        for i in range(count - 1, 0, -1):
            j = self._rng.randint(0, i)
            order[i], order[j] = order[j], order[i]
        if current is not None and 0 <= current < count:
            k = order.index(current)
            order[0], order[k] = order[k], order[0]
        elif avoid_first is not None and count > 1 and order[0] == avoid_first:
            k = self._rng.randint(1, count - 1)
            order[0], order[k] = order[k], order[0]
        self._order = order
        self._position = 0
        logger.debug("shuffle order: %s", order)

    def extend(self, count: int) -> None:
        """Append `count` new trailing playlist indices after the existing order."""
        start = len(self._order)
        added = list(range(start, start + count))
        self._rng.shuffle(added)
        self._order.extend(added)

    def clear(self) -> None:
        self._order = []
        self._position = 0

    def locate(self, index: int) -> None:
        """Move the cursor onto playlist index `index`."""
        try:
            self._position = self._order.index(index)
        except ValueError:
            logger.warning("index %s not in shuffle order %s", index, self._order)

    def next_index(self) -> int | None:
        if not self._order:
            return None
        return self._order[(self._position + 1) % len(self._order)]

    def previous_index(self) -> int | None:
        if not self._order:
            return None
        return self._order[(self._position - 1) % len(self._order)]

    def is_at_end(self) -> bool:
        return not self._order or self._position == len(self._order) - 1
