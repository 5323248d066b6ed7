"""
Bounded FIFO of clients waiting for a free table.
"""

from collections import deque
from typing import Deque, List


class WaitQueue:
    """
    FIFO queue of client names with fixed capacity.

    The capacity equals the number of tables: a client arriving to a full
    queue is turned away instead of being appended.
    """

    def __init__(self, capacity: int):
        if capacity <= 0:
            raise ValueError(f"Queue capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._clients: Deque[str] = deque()

    def is_full(self) -> bool:
        return len(self._clients) >= self.capacity

    def push(self, name: str) -> None:
        """
        Append a client to the tail.

        Raises:
            OverflowError: If the queue is full
        """
        if self.is_full():
            raise OverflowError(f"Wait queue is full ({self.capacity} clients)")
        self._clients.append(name)

    def pop(self) -> str:
        """
        Remove and return the head client.

        Raises:
            IndexError: If queue is empty
        """
        if not self._clients:
            raise IndexError("Cannot pop from empty WaitQueue")
        return self._clients.popleft()

    def discard(self, name: str) -> bool:
        """Remove every entry of a client, returning True if any was found."""
        before = len(self._clients)
        self._clients = deque(c for c in self._clients if c != name)
        return len(self._clients) != before

    def snapshot(self) -> List[str]:
        return list(self._clients)

    def __contains__(self, name: str) -> bool:
        return name in self._clients

    def __len__(self) -> int:
        return len(self._clients)

    def __bool__(self) -> bool:
        return bool(self._clients)
