"""Append-only growable byte buffer used to assemble command text.

The buffer owns a single ``bytearray`` of ``capacity`` bytes of which
the first ``len(buffer)`` are content.  The byte directly after the
content is always NUL so that the region can be handed to consumers
expecting terminated text.

Growth policy
-------------
* Start at :data:`INITIAL_CAPACITY` bytes.
* When an append does not fit (content + data + terminator), grow to
  ``max(needed, capacity * 2)`` and copy once.

Every growth at least doubles the capacity, so appending fragments of
total length ``L`` reallocates at most ``O(log L)`` times.
"""

from __future__ import annotations

from typing import Any

from bdtool.exceptions import AllocationFailureError

INITIAL_CAPACITY: int = 32

TEXT_ENCODING: str = "utf-8"
TEXT_ERRORS: str = "surrogateescape"


class GrowableBuffer:
    """Single-owner, append-only byte buffer.

    Not thread-safe: one owner appends, then reads the result.
    """

    __slots__ = ("_storage", "_length", "_reallocations")

    def __init__(self, initial_capacity: int = INITIAL_CAPACITY) -> None:
        self._storage: bytearray = self._allocate(max(initial_capacity, 1))
        self._length: int = 0
        self._reallocations: int = 0

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return self._length

    @property
    def capacity(self) -> int:
        """Number of bytes currently allocated."""
        return len(self._storage)

    @property
    def reallocations(self) -> int:
        """How many times the storage has been grown."""
        return self._reallocations

    def contents(self) -> memoryview:
        """Return a read-only view of the content bytes.

        The view is only meaningful until the next append.
        """
        return memoryview(self._storage)[: self._length].toreadonly()

    def text(self) -> str:
        """Decode the content as text (arbitrary bytes round-trip)."""
        return self._storage[: self._length].decode(TEXT_ENCODING, TEXT_ERRORS)

    def __bytes__(self) -> bytes:
        return bytes(self._storage[: self._length])

    # ------------------------------------------------------------------
    # Appending
    # ------------------------------------------------------------------

    def append_bytes(self, data: bytes | bytearray | memoryview) -> None:
        """Append raw *data*, growing the storage when necessary."""
        size = len(data)
        self._ensure_space(size + 1)
        end = self._length + size
        self._storage[self._length : end] = data
        self._storage[end] = 0
        self._length = end

    def append_text(self, text: str) -> None:
        """Append *text* encoded as UTF-8."""
        self.append_bytes(text.encode(TEXT_ENCODING, TEXT_ERRORS))

    def append_formatted(self, fmt: str, *args: Any, **kwargs: Any) -> None:
        """Append ``fmt.format(*args, **kwargs)``.

        The rendered text is measured in full before any byte of the
        buffer is touched, then copied with a single bounded write.
        """
        rendered = fmt.format(*args, **kwargs).encode(TEXT_ENCODING, TEXT_ERRORS)
        self.append_bytes(rendered)

    # ------------------------------------------------------------------
    # Storage management
    # ------------------------------------------------------------------

    def _ensure_space(self, space: int) -> None:
        needed = self._length + space
        capacity = len(self._storage)
        if needed <= capacity:
            return

        new_storage = self._allocate(max(needed, capacity * 2))
        new_storage[: self._length] = self._storage[: self._length]
        self._storage = new_storage
        self._reallocations += 1

    @staticmethod
    def _allocate(size: int) -> bytearray:
        try:
            return bytearray(size)
        except MemoryError as exc:
            raise AllocationFailureError(
                f"could not allocate {size} bytes for output buffer",
            ) from exc
