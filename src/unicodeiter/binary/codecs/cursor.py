from __future__ import annotations
from typing import Protocol, Sequence, Union

UnitBuffer = Union[bytes, bytearray, memoryview, Sequence[int], str]


class BaseCursor(Protocol):
    """What an adapter needs from the position it wraps."""

    @property
    def width(self) -> int | None: ...
    def read(self) -> int: ...
    def advance(self, n: int = 1) -> "BaseCursor": ...
    def retreat(self, n: int = 1) -> "BaseCursor": ...
    def remaining(self) -> int: ...
    def tell(self) -> int: ...


def _storage_width(data) -> int | None:
    if data is None:
        return None
    if isinstance(data, str):
        return 32
    if isinstance(data, (bytes, bytearray)):
        return 8
    itemsize = getattr(data, "itemsize", None)  # memoryview, array.array
    return itemsize * 8 if itemsize else None


class Cursor:
    """
    Read-only position into a caller-owned sequence of code units.

    Cursors are values: advance()/retreat() return a new cursor and never
    touch the one they were called on. Two cursors are equal when they look
    at the very same object at the same index.
    """
    __slots__ = ("buf", "pos")

    def __init__(self, data: UnitBuffer | None = None, pos: int = 0):
        self.buf = data
        self.pos = pos

    def __len__(self) -> int: return 0 if self.buf is None else len(self.buf)
    def remaining(self) -> int: return len(self) - self.pos
    def tell(self) -> int: return self.pos

    @property
    def width(self) -> int | None:
        return _storage_width(self.buf)

    def seek(self, pos: int) -> "Cursor":
        if not (0 <= pos <= len(self)): raise ValueError(f"seek out of bounds: {pos}")
        return Cursor(self.buf, pos)

    def advance(self, n: int = 1) -> "Cursor": return self.seek(self.pos + n)
    def retreat(self, n: int = 1) -> "Cursor": return self.seek(self.pos - n)
    def end(self) -> "Cursor": return Cursor(self.buf, len(self))

    def read(self) -> int:
        if not (0 <= self.pos < len(self)):
            raise IndexError(f"read out of bounds at {self.pos}")
        v = self.buf[self.pos]
        return ord(v) if isinstance(v, str) else int(v)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cursor):
            return NotImplemented
        return self.buf is other.buf and self.pos == other.pos

    def __ne__(self, other: object) -> bool:
        eq = self.__eq__(other)
        return eq if eq is NotImplemented else not eq

    def __hash__(self) -> int:
        return hash((id(self.buf), self.pos))

    def __repr__(self) -> str:
        return f"Cursor(pos={self.pos}, len={len(self)})"
