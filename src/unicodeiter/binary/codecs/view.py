from __future__ import annotations
import struct
from typing import Iterator, List

from .cursor import Cursor, UnitBuffer
from .utf16_codec import U16ToU32Iterator, U32ToU16Iterator
from .utf8_codec import U8ToU32Iterator, U32ToU8Iterator


class UnitView:
    """
    The derived sequence between two adapters of the same type, [begin, end).
    Iterating copies the adapters, so a view can be walked any number of
    times in either direction. Nothing is decoded up front.
    """
    __slots__ = ("begin", "end")

    def __init__(self, begin, end):
        if type(begin) is not type(end):
            raise TypeError(f"mismatched adapters: {type(begin).__name__} vs {type(end).__name__}")
        self.begin = begin
        self.end = end

    def __iter__(self) -> Iterator[int]:
        it = self.begin.copy()
        while it != self.end:
            yield it.dereference()
            it.increment()

    def __reversed__(self) -> Iterator[int]:
        it = self.end.copy()
        while it != self.begin:
            it.decrement()
            yield it.dereference()

    def count(self) -> int:
        n = 0
        it = self.begin.copy()
        while it != self.end:
            it.increment()
            n += 1
        return n

    def to_list(self) -> List[int]:
        return list(self)

    def to_bytes(self, byteorder: str = "little") -> bytes:
        units = self.to_list()
        prefix = "<" if byteorder == "little" else ">"
        return struct.pack(f"{prefix}{len(units)}{self.begin.unit_format}", *units)


def _view(adapter_cls, data: UnitBuffer, **kw) -> UnitView:
    cur = Cursor(data)
    return UnitView(adapter_cls(cur, **kw), adapter_cls(cur.end(), **kw))


def utf32_to_utf16(data: UnitBuffer, **kw) -> UnitView: return _view(U32ToU16Iterator, data, **kw)
def utf16_to_utf32(data: UnitBuffer, **kw) -> UnitView: return _view(U16ToU32Iterator, data, **kw)
def utf32_to_utf8(data: UnitBuffer, **kw) -> UnitView:  return _view(U32ToU8Iterator, data, **kw)
def utf8_to_utf32(data: UnitBuffer, **kw) -> UnitView:  return _view(U8ToU32Iterator, data, **kw)
