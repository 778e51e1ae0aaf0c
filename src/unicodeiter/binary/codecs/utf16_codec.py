from __future__ import annotations

from .adapter import _CollapsingAdapter, _ExpandingAdapter
from .cursor import BaseCursor
from .errors import InvalidCodePoint, MisplacedSurrogate
from .unicode_bits import (
    HIGH_SURROGATE_BASE,
    LOW_SURROGATE_BASE,
    MAX_CODE_POINT,
    TEN_BIT_MASK,
    is_high_surrogate,
    is_low_surrogate,
    is_surrogate,
)


class U32ToU16Iterator(_ExpandingAdapter):
    """Walk a sequence of code points as UTF-16 units (one or two per code point)."""
    __slots__ = ()

    SOURCE_BITS = 32
    UNIT_BITS = 16
    DEFAULT_FORMAT = "H"
    TARGET = "UTF-16"

    def _encode(self, v: int, offset: int) -> tuple[int, ...]:
        if v >= 0x10000:
            if v > MAX_CODE_POINT:
                raise InvalidCodePoint(v, self.TARGET, offset=offset)
            # split into two surrogates
            hi = (v >> 10) + HIGH_SURROGATE_BASE
            lo = (v & TEN_BIT_MASK) + LOW_SURROGATE_BASE
            return hi, lo
        if is_surrogate(v):
            raise InvalidCodePoint(v, self.TARGET, offset=offset)
        return (v,)


class U16ToU32Iterator(_CollapsingAdapter):
    """Walk a sequence of UTF-16 units as code points."""
    __slots__ = ()

    SOURCE_BITS = 16
    UNIT_BITS = 32
    DEFAULT_FORMAT = "I"

    def _bad_unit(self, raw: int, offset: int) -> MisplacedSurrogate:
        return MisplacedSurrogate(raw, offset=offset)

    def increment(self):
        step = 2 if is_high_surrogate(self._read(self._base)) else 1
        if step > self._base.remaining():
            err = MisplacedSurrogate(self._read(self._base), offset=self._base.tell())
            self._log_failure(err)
            raise err
        self._base = self._base.advance(step)
        self._value = None
        return self

    def decrement(self):
        pos = self._base.retreat()
        # land on the high half of a pair
        if is_low_surrogate(self._read(pos)) and pos.tell() > 0:
            pos = pos.retreat()
        self._base = pos
        self._value = None
        return self

    def _decode(self, pos: BaseCursor) -> int:
        v = self._read(pos)
        if is_high_surrogate(v):
            # a high surrogate must be followed by a low one
            if pos.remaining() < 2:
                raise MisplacedSurrogate(v, offset=pos.tell())
            nxt = pos.advance()
            t = self._read(nxt)
            if not is_low_surrogate(t):
                raise MisplacedSurrogate(t, offset=nxt.tell())
            v = ((v - HIGH_SURROGATE_BASE) << 10) | (t & TEN_BIT_MASK)
        if is_surrogate(v):
            raise MisplacedSurrogate(v, offset=pos.tell())
        return v
