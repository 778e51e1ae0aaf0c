from __future__ import annotations

from .adapter import _CollapsingAdapter, _ExpandingAdapter
from .cursor import BaseCursor
from .errors import InvalidCodePoint, InvalidUtf8Sequence
from .unicode_bits import (
    MAX_CODE_POINT,
    UTF8_MIN_VALUES,
    UTF8_VALUE_MASKS,
    is_continuation_byte,
    is_surrogate,
    utf8_byte_count,
    utf8_trailing_byte_count,
)


class U32ToU8Iterator(_ExpandingAdapter):
    """Walk a sequence of code points as UTF-8 bytes (one to four per code point)."""
    __slots__ = ()

    SOURCE_BITS = 32
    UNIT_BITS = 8
    DEFAULT_FORMAT = "B"
    TARGET = "UTF-8"

    def _encode(self, c: int, offset: int) -> tuple[int, ...]:
        if c > MAX_CODE_POINT or is_surrogate(c):
            raise InvalidCodePoint(c, self.TARGET, offset=offset)
        if c < 0x80:
            return (c,)
        if c < 0x800:
            return (0xC0 + (c >> 6),
                    0x80 + (c & 0x3F))
        if c < 0x10000:
            return (0xE0 + (c >> 12),
                    0x80 + ((c >> 6) & 0x3F),
                    0x80 + (c & 0x3F))
        return (0xF0 + (c >> 18),
                0x80 + ((c >> 12) & 0x3F),
                0x80 + ((c >> 6) & 0x3F),
                0x80 + (c & 0x3F))


class U8ToU32Iterator(_CollapsingAdapter):
    """
    Walk a sequence of UTF-8 bytes as code points.

    Overlong forms (more bytes than the value needs) are rejected unless
    allow_overlong=True. Encoded surrogates are always rejected.
    """
    __slots__ = ("allow_overlong",)

    SOURCE_BITS = 8
    UNIT_BITS = 32
    DEFAULT_FORMAT = "I"

    def __init__(self, base: BaseCursor | None = None, *, unit_format: str | None = None,
                 allow_overlong: bool = False):
        super().__init__(base, unit_format=unit_format)
        self.allow_overlong = allow_overlong

    def _bad_unit(self, raw: int, offset: int) -> InvalidUtf8Sequence:
        return InvalidUtf8Sequence(f"0x{raw:X} is not a byte", value=raw, offset=offset)

    def _raise(self, reason: str, *, value: int | None = None, offset: int | None = None):
        err = InvalidUtf8Sequence(reason, value=value, offset=offset)
        self._log_failure(err)
        raise err

    def increment(self):
        n = utf8_byte_count(self._read(self._base))
        if n > self._base.remaining():
            self._raise("truncated sequence", offset=self._base.tell())
        self._base = self._base.advance(n)
        self._value = None
        return self

    def decrement(self):
        # back up over continuation bytes to the leading byte
        pos = self._base.retreat()
        count = 0
        while is_continuation_byte(self._read(pos)):
            if pos.tell() == 0:
                self._raise("no leading byte before continuation bytes", offset=0)
            pos = pos.retreat()
            count += 1
        lead = self._read(pos)
        if count != utf8_trailing_byte_count(lead):
            self._raise(f"leading byte 0x{lead:02X} does not match {count} trailing bytes",
                        value=lead, offset=pos.tell())
        self._base = pos
        self._value = None
        return self

    def _decode(self, pos: BaseCursor) -> int:
        lead = self._read(pos)
        if is_continuation_byte(lead):
            raise InvalidUtf8Sequence("unexpected continuation byte", value=lead, offset=pos.tell())
        extra = utf8_trailing_byte_count(lead)
        if extra >= len(UTF8_VALUE_MASKS):
            raise InvalidUtf8Sequence(f"invalid leading byte 0x{lead:02X}", value=lead, offset=pos.tell())
        if extra >= pos.remaining():
            raise InvalidUtf8Sequence("truncated sequence", value=lead, offset=pos.tell())
        value = lead
        nxt = pos
        for _ in range(extra):
            nxt = nxt.advance()
            b = self._read(nxt)
            if not is_continuation_byte(b):
                raise InvalidUtf8Sequence("missing continuation byte", value=b, offset=nxt.tell())
            value = (value << 6) | (b & 0x3F)
        value &= UTF8_VALUE_MASKS[extra]
        if value > MAX_CODE_POINT:
            raise InvalidUtf8Sequence(f"U+{value:04X} out of range", value=value, offset=pos.tell())
        if not self.allow_overlong and value < UTF8_MIN_VALUES[extra]:
            raise InvalidUtf8Sequence(f"overlong encoding of U+{value:04X}", value=value, offset=pos.tell())
        if is_surrogate(value):
            raise InvalidUtf8Sequence(f"encoded surrogate U+{value:04X}", value=value, offset=pos.tell())
        return value
