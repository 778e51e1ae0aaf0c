from __future__ import annotations
import logging

from .cursor import BaseCursor, Cursor
from .errors import InvalidCodePoint, TranscodeError
from .unicode_bits import check_base_width, check_unit_format

logger = logging.getLogger(__name__)


class _Adapter:
    """
    Common plumbing for the four unit adapters.

    An adapter wraps a base cursor over SOURCE_BITS-wide units and presents
    the derived UNIT_BITS-wide sequence. Stepping mutates the adapter in place
    (increment/decrement return self); copy() gives an independent value.
    """
    __slots__ = ("_base", "unit_format")

    SOURCE_BITS = 32
    UNIT_BITS = 32
    DEFAULT_FORMAT = "I"

    def __init__(self, base: BaseCursor | None = None, *, unit_format: str | None = None):
        self.unit_format = check_unit_format(unit_format or self.DEFAULT_FORMAT, self.UNIT_BITS)
        if base is None:
            base = Cursor()
        check_base_width(base, self.SOURCE_BITS)
        self._base = base

    def base(self) -> BaseCursor:
        return self._base

    def _read(self, pos: BaseCursor) -> int:
        raw = pos.read()
        # plain int sequences can hold anything; a unit must fit the source width
        if not 0 <= raw < (1 << self.SOURCE_BITS):
            raise self._bad_unit(raw, pos.tell())
        return raw

    def _bad_unit(self, raw: int, offset: int) -> TranscodeError:
        raise NotImplementedError

    def _log_failure(self, err: TranscodeError) -> None:
        logger.debug("%s: %s", type(self).__name__, err)

    @property
    def value(self) -> int:
        return self.dereference()

    def dereference(self) -> int:
        raise NotImplementedError

    def copy(self):
        dup = object.__new__(type(self))
        for cls in type(self).__mro__:
            for name in getattr(cls, "__slots__", ()):
                setattr(dup, name, getattr(self, name))
        return dup

    __copy__ = copy

    def __ne__(self, other: object) -> bool:
        eq = self.__eq__(other)
        return eq if eq is NotImplemented else not eq

    __hash__ = None  # mutable position

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base={self._base!r})"


class _ExpandingAdapter(_Adapter):
    """
    One source element expands to 1..N derived units (the encoders).

    `_values` is the decode cache: None while pending, else the tuple of
    units for the element under the base cursor. `_index` selects one of
    them. Pending and index 0 are the same logical position.
    """
    __slots__ = ("_values", "_index")

    TARGET = ""

    def __init__(self, base: BaseCursor | None = None, *, unit_format: str | None = None):
        super().__init__(base, unit_format=unit_format)
        self._values: tuple[int, ...] | None = None
        self._index = 0

    def _encode(self, v: int, offset: int) -> tuple[int, ...]:
        raise NotImplementedError

    def _bad_unit(self, raw: int, offset: int) -> TranscodeError:
        return InvalidCodePoint(raw, self.TARGET, offset=offset)

    def _extract(self, pos: BaseCursor) -> tuple[int, ...]:
        try:
            return self._encode(self._read(pos), pos.tell())
        except TranscodeError as e:
            self._log_failure(e)
            raise

    def _logical_index(self) -> int:
        return 0 if self._values is None else self._index

    def dereference(self) -> int:
        if self._values is None:
            self._values = self._extract(self._base)
            self._index = 0
        return self._values[self._index]

    def increment(self):
        if self._values is None:
            # need the expansion length to know whether to stay on this element
            self._values = self._extract(self._base)
            self._index = 0
        if self._index + 1 < len(self._values):
            self._index += 1
        else:
            self._base = self._base.advance()
            self._values = None
            self._index = 0
        return self

    def decrement(self):
        if self._logical_index() == 0:
            pos = self._base.retreat()
            values = self._extract(pos)
            self._base, self._values, self._index = pos, values, len(values) - 1
        else:
            self._index -= 1
        return self

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._base == other._base and self._logical_index() == other._logical_index()


class _CollapsingAdapter(_Adapter):
    """
    1..N source units collapse to one code point (the decoders).

    Step direction is worked out from the raw units, so the cache only
    holds the decoded value and position equality is enough.
    """
    __slots__ = ("_value",)

    def __init__(self, base: BaseCursor | None = None, *, unit_format: str | None = None):
        super().__init__(base, unit_format=unit_format)
        self._value: int | None = None

    def _decode(self, pos: BaseCursor) -> int:
        raise NotImplementedError

    def dereference(self) -> int:
        if self._value is None:
            try:
                self._value = self._decode(self._base)
            except TranscodeError as e:
                self._log_failure(e)
                raise
        return self._value

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._base == other._base
