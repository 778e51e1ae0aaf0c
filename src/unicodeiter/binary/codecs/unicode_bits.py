from __future__ import annotations
import struct

HIGH_SURROGATE_BASE = 0xD7C0
LOW_SURROGATE_BASE = 0xDC00
TEN_BIT_MASK = 0x3FF
MAX_CODE_POINT = 0x10FFFF

# Strip the length marker bits from a value accumulated over 1..4 bytes.
UTF8_VALUE_MASKS = (0x7F, 0x7FF, 0xFFFF, 0x1FFFFF)
# Smallest value that legitimately needs 1..4 bytes.
UTF8_MIN_VALUES = (0x0, 0x80, 0x800, 0x10000)

# struct codes usable as code unit storage
UNSIGNED_UNIT_FORMATS = "BHIL"


def is_high_surrogate(v: int) -> bool: return (v & 0xFC00) == 0xD800
def is_low_surrogate(v: int) -> bool:  return (v & 0xFC00) == 0xDC00
def is_surrogate(v: int) -> bool:      return (v & 0xFFFFF800) == 0xD800
def is_continuation_byte(b: int) -> bool: return (b & 0xC0) == 0x80


def utf8_byte_count(c: int) -> int:
    """
    Length of the UTF-8 sequence started by byte `c`: the number of 1-bits
    before the first 0-bit, counting plain ASCII as 1.
    """
    mask = 0x80
    result = 0
    while c & mask:
        result += 1
        mask >>= 1
    return 1 if result == 0 else result


def utf8_trailing_byte_count(c: int) -> int:
    return utf8_byte_count(c) - 1


def check_unit_format(fmt: str, bits: int) -> str:
    """Raise TypeError unless the struct format `fmt` packs exactly `bits` bits."""
    if len(fmt) != 1 or fmt not in UNSIGNED_UNIT_FORMATS:
        raise TypeError(f"unit format must be one of {UNSIGNED_UNIT_FORMATS!r}, got {fmt!r}")
    try:
        size = struct.calcsize(fmt)
    except struct.error as e:
        raise TypeError(f"bad unit format {fmt!r}: {e}") from e
    if size * 8 != bits:
        raise TypeError(f"unit format {fmt!r} is {size * 8} bits, need {bits}")
    return fmt


def check_base_width(base, bits: int) -> None:
    """Raise TypeError if the base cursor declares a unit width other than `bits`."""
    width = getattr(base, "width", None)
    if width is not None and width != bits:
        raise TypeError(f"source units are {width} bits, need {bits}")
