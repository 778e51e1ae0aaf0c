from __future__ import annotations

import logging
import sys
from array import array
from pathlib import Path
from typing import Union

from .codecs.view import UnitView, utf16_to_utf32, utf32_to_utf16, utf32_to_utf8, utf8_to_utf32
from unicodeiter.models.common import ByteOrder, Encoding
from unicodeiter.models.options import TranscodeOptions
from unicodeiter.models.report import TranscodeReport

logger = logging.getLogger(__name__)

BytesLike = Union[str, Path, bytes, bytearray, memoryview]


class UnitLoadError(ValueError):
    pass


# -----------------------------
# Helpers
# -----------------------------

def _load_bytes(inp: BytesLike) -> bytes:
    if isinstance(inp, (bytes, bytearray, memoryview)):
        return bytes(inp)
    p = Path(str(inp))
    return p.read_bytes()


def _typecode(bits: int) -> str:
    for code in "BHIL":
        if array(code).itemsize * 8 == bits:
            return code
    raise UnitLoadError(f"no array typecode holds {bits}-bit units")


# -----------------------------
# Raw storage -> code units
# -----------------------------

def load_units(
    inp: BytesLike,
    encoding: Encoding,
    byteorder: ByteOrder = ByteOrder.LITTLE,
) -> array:
    """
    Read raw storage into a typed array of code units of the encoding's width.
    Byte order is applied here; the adapters only ever see whole units.
    """
    raw = _load_bytes(inp)
    bits = encoding.unit_bits
    size = bits // 8
    if len(raw) % size:
        raise UnitLoadError(f"{len(raw)} bytes is not a whole number of {bits}-bit units")
    units = array(_typecode(bits))
    units.frombytes(raw)
    if size > 1 and byteorder.value != sys.byteorder:
        units.byteswap()
    logger.debug("loaded %d %s units", len(units), encoding.value)
    return units


# -----------------------------
# Lazy transcoding
# -----------------------------

def transcode(inp: BytesLike, options: TranscodeOptions) -> UnitView:
    """
    Wrap the source units in the adapter pair for options.source -> options.target.
    Nothing is converted until the returned view is walked.
    """
    units = load_units(inp, options.source, options.byteorder)
    pair = (options.source, options.target)
    if pair == (Encoding.UTF32, Encoding.UTF16):
        return utf32_to_utf16(units)
    if pair == (Encoding.UTF16, Encoding.UTF32):
        return utf16_to_utf32(units)
    if pair == (Encoding.UTF32, Encoding.UTF8):
        return utf32_to_utf8(units)
    return utf8_to_utf32(units, allow_overlong=options.allow_overlong)


def summarize(inp: BytesLike, options: TranscodeOptions) -> TranscodeReport:
    """Walk the whole conversion once and count units on both sides."""
    view = transcode(inp, options)
    source_units = view.end.base().tell() - view.begin.base().tell()
    target_units = sum(1 for _ in view)  # dereference each unit so malformed input is reported
    code_points = source_units if options.source == Encoding.UTF32 else target_units
    return TranscodeReport(
        source=options.source,
        target=options.target,
        source_units=source_units,
        target_units=target_units,
        code_points=code_points,
    )
