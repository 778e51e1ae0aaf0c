from __future__ import annotations
from enum import Enum


class Encoding(str, Enum):
    UTF8 = "utf8"
    UTF16 = "utf16"
    UTF32 = "utf32"

    @property
    def unit_bits(self) -> int:
        return {"utf8": 8, "utf16": 16, "utf32": 32}[self.value]


class ByteOrder(str, Enum):
    LITTLE = "little"
    BIG = "big"
