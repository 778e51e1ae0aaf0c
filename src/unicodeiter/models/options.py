from __future__ import annotations
from pydantic import BaseModel, model_validator

from .common import ByteOrder, Encoding

# The four conversions an adapter exists for.
SUPPORTED_PAIRS = {
    (Encoding.UTF32, Encoding.UTF16),
    (Encoding.UTF16, Encoding.UTF32),
    (Encoding.UTF32, Encoding.UTF8),
    (Encoding.UTF8, Encoding.UTF32),
}


class TranscodeOptions(BaseModel):
    source: Encoding
    target: Encoding
    byteorder: ByteOrder = ByteOrder.LITTLE
    allow_overlong: bool = False

    @model_validator(mode="after")
    def _check_pair(self) -> "TranscodeOptions":
        if (self.source, self.target) not in SUPPORTED_PAIRS:
            raise ValueError(
                f"no adapter for {self.source.value} -> {self.target.value}; "
                "one side must be utf32"
            )
        return self
