from __future__ import annotations
from pydantic import BaseModel, Field

from .common import Encoding


class TranscodeReport(BaseModel):
    source: Encoding
    target: Encoding
    source_units: int = Field(..., ge=0)
    target_units: int = Field(..., ge=0)
    code_points: int = Field(..., ge=0)
