from __future__ import annotations
from .codecs.view import UnitView
from ..models.common import ByteOrder

def write_units(view: UnitView, byteorder: ByteOrder = ByteOrder.LITTLE) -> bytes:
    """Walk the view and pack the derived units with the adapter's unit format."""
    return view.to_bytes(byteorder.value)
