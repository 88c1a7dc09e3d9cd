"""Visual encoding services."""

from app.services.encoding.mapper import (
    VisualEncodingMapper,
    hex_to_rgba,
    margin_color,
    swing_halo_color,
)

__all__ = [
    "VisualEncodingMapper",
    "hex_to_rgba",
    "margin_color",
    "swing_halo_color",
]
