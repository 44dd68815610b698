"""Data models for the wall-space geometry engine."""

from wallspace.models.data_models import (
    AnchorBox,
    ArtPiece,
    Box,
    Calibration,
    Point,
    Quadrilateral,
    Size,
)

__all__ = [
    "AnchorBox",
    "ArtPiece",
    "Box",
    "Calibration",
    "Point",
    "Quadrilateral",
    "Size",
]
