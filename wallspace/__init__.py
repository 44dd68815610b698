"""Wall-space geometry engine

Perspective correction, reference-line calibration and placement heuristics
for hanging art pieces on a photographed wall.
"""

__version__ = "0.1.0"

from wallspace.calibration import CalibrationEngine, EffectivePpi, IntrinsicPx, RenderedPx, ScaleFactor
from wallspace.config import ConfigManager
from wallspace.exceptions import (
    DegenerateQuadrilateral,
    EmptyPieceSet,
    InvalidReferenceLength,
    NoArtPlaced,
    ProjectiveSingularity,
    UncalibratedScale,
    UnknownTemplate,
    WallSpaceError,
)
from wallspace.layout import LayoutEngine, TemplateConfig
from wallspace.models import AnchorBox, ArtPiece, Box, Calibration, Point, Quadrilateral, Size
from wallspace.transform import HomographyTransformer

__all__ = [
    "AnchorBox",
    "ArtPiece",
    "Box",
    "Calibration",
    "CalibrationEngine",
    "ConfigManager",
    "DegenerateQuadrilateral",
    "EffectivePpi",
    "EmptyPieceSet",
    "HomographyTransformer",
    "IntrinsicPx",
    "InvalidReferenceLength",
    "LayoutEngine",
    "NoArtPlaced",
    "Point",
    "ProjectiveSingularity",
    "Quadrilateral",
    "RenderedPx",
    "ScaleFactor",
    "Size",
    "TemplateConfig",
    "UncalibratedScale",
    "UnknownTemplate",
    "WallSpaceError",
]
