"""Measurement scale: reference-line calibration and pixel space conversion."""

from wallspace.calibration.calibration_engine import (
    DEFAULT_ASSUMED_WALL_HEIGHT_INCHES,
    EYE_LEVEL_INCHES,
    CalibrationEngine,
    EffectivePpi,
    calibrate,
    centerline_y,
    effective_floor_y,
    effective_ppi,
    floor_y_from_corners,
    inches_to_pixels,
    pixels_per_inch,
    pixels_to_inches,
    reference_line_length,
    render_scale_factor,
)
from wallspace.calibration.pixel_space import IntrinsicPx, RenderedPx, ScaleFactor

__all__ = [
    "DEFAULT_ASSUMED_WALL_HEIGHT_INCHES",
    "EYE_LEVEL_INCHES",
    "CalibrationEngine",
    "EffectivePpi",
    "IntrinsicPx",
    "RenderedPx",
    "ScaleFactor",
    "calibrate",
    "centerline_y",
    "effective_floor_y",
    "effective_ppi",
    "floor_y_from_corners",
    "inches_to_pixels",
    "pixels_per_inch",
    "pixels_to_inches",
    "reference_line_length",
    "render_scale_factor",
]
