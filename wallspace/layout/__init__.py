"""Placement strategies for art pieces on a calibrated wall."""

from wallspace.layout.anchor_placement import (
    DEFAULT_ANCHOR_CLASSES,
    DEFAULT_CLEARANCE_INCHES,
    calculate_hang_point,
    find_primary_anchor,
    group_bounds,
    place_above_anchor,
)
from wallspace.layout.layout_engine import (
    TEMPLATE_NAMES,
    GridVariant,
    LayoutEngine,
    MosaicVariant,
    TemplateConfig,
    VariantCycler,
    align_to_centerline,
    apply_template,
    arrange_grid,
    arrange_mosaic,
    arrange_uniform,
)

__all__ = [
    "DEFAULT_ANCHOR_CLASSES",
    "DEFAULT_CLEARANCE_INCHES",
    "TEMPLATE_NAMES",
    "GridVariant",
    "LayoutEngine",
    "MosaicVariant",
    "TemplateConfig",
    "VariantCycler",
    "align_to_centerline",
    "apply_template",
    "arrange_grid",
    "arrange_mosaic",
    "arrange_uniform",
    "calculate_hang_point",
    "find_primary_anchor",
    "group_bounds",
    "place_above_anchor",
]
