"""Export of final placements as real-world hanging measurements."""

from wallspace.export.hanging_guide import (
    HangingGuideExporter,
    HangingInstruction,
    build_hanging_guide,
)

__all__ = [
    "HangingGuideExporter",
    "HangingInstruction",
    "build_hanging_guide",
]
