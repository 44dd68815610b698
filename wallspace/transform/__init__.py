"""Perspective correction between the photographed wall and its flat plane."""

from wallspace.transform.homography import (
    HomographyTransformer,
    compute_homography,
    solve_linear_system,
)

__all__ = [
    "HomographyTransformer",
    "compute_homography",
    "solve_linear_system",
]
