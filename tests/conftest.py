"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]

if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pytest

from wallspace.models import AnchorBox, ArtPiece, Box, Calibration, Point, Quadrilateral


@pytest.fixture
def pieces() -> list[ArtPiece]:
    """面積の異なる4作品（入力順と面積順が一致しない）。"""

    return [
        ArtPiece(id="a", x=0.0, y=0.0, width=20.0, height=30.0),  # 600
        ArtPiece(id="b", x=5.0, y=5.0, width=40.0, height=50.0),  # 2000
        ArtPiece(id="c", x=10.0, y=10.0, width=30.0, height=10.0),  # 300
        ArtPiece(id="d", x=15.0, y=15.0, width=25.0, height=40.0),  # 1000
    ]


@pytest.fixture
def wall_quad() -> Quadrilateral:
    """写真上で台形に歪んだ壁の四隅。"""

    return Quadrilateral(
        Point(120.0, 80.0),
        Point(860.0, 40.0),
        Point(900.0, 700.0),
        Point(90.0, 640.0),
    )


@pytest.fixture
def calibration() -> Calibration:
    """ppi=2.5、床ライン y=900 の intrinsic キャリブレーション。"""

    return Calibration(ppi=2.5, floor_y=900.0)


@pytest.fixture
def sofa() -> AnchorBox:
    return AnchorBox(label="couch", bbox=Box(300.0, 600.0, 400.0, 150.0), score=0.9)
