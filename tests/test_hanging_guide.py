"""Unit tests for hanging guide export."""

import csv
import json
from pathlib import Path

import pytest

from wallspace.exceptions import UncalibratedScale
from wallspace.export import HangingGuideExporter, HangingInstruction, build_hanging_guide
from wallspace.models import ArtPiece


class TestBuildHangingGuide:
    """build_hanging_guideのテスト"""

    def test_measurements(self):
        """作品中心の位置をインチで求める"""
        piece = ArtPiece(id="p", x=80.0, y=300.0, width=40.0, height=100.0)
        (row,) = build_hanging_guide([piece], ppi=2.5, floor_y=1000.0)

        assert row == HangingInstruction(
            piece_id="p",
            inches_from_left=40.0,
            inches_from_floor=260.0,
            width_inches=16.0,
            height_inches=40.0,
        )

    def test_real_dimensions_preferred(self):
        """実寸が登録されていればそちらを使う"""
        piece = ArtPiece(id="p", x=0.0, y=0.0, width=40.0, height=100.0, real_width_inches=18.0)
        (row,) = build_hanging_guide([piece], ppi=2.5, floor_y=1000.0)
        assert row.width_inches == 18.0
        assert row.height_inches == 40.0

    def test_uncalibrated(self):
        """ppi が 0 以下なら UncalibratedScale"""
        with pytest.raises(UncalibratedScale):
            build_hanging_guide([], ppi=0.0, floor_y=100.0)


class TestHangingGuideExporter:
    """HangingGuideExporterのテスト"""

    @pytest.fixture
    def guide(self):
        return [
            HangingInstruction("a", 12.345, 57.0, 16.0, 20.0),
            HangingInstruction(None, 40.0, 60.04, 10.0, 10.0),
        ]

    def test_init_creates_directory(self, tmp_path: Path):
        """出力ディレクトリが作成される"""
        exporter = HangingGuideExporter(tmp_path / "new_dir")
        assert exporter.output_dir.exists()

    def test_export_csv(self, tmp_path: Path, guide):
        """CSV出力のテスト"""
        exporter = HangingGuideExporter(tmp_path)
        output_path = exporter.export_csv(guide)

        with open(output_path, encoding="utf-8") as f:
            rows = list(csv.reader(f))
        assert rows[0] == list(HangingGuideExporter.FIELDS)
        assert rows[1] == ["a", "12.3", "57.0", "16.0", "20.0"]
        assert rows[2][0] == ""

    def test_export_json(self, tmp_path: Path, guide):
        """JSON出力のテスト"""
        exporter = HangingGuideExporter(tmp_path)
        output_path = exporter.export_json(guide, room_name="Living Room")

        data = json.loads(output_path.read_text(encoding="utf-8"))
        assert data["room_name"] == "Living Room"
        assert data["metadata"] == {"num_pieces": 2, "unit": "inch"}
        assert data["pieces"][0]["piece_id"] == "a"
        assert data["pieces"][1]["inches_from_floor"] == 60.04
