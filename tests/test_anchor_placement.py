"""Unit tests for anchor-based auto placement."""

from __future__ import annotations

from itertools import combinations

import pytest

from wallspace.exceptions import EmptyPieceSet, NoArtPlaced
from wallspace.layout import calculate_hang_point, find_primary_anchor, group_bounds, place_above_anchor
from wallspace.models import AnchorBox, ArtPiece, Box, Point


def detection(label: str, score: float, bbox=(0.0, 0.0, 100.0, 50.0)) -> AnchorBox:
    return AnchorBox(label=label, bbox=Box(*bbox), score=score)


class TestFindPrimaryAnchor:
    """find_primary_anchorのテスト"""

    def test_picks_highest_scoring_furniture(self):
        """最もスコアの高い家具が選ばれる"""
        detections = [
            detection("person", 0.99),
            detection("couch", 0.6),
            detection("bed", 0.8),
            detection("bed", 0.3),
        ]
        anchor = find_primary_anchor(detections)
        assert anchor is not None
        assert anchor.label == "bed"
        assert anchor.score == 0.8

    def test_no_furniture(self):
        """家具が無い場合は None"""
        assert find_primary_anchor([detection("person", 0.9), detection("tv", 0.8)]) is None

    def test_empty(self):
        """検出結果が空の場合は None"""
        assert find_primary_anchor([]) is None

    def test_below_min_score(self):
        """しきい値未満のスコアは無視される"""
        assert find_primary_anchor([detection("couch", 0.4)], min_score=0.5) is None

    def test_case_insensitive_and_custom_classes(self):
        """クラス名は大文字小文字を区別せず、対象クラスを変更できる"""
        anchor = find_primary_anchor([detection("Sofa", 0.7)], classes=("sofa",))
        assert anchor is not None

    def test_tie_prefers_larger_box(self):
        """同点の場合は大きいボックスを優先する"""
        small = detection("bed", 0.8, (0.0, 0.0, 10.0, 10.0))
        large = detection("couch", 0.8, (0.0, 0.0, 100.0, 10.0))
        assert find_primary_anchor([small, large]) is large


class TestGroupBounds:
    """group_boundsのテスト"""

    def test_bounds(self, pieces):
        """作品群の外接矩形"""
        assert group_bounds(pieces) == Box(0.0, 0.0, 45.0, 55.0)

    def test_empty(self):
        """作品が無い場合は EmptyPieceSet"""
        with pytest.raises(EmptyPieceSet):
            group_bounds([])


class TestPlaceAboveAnchor:
    """place_above_anchorのテスト"""

    def test_hang_point(self, sofa):
        """家具上端 600 - 10in x 2ppi - グループ高さ 55 = 525"""
        assert calculate_hang_point(sofa, 2.0, 55.0) == Point(500.0, 525.0)

    def test_group_center_moves_to_hang_point(self, pieces, sofa):
        """グループ中心が掛け位置に移動する"""
        result = place_above_anchor(pieces, sofa, 2.0)
        bounds = group_bounds(result)
        assert bounds.center_x == pytest.approx(500.0)
        assert bounds.center_y == pytest.approx(525.0)
        assert bounds.width == pytest.approx(45.0)
        assert bounds.height == pytest.approx(55.0)

    def test_translation_preserves_shape(self, pieces, sofa):
        """平行移動なので相対位置とサイズは変わらない"""
        result = place_above_anchor(pieces, sofa, 2.0, clearance_inches=8.0)
        for (a0, b0), (a1, b1) in zip(combinations(pieces, 2), combinations(result, 2), strict=True):
            assert a1.x - b1.x == pytest.approx(a0.x - b0.x)
            assert a1.y - b1.y == pytest.approx(a0.y - b0.y)

    def test_identity_preserved(self, pieces, sofa):
        """id は保持される"""
        result = place_above_anchor(pieces, sofa, 2.0)
        assert [p.id for p in result] == [p.id for p in pieces]

    def test_no_art_placed(self, sofa):
        """作品が無い場合は NoArtPlaced"""
        with pytest.raises(NoArtPlaced, match="作品"):
            place_above_anchor([], sofa, 2.0)

    def test_invalid_ppi(self, pieces, sofa):
        """ppi が 0 以下ならエラー"""
        with pytest.raises(ValueError, match="ppi"):
            place_above_anchor(pieces, sofa, 0.0)

    def test_single_piece(self, sofa):
        """1点だけの配置"""
        piece = ArtPiece(id="p", x=0.0, y=0.0, width=40.0, height=20.0)
        (moved,) = place_above_anchor([piece], sofa, 1.0)
        assert (moved.center_x, moved.center_y) == (500.0, 570.0)
