"""家具アンカーを基準にした自動配置。

外部の物体検出器が見つけたベッドやソファの上端から一定の余白を空けた位置に、
作品グループ全体を相対配置を保ったまま平行移動します。
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
import logging

from wallspace.calibration.calibration_engine import inches_to_pixels
from wallspace.exceptions import EmptyPieceSet
from wallspace.models.data_models import AnchorBox, ArtPiece, Box, Point

logger = logging.getLogger(__name__)

DEFAULT_ANCHOR_CLASSES = ("bed", "couch")
DEFAULT_MIN_SCORE = 0.5
# 家具上端から作品下端までの余白 [inch]
DEFAULT_CLEARANCE_INCHES = 10.0


def find_primary_anchor(
    detections: Iterable[AnchorBox],
    classes: Sequence[str] = DEFAULT_ANCHOR_CLASSES,
    min_score: float = DEFAULT_MIN_SCORE,
) -> AnchorBox | None:
    """検出結果から基準にする家具を1つ選ぶ。

    対象クラスかつ min_score 以上のうち、スコアが最も高いもの。
    同スコアなら面積の大きい方を選ぶ。

    Returns:
        選ばれた AnchorBox、該当なしの場合 None
    """
    allowed = {c.lower() for c in classes}
    candidates = [d for d in detections if d.label.lower() in allowed and d.score >= min_score]
    if not candidates:
        logger.info("アンカーとなる家具が見つかりませんでした")
        return None

    anchor = max(candidates, key=lambda d: (d.score, d.bbox.width * d.bbox.height))
    logger.info(f"アンカーを選択しました: {anchor.label} (score={anchor.score:.2f})")
    return anchor


def group_bounds(items: Sequence[ArtPiece]) -> Box:
    """作品グループ全体を囲む矩形。

    Raises:
        EmptyPieceSet: 作品が無い場合
    """
    if not items:
        raise EmptyPieceSet("壁に作品が配置されていません")

    min_x = min(item.x for item in items)
    min_y = min(item.y for item in items)
    max_x = max(item.right for item in items)
    max_y = max(item.bottom for item in items)
    return Box(min_x, min_y, max_x - min_x, max_y - min_y)


def calculate_hang_point(
    anchor: AnchorBox,
    ppi: float,
    group_height: float,
    clearance_inches: float = DEFAULT_CLEARANCE_INCHES,
) -> Point:
    """グループ中心の移動先。

    targetY = 家具上端 - 余白 - グループ高さ、targetX = 家具の中心 X
    """
    target_y = anchor.top - inches_to_pixels(clearance_inches, ppi) - group_height
    return Point(anchor.center_x, target_y)


def place_above_anchor(
    items: Sequence[ArtPiece],
    anchor: AnchorBox,
    ppi: float,
    clearance_inches: float = DEFAULT_CLEARANCE_INCHES,
) -> list[ArtPiece]:
    """作品グループを家具の上へ平行移動する。

    全作品に同じ (dx, dy) を加えるので、作品間の相対位置は保たれる。

    Raises:
        EmptyPieceSet: 作品が無い場合
        ValueError: ppi が 0 以下の場合
    """
    if ppi <= 0:
        raise ValueError(f"ppi は正の数値である必要があります: {ppi}")

    bounds = group_bounds(items)
    target = calculate_hang_point(anchor, ppi, bounds.height, clearance_inches)
    dx = target.x - bounds.center_x
    dy = target.y - bounds.center_y

    logger.debug(f"place_above_anchor: {anchor.label}, dx={dx:.1f}, dy={dy:.1f}")
    return [item.translated(dx, dy) for item in items]
