"""キャリブレーション（実寸スケール）計算モジュール。

ユーザーが引いた基準線と既知の実寸から pixels per inch を求め、
現在の表示サイズに合わせた実効 ppi と床ライン・目線ラインを算出します。
"""

from __future__ import annotations

from dataclasses import dataclass
import logging

from wallspace.calibration.pixel_space import IntrinsicPx, RenderedPx, ScaleFactor
from wallspace.exceptions import InvalidReferenceLength, UncalibratedScale
from wallspace.models.data_models import Calibration, Point, Quadrilateral, Size

logger = logging.getLogger(__name__)

# 天井高 8ft の壁が画面の縦いっぱいに写っていると仮定した推定値
DEFAULT_ASSUMED_WALL_HEIGHT_INCHES = 96.0
# 美術館の標準的な目線の高さ
EYE_LEVEL_INCHES = 57.0


@dataclass(frozen=True, slots=True)
class EffectivePpi:
    """表示スケールでの ppi。

    Attributes:
        value: rendered ピクセル / inch
        is_estimate: キャリブレーション未実施で推定値を使っている場合 True
    """

    value: float
    is_estimate: bool = False

    def __float__(self) -> float:
        return float(self.value)


def pixels_per_inch(reference_pixels: float, reference_inches: float) -> float:
    """基準線の長さから ppi を求める。

    Args:
        reference_pixels: 基準線の長さ [pixel]
        reference_inches: 基準線の実寸 [inch]

    Returns:
        pixels per inch

    Raises:
        InvalidReferenceLength: いずれかの長さが 0 以下の場合
    """
    if reference_inches <= 0:
        raise InvalidReferenceLength(f"基準線の実寸は正の数値である必要があります: {reference_inches}")
    if reference_pixels <= 0:
        raise InvalidReferenceLength(f"基準線の長さは正の数値である必要があります: {reference_pixels}")
    return reference_pixels / reference_inches


def reference_line_length(start: Point, end: Point) -> float:
    """ユーザーが引いた基準線の長さ [pixel]。"""
    return start.distance_to(end)


def inches_to_pixels(inches: float, ppi: float) -> float:
    return inches * ppi


def pixels_to_inches(pixels: float, ppi: float) -> float:
    """ピクセル量をインチに換算する。

    Raises:
        UncalibratedScale: ppi が 0 以下（未キャリブレーション）の場合
    """
    if ppi <= 0:
        raise UncalibratedScale(f"ppi が未設定のため実寸換算できません: ppi={ppi}")
    return pixels / ppi


def floor_y_from_corners(corners: Quadrilateral) -> float:
    """補正済み壁四隅の下辺から床ラインの Y 座標を求める。"""
    return (corners.bottom_left.y + corners.bottom_right.y) / 2


def calibrate(
    line_start: Point,
    line_end: Point,
    reference_inches: float,
    floor_y: float = 0.0,
    corners: Quadrilateral | None = None,
) -> Calibration:
    """キャリブレーションを実行して Calibration を生成する。

    すべての入力は intrinsic ピクセル空間で与えること。
    floor_y が未指定で corners がある場合は下辺から床ラインを推定する。
    """
    length = reference_line_length(line_start, line_end)
    ppi = pixels_per_inch(length, reference_inches)

    if floor_y <= 0 and corners is not None:
        floor_y = floor_y_from_corners(corners)

    logger.info(f"キャリブレーション完了: {length:.1f}px = {reference_inches}in -> {ppi:.3f} ppi, floor_y={floor_y:.1f}")
    return Calibration(ppi=ppi, floor_y=float(floor_y), corners=corners)


def render_scale_factor(container: Size, intrinsic: Size) -> ScaleFactor:
    """cover フィット（余白なしで領域を埋め、はみ出しはクロップ）のスケール係数。

    Raises:
        ValueError: サイズが 0 以下の場合
    """
    for name, size in (("container", container), ("intrinsic", intrinsic)):
        if size.width <= 0 or size.height <= 0:
            raise ValueError(f"{name} のサイズは正の数値である必要があります: {size}")

    return ScaleFactor(max(container.width / intrinsic.width, container.height / intrinsic.height))


def effective_ppi(
    calibration: Calibration | None,
    scale: ScaleFactor,
    container_height: float,
    assumed_wall_height_inches: float = DEFAULT_ASSUMED_WALL_HEIGHT_INCHES,
) -> EffectivePpi:
    """現在の表示サイズでの実効 ppi。

    キャリブレーションが無い場合は、画面の高さが assumed_wall_height_inches の
    壁に相当すると仮定した推定値を返し、is_estimate を立てる。
    """
    if calibration is not None and calibration.is_calibrated:
        return EffectivePpi(calibration.ppi * scale.value)

    if container_height <= 0 or assumed_wall_height_inches <= 0:
        raise UncalibratedScale("キャリブレーションが無く、表示領域の高さからも推定できません")

    estimate = container_height / assumed_wall_height_inches
    logger.warning(
        f"キャリブレーション未実施のため推定スケールを使用します（壁高 {assumed_wall_height_inches}in 仮定）: {estimate:.3f} ppi"
    )
    return EffectivePpi(estimate, is_estimate=True)


def effective_floor_y(calibration: Calibration | None, scale: ScaleFactor, canvas_height: float) -> RenderedPx:
    """rendered 空間での床ライン。床未設定ならキャンバス下端。"""
    if calibration is not None and calibration.has_floor:
        return scale.to_rendered(IntrinsicPx(calibration.floor_y))
    return RenderedPx(canvas_height)


def centerline_y(
    calibration: Calibration | None,
    scale: ScaleFactor,
    canvas_height: float,
    distance_from_floor_inches: float,
    *,
    assumed_wall_height_inches: float = DEFAULT_ASSUMED_WALL_HEIGHT_INCHES,
) -> float:
    """床から distance_from_floor_inches の高さにあたる rendered Y 座標。

    ppi は effective_ppi で rendered 空間の値として求める。

    Args:
        calibration: キャリブレーション（無ければ None）
        scale: 現在のスケール係数
        canvas_height: 表示領域の高さ [rendered pixel]
        distance_from_floor_inches: 床からの距離（通常 57in）
        assumed_wall_height_inches: 未キャリブレーション時に仮定する壁の高さ

    Returns:
        目線ラインの Y 座標 [rendered pixel]
    """
    ppi = effective_ppi(calibration, scale, canvas_height, assumed_wall_height_inches)
    floor = effective_floor_y(calibration, scale, canvas_height)
    offset = RenderedPx(inches_to_pixels(distance_from_floor_inches, ppi.value))
    return (floor - offset).value


class CalibrationEngine:
    """キャリブレーション関連の計算をまとめたファサード。"""

    pixels_per_inch = staticmethod(pixels_per_inch)
    reference_line_length = staticmethod(reference_line_length)
    inches_to_pixels = staticmethod(inches_to_pixels)
    pixels_to_inches = staticmethod(pixels_to_inches)
    calibrate = staticmethod(calibrate)
    floor_y_from_corners = staticmethod(floor_y_from_corners)
    render_scale_factor = staticmethod(render_scale_factor)
    effective_ppi = staticmethod(effective_ppi)
    effective_floor_y = staticmethod(effective_floor_y)
    centerline_y = staticmethod(centerline_y)
