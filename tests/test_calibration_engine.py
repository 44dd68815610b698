"""Unit tests for calibration engine."""

import pytest

from wallspace.calibration import (
    CalibrationEngine,
    EffectivePpi,
    RenderedPx,
    ScaleFactor,
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
from wallspace.exceptions import InvalidReferenceLength, UncalibratedScale
from wallspace.models import Calibration, Point, Size


class TestPixelsPerInch:
    """pixels_per_inchのテスト"""

    def test_reference_line(self):
        """200px の基準線が 80in なら 2.5 ppi"""
        assert pixels_per_inch(200.0, 80.0) == 2.5

    def test_end_to_end_conversion(self):
        """参照線の長さから ppi を求め、インチ換算する"""
        ppi = pixels_per_inch(200.0, 80.0)
        assert pixels_to_inches(400.0, ppi) == 160.0

    @pytest.mark.parametrize("inches", [0.0, -5.0])
    def test_invalid_reference_inches(self, inches):
        """参照長が 0 以下ならエラー"""
        with pytest.raises(InvalidReferenceLength):
            pixels_per_inch(200.0, inches)

    def test_invalid_reference_pixels(self):
        """参照線のピクセル長が 0 ならエラー"""
        with pytest.raises(InvalidReferenceLength):
            pixels_per_inch(0.0, 80.0)


class TestUnitConversion:
    """inch/pixel 換算のテスト"""

    def test_inches_to_pixels(self):
        """インチからピクセルへの換算"""
        assert inches_to_pixels(57.0, 10.0) == 570.0

    @pytest.mark.parametrize("value", [0.0, 1.0, 3.5, 57.0, 123.456])
    @pytest.mark.parametrize("ppi", [0.37, 2.5, 96.0])
    def test_scale_invariance(self, value, ppi):
        """往復換算で値が変わらない"""
        assert pixels_to_inches(inches_to_pixels(value, ppi), ppi) == pytest.approx(value)

    @pytest.mark.parametrize("ppi", [0.0, -1.0])
    def test_uncalibrated(self, ppi):
        """ppi が 0 以下なら UncalibratedScale"""
        with pytest.raises(UncalibratedScale):
            pixels_to_inches(100.0, ppi)


class TestCalibrate:
    """calibrateのテスト"""

    def test_reference_line_length(self):
        """参照線のユークリッド長"""
        assert reference_line_length(Point(0, 0), Point(120, 160)) == 200.0

    def test_calibrate(self):
        """参照線からキャリブレーションを作成する"""
        calibration = calibrate(Point(0, 0), Point(120, 160), 80.0, floor_y=900.0)
        assert calibration == Calibration(ppi=2.5, floor_y=900.0)

    def test_calibrate_floor_from_corners(self, wall_quad):
        """壁の四隅から床ラインを設定する"""
        calibration = calibrate(Point(0, 0), Point(0, 100), 40.0, corners=wall_quad)
        assert calibration.ppi == 2.5
        assert calibration.floor_y == pytest.approx(670.0)
        assert calibration.corners == wall_quad

    def test_floor_y_from_corners(self, wall_quad):
        """床ラインは下側2頂点の平均"""
        assert floor_y_from_corners(wall_quad) == pytest.approx(670.0)

    def test_zero_length_line(self):
        """長さ0の参照線はエラー"""
        with pytest.raises(InvalidReferenceLength):
            calibrate(Point(5, 5), Point(5, 5), 10.0)


class TestRenderScaleFactor:
    """render_scale_factorのテスト"""

    def test_cover_fit_uses_larger_ratio(self):
        """cover フィットでは大きい方の比率を使う"""
        scale = render_scale_factor(Size(1200, 800), Size(2400, 1200))
        assert scale.value == pytest.approx(800 / 1200)

    def test_width_dominant(self):
        """横方向の比率が大きい場合"""
        scale = render_scale_factor(Size(1000, 300), Size(500, 500))
        assert scale.value == 2.0

    @pytest.mark.parametrize(
        ("container", "intrinsic"),
        [(Size(0, 100), Size(100, 100)), (Size(100, 100), Size(100, -1))],
    )
    def test_invalid_sizes(self, container, intrinsic):
        """不正なサイズは ValueError"""
        with pytest.raises(ValueError, match="サイズ"):
            render_scale_factor(container, intrinsic)


class TestEffectivePpi:
    """effective_ppiのテスト"""

    def test_calibrated(self, calibration):
        """キャリブレーション済みなら推定ではない"""
        result = effective_ppi(calibration, ScaleFactor(0.5), 960.0)
        assert result == EffectivePpi(1.25, is_estimate=False)

    def test_visual_estimate_without_calibration(self):
        """未キャリブレーション時は壁高 96in を仮定して推定する"""
        result = effective_ppi(None, ScaleFactor(1.0), 960.0)
        assert result.value == 10.0
        assert result.is_estimate is True

    def test_zero_ppi_calibration_falls_back(self):
        """ppi 0 のキャリブレーションは推定にフォールバックする"""
        result = effective_ppi(Calibration(ppi=0.0), ScaleFactor(2.0), 480.0, assumed_wall_height_inches=120.0)
        assert result.value == 4.0
        assert result.is_estimate is True

    def test_no_estimate_possible(self):
        """推定もできない場合は UncalibratedScale"""
        with pytest.raises(UncalibratedScale):
            effective_ppi(None, ScaleFactor(1.0), 0.0)


class TestCenterline:
    """centerline_yのテスト"""

    def test_floor_unset_uses_canvas_bottom(self):
        """floor_y 未設定: 960 - 57 * 10 = 390"""
        result = centerline_y(Calibration(ppi=10.0), ScaleFactor(1.0), 960.0, 57.0)
        assert result == 390.0

    def test_without_calibration(self):
        """未キャリブレーション: 推定 ppi 960 / 96 = 10"""
        result = centerline_y(None, ScaleFactor(1.0), 960.0, 57.0)
        assert result == 390.0

    def test_floor_scaled_to_rendered(self, calibration):
        """床ライン 900 (intrinsic) x 0.5 = 450、57in x 1.25ppi = 71.25"""
        assert centerline_y(calibration, ScaleFactor(0.5), 960.0, 57.0) == pytest.approx(378.75)

    def test_ppi_scaled_with_floor(self):
        """床 500 x 2 = 1000、ppi 10 x 2 = 20 なので 1000 - 57 * 20 = -140"""
        result = centerline_y(Calibration(ppi=10.0, floor_y=500.0), ScaleFactor(2.0), 960.0, 57.0)
        assert result == -140.0

    def test_rejects_positional_ppi(self):
        """ppi を外から渡すことはできない"""
        cal = Calibration(ppi=10.0, floor_y=500.0)
        with pytest.raises(TypeError):
            centerline_y(cal, ScaleFactor(2.0), 960.0, 57.0, cal.ppi)

    def test_assumed_wall_height(self):
        """推定時の壁高を変更: 960 / 120 = 8ppi、960 - 57 * 8 = 504"""
        result = centerline_y(None, ScaleFactor(1.0), 960.0, 57.0, assumed_wall_height_inches=120.0)
        assert result == 504.0

    def test_distance_is_parameter(self):
        """距離 60in: 960 - 60 * 10 = 360"""
        result = centerline_y(None, ScaleFactor(1.0), 960.0, 60.0)
        assert result == 360.0

    def test_effective_floor_is_rendered(self, calibration):
        """床ラインは rendered 空間の値になる"""
        floor = effective_floor_y(calibration, ScaleFactor(2.0), 500.0)
        assert isinstance(floor, RenderedPx)
        assert floor.value == 1800.0


def test_facade_exposes_operations():
    """ファサードから各操作を呼べる"""
    assert CalibrationEngine.pixels_per_inch(200.0, 80.0) == 2.5
    assert CalibrationEngine.pixels_to_inches(400.0, 2.5) == 160.0
