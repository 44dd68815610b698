"""Intrinsic / rendered pixel spaces.

Calibration values live in the uploaded image's native resolution (intrinsic),
while layout runs in on-screen pixels (rendered). The two are kept as distinct
types so that crossing the boundary always goes through ScaleFactor.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering

from wallspace.models.data_models import Point


@total_ordering
@dataclass(frozen=True, slots=True)
class _PixelLength:
    value: float

    def _check(self, other: object) -> _PixelLength:
        if type(other) is not type(self):
            raise TypeError(
                f"{type(self).__name__} と {type(other).__name__} は混在できません。ScaleFactor で変換してください"
            )
        return other  # type: ignore[return-value]

    def __add__(self, other: object):
        return type(self)(self.value + self._check(other).value)

    def __sub__(self, other: object):
        return type(self)(self.value - self._check(other).value)

    def __mul__(self, k: float):
        if isinstance(k, _PixelLength):
            raise TypeError("ピクセル長同士の積は定義されていません")
        return type(self)(self.value * k)

    __rmul__ = __mul__

    def __truediv__(self, k: float):
        if isinstance(k, _PixelLength):
            return self.value / self._check(k).value
        return type(self)(self.value / k)

    def __neg__(self):
        return type(self)(-self.value)

    def __lt__(self, other: object) -> bool:
        return self.value < self._check(other).value

    def __float__(self) -> float:
        return float(self.value)


class IntrinsicPx(_PixelLength):
    """元画像の解像度基準のピクセル量。"""

    __slots__ = ()


class RenderedPx(_PixelLength):
    """画面上に描画された状態でのピクセル量。"""

    __slots__ = ()


@dataclass(frozen=True, slots=True)
class ScaleFactor:
    """rendered / intrinsic の比率。

    ビューポートのサイズが変わるたびに作り直すこと（キャッシュしない）。
    """

    value: float

    def __post_init__(self) -> None:
        if not self.value > 0:
            raise ValueError(f"スケール係数は正の数値である必要があります: {self.value}")

    def to_rendered(self, length: IntrinsicPx) -> RenderedPx:
        if not isinstance(length, IntrinsicPx):
            raise TypeError(f"IntrinsicPx が必要です: {type(length).__name__}")
        return RenderedPx(length.value * self.value)

    def to_intrinsic(self, length: RenderedPx) -> IntrinsicPx:
        if not isinstance(length, RenderedPx):
            raise TypeError(f"RenderedPx が必要です: {type(length).__name__}")
        return IntrinsicPx(length.value / self.value)

    def point_to_rendered(self, point: Point) -> Point:
        """intrinsic 座標の点を rendered 座標へ。"""
        return Point(point.x * self.value, point.y * self.value)

    def point_to_intrinsic(self, point: Point) -> Point:
        """rendered 座標の点を intrinsic 座標へ。"""
        return Point(point.x / self.value, point.y / self.value)

    def __float__(self) -> float:
        return float(self.value)
