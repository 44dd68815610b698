"""壁面ジオメトリで扱う値オブジェクト。

すべて frozen dataclass で、レイアウト操作は新しいインスタンスを返す。
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, replace
import math
from typing import Any, Self

COLLINEAR_EPSILON = 1e-9


@dataclass(frozen=True, slots=True)
class Point:
    """2次元座標。単位は文脈依存（intrinsic / rendered ピクセル）。"""

    x: float
    y: float

    def distance_to(self, other: Point) -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True, slots=True)
class Size:
    """幅と高さ [pixel]。"""

    width: float
    height: float


@dataclass(frozen=True, slots=True)
class Box:
    """軸平行な矩形 (x, y, width, height)。原点は左上、y は下向き。"""

    x: float
    y: float
    width: float
    height: float

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2

    @classmethod
    def from_value(cls, value: Mapping[str, Any] | Sequence[float]) -> Self:
        """{x, y, width, height} 辞書または [x, y, w, h] 配列から生成。"""
        if isinstance(value, Mapping):
            return cls(
                x=float(value["x"]),
                y=float(value["y"]),
                width=float(value["width"]),
                height=float(value["height"]),
            )
        if len(value) != 4:
            raise ValueError(f"bbox は [x, y, w, h] の4要素である必要があります: {value!r}")
        x, y, w, h = value
        return cls(float(x), float(y), float(w), float(h))


@dataclass(frozen=True, slots=True)
class Quadrilateral:
    """順序付き4頂点（左上・右上・右下・左下）。"""

    top_left: Point
    top_right: Point
    bottom_right: Point
    bottom_left: Point

    def __iter__(self) -> Iterator[Point]:
        return iter((self.top_left, self.top_right, self.bottom_right, self.bottom_left))

    def __len__(self) -> int:
        return 4

    @property
    def points(self) -> tuple[Point, Point, Point, Point]:
        return (self.top_left, self.top_right, self.bottom_right, self.bottom_left)

    @classmethod
    def from_points(cls, points: Sequence[Point | Sequence[float] | Mapping[str, float]]) -> Self:
        """4点のシーケンスから生成。

        Args:
            points: Point、(x, y) タプル、または {"x", "y"} 辞書の4要素

        Raises:
            ValueError: 要素数が4でない場合
        """
        if len(points) != 4:
            raise ValueError(f"四角形には4点が必要です: {len(points)}点")
        return cls(*(_to_point(p) for p in points))

    @classmethod
    def rectangle(cls, width: float, height: float, x: float = 0.0, y: float = 0.0) -> Self:
        """軸平行な長方形を生成。"""
        return cls(
            Point(x, y),
            Point(x + width, y),
            Point(x + width, y + height),
            Point(x, y + height),
        )

    def is_degenerate(self, epsilon: float = COLLINEAR_EPSILON) -> bool:
        """重複点、または3点が共線なら True。"""
        pts = self.points
        for i in range(4):
            for j in range(i + 1, 4):
                if pts[i].distance_to(pts[j]) <= epsilon:
                    return True

        # 4C3 の各三角形の面積で共線判定（辺長で正規化）
        scale = max(pts[i].distance_to(pts[j]) for i in range(4) for j in range(i + 1, 4))
        for i, j, k in ((0, 1, 2), (0, 1, 3), (0, 2, 3), (1, 2, 3)):
            a, b, c = pts[i], pts[j], pts[k]
            cross = (b.x - a.x) * (c.y - a.y) - (b.y - a.y) * (c.x - a.x)
            if abs(cross) <= epsilon * scale * scale:
                return True
        return False

    def to_list(self) -> list[dict[str, float]]:
        return [{"x": p.x, "y": p.y} for p in self.points]


@dataclass(frozen=True, slots=True)
class ArtPiece:
    """壁に掛けるアート作品（矩形）。

    Attributes:
        id: 呼び出し側が前後の位置をアニメーションするための識別子
        x: 左上 X [pixel]
        y: 左上 Y [pixel]
        width: 幅 [pixel]
        height: 高さ [pixel]
        real_width_inches: 実寸幅 [inch]（任意）
        real_height_inches: 実寸高さ [inch]（任意）
        image_url: 画像URL（任意、コアでは参照しない）
    """

    id: str | int | None
    x: float
    y: float
    width: float
    height: float
    real_width_inches: float | None = None
    real_height_inches: float | None = None
    image_url: str | None = None

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2

    def moved_to(self, x: float | None = None, y: float | None = None) -> ArtPiece:
        """位置だけを差し替えた新しいインスタンスを返す。"""
        return replace(
            self,
            x=self.x if x is None else float(x),
            y=self.y if y is None else float(y),
        )

    def translated(self, dx: float, dy: float) -> ArtPiece:
        return replace(self, x=self.x + dx, y=self.y + dy)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Self:
        """永続化された辞書から生成。"""
        real_w = data.get("real_width_inches")
        real_h = data.get("real_height_inches")
        return cls(
            id=data.get("id"),
            x=float(data.get("x", 0.0)),
            y=float(data.get("y", 0.0)),
            width=float(data["width"]),
            height=float(data["height"]),
            real_width_inches=None if real_w is None else float(real_w),
            real_height_inches=None if real_h is None else float(real_h),
            image_url=data.get("image_url"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "real_width_inches": self.real_width_inches,
            "real_height_inches": self.real_height_inches,
            "image_url": self.image_url,
        }


@dataclass(frozen=True, slots=True)
class Calibration:
    """壁画像のキャリブレーション結果（すべて intrinsic ピクセル空間）。

    Attributes:
        ppi: pixels per inch
        floor_y: 床ラインの Y 座標。0 は「未設定」
        corners: 補正済み壁の四隅（任意）
    """

    ppi: float
    floor_y: float = 0.0
    corners: Quadrilateral | None = None

    @property
    def has_floor(self) -> bool:
        return self.floor_y > 0

    @property
    def is_calibrated(self) -> bool:
        return self.ppi > 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Self:
        corners = data.get("corners")
        return cls(
            ppi=float(data.get("reference_ratio_ppi", data.get("ppi", 0.0)) or 0.0),
            floor_y=float(data.get("floor_y") or 0.0),
            corners=Quadrilateral.from_points(corners) if corners else None,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "reference_ratio_ppi": self.ppi,
            "floor_y": self.floor_y,
            "corners": self.corners.to_list() if self.corners else None,
        }


@dataclass(frozen=True, slots=True)
class AnchorBox:
    """外部の物体検出器が返した家具などのバウンディングボックス。

    Attributes:
        label: 検出クラス名（"bed", "couch" など）
        bbox: バウンディングボックス
        score: 信頼度スコア (0.0-1.0)
    """

    label: str
    bbox: Box
    score: float

    @property
    def top(self) -> float:
        return self.bbox.top

    @property
    def center_x(self) -> float:
        return self.bbox.center_x

    @classmethod
    def from_detection(cls, data: Mapping[str, Any]) -> Self:
        """検出器の {"class", "score", "bbox"} 形式から生成。"""
        label = data.get("class", data.get("label"))
        if label is None:
            raise ValueError(f"検出結果にクラス名がありません: {data!r}")
        return cls(
            label=str(label),
            bbox=Box.from_value(data["bbox"]),
            score=float(data.get("score", 0.0)),
        )


def _to_point(value: Point | Sequence[float] | Mapping[str, float]) -> Point:
    if isinstance(value, Point):
        return value
    if isinstance(value, Mapping):
        return Point(float(value["x"]), float(value["y"]))
    x, y = value
    return Point(float(x), float(y))
