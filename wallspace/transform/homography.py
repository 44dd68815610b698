"""ホモグラフィ変換モジュール。

写真上で歪んだ壁の四隅（src）と、正面から見た平面長方形（dst）の間の
射影変換を4点対応から求め、双方向に点を写像します。
"""

from __future__ import annotations

from collections.abc import Iterable
import logging
from typing import Any, Self

import numpy as np

from wallspace.exceptions import DegenerateQuadrilateral, ProjectiveSingularity
from wallspace.models.data_models import Point, Quadrilateral

logger = logging.getLogger(__name__)

PIVOT_EPSILON = 1e-10
W_EPSILON = 1e-12


def solve_linear_system(a: np.ndarray, b: np.ndarray, epsilon: float = PIVOT_EPSILON) -> np.ndarray:
    """部分ピボット選択付きガウス消去法で Ax = b を解く。

    前進消去の各列で絶対値最大の行をピボットに選び、後退代入で解を得る。
    入力配列は変更しない。

    Args:
        a: n x n 係数行列
        b: 長さ n の右辺ベクトル
        epsilon: ピボットとして許容する絶対値の下限

    Returns:
        解ベクトル x

    Raises:
        ValueError: 行列形状が不正な場合
        DegenerateQuadrilateral: ピボットが epsilon 未満（特異）の場合
    """
    A = np.array(a, dtype=np.float64)
    B = np.array(b, dtype=np.float64).reshape(-1)
    n = A.shape[0]

    if A.ndim != 2 or A.shape != (n, n) or B.shape != (n,):
        raise ValueError(f"係数行列は n x n、右辺は長さ n である必要があります: {A.shape}, {B.shape}")

    for col in range(n):
        pivot_row = col + int(np.argmax(np.abs(A[col:, col])))
        if abs(A[pivot_row, col]) < epsilon:
            raise DegenerateQuadrilateral(f"ピボットが小さすぎます（列 {col}, 値 {A[pivot_row, col]:.3e}）")

        if pivot_row != col:
            A[[col, pivot_row]] = A[[pivot_row, col]]
            B[[col, pivot_row]] = B[[pivot_row, col]]

        for row in range(col + 1, n):
            factor = A[row, col] / A[col, col]
            A[row, col:] -= factor * A[col, col:]
            B[row] -= factor * B[col]

    x = np.zeros(n, dtype=np.float64)
    for row in range(n - 1, -1, -1):
        x[row] = (B[row] - A[row, row + 1 :] @ x[row + 1 :]) / A[row, row]
    return x


def compute_homography(src: Quadrilateral, dst: Quadrilateral) -> np.ndarray:
    """src の4点を dst の4点へ写すホモグラフィ行列 (3x3, h33=1) を求める。

    Raises:
        DegenerateQuadrilateral: src / dst が退化している場合
    """
    for name, quad in (("src", src), ("dst", dst)):
        if quad.is_degenerate():
            raise DegenerateQuadrilateral(f"{name} の四角形が退化しています（重複点または3点共線）: {quad.to_list()}")

    A = np.zeros((8, 8), dtype=np.float64)
    b = np.zeros(8, dtype=np.float64)
    for i, (s, d) in enumerate(zip(src, dst, strict=True)):
        A[2 * i] = [s.x, s.y, 1.0, 0.0, 0.0, 0.0, -d.x * s.x, -d.x * s.y]
        A[2 * i + 1] = [0.0, 0.0, 0.0, s.x, s.y, 1.0, -d.y * s.x, -d.y * s.y]
        b[2 * i] = d.x
        b[2 * i + 1] = d.y

    h = solve_linear_system(A, b)
    return np.append(h, 1.0).reshape(3, 3)


class HomographyTransformer:
    """ホモグラフィ変換器。

    歪んだ写真座標と平面座標の間で点を相互に変換します。
    順方向（src→dst）と逆方向（dst→src）の行列はそれぞれ独立に解きます。
    """

    def __init__(self, src: Quadrilateral, dst: Quadrilateral):
        """初期化。

        Args:
            src: 写真上の壁の四隅（左上・右上・右下・左下）
            dst: 平面長方形の四隅（同順）

        Raises:
            DegenerateQuadrilateral: 四角形が退化している場合
        """
        self.src = src
        self.dst = dst
        self.matrix = compute_homography(src, dst)
        self.inverse_matrix = compute_homography(dst, src)

        logger.debug(f"HomographyTransformer initialized with matrix:\n{self.matrix}")

    @classmethod
    def from_rectangle(cls, src: Quadrilateral, width: float, height: float) -> Self:
        """src を原点基準の width x height 長方形へ写す変換器を作成。"""
        return cls(src, Quadrilateral.rectangle(width, height))

    def to_flat(self, x: float, y: float) -> Point:
        """歪んだ写真座標 → 平面座標。"""
        return _apply(self.matrix, x, y)

    def to_distorted(self, x: float, y: float) -> Point:
        """平面座標 → 歪んだ写真座標。"""
        return _apply(self.inverse_matrix, x, y)

    def to_flat_many(self, points: Iterable[Point]) -> list[Point]:
        return _apply_batch(self.matrix, points)

    def to_distorted_many(self, points: Iterable[Point]) -> list[Point]:
        return _apply_batch(self.inverse_matrix, points)

    def get_info(self) -> dict[str, Any]:
        """変換器の情報を返す（デバッグ用）。"""
        return {
            "method": "homography",
            "matrix": self.matrix.tolist(),
            "inverse_matrix": self.inverse_matrix.tolist(),
            "src": self.src.to_list(),
            "dst": self.dst.to_list(),
        }


def _apply(H: np.ndarray, x: float, y: float) -> Point:
    a, b, c = H[0]
    d, e, f = H[1]
    g, h, i = H[2]

    w = g * x + h * y + i
    if abs(w) < W_EPSILON:
        raise ProjectiveSingularity(f"点 ({x}, {y}) は無限遠に写像されます（w={w:.3e}）")

    return Point(float((a * x + b * y + c) / w), float((d * x + e * y + f) / w))


def _apply_batch(H: np.ndarray, points: Iterable[Point]) -> list[Point]:
    pts = np.array([[p.x, p.y] for p in points], dtype=np.float64)
    if len(pts) == 0:
        return []

    pts_h = np.hstack([pts, np.ones((len(pts), 1))])
    transformed = (H @ pts_h.T).T
    w = transformed[:, 2]
    bad = np.abs(w) < W_EPSILON
    if np.any(bad):
        idx = int(np.argmax(bad))
        raise ProjectiveSingularity(f"点 {tuple(pts[idx])} は無限遠に写像されます（w={w[idx]:.3e}）")

    xy = transformed[:, :2] / w[:, None]
    return [Point(float(px), float(py)) for px, py in xy]
