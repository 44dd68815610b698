"""壁面ジオメトリエンジンの例外定義。

すべての例外は ValueError を継承するため、CLI 側では ValueError として
まとめて捕捉できる。
"""

from __future__ import annotations


class WallSpaceError(ValueError):
    """wallspace の基底例外。"""


class DegenerateQuadrilateral(WallSpaceError):
    """四角形が退化している（重複点・3点共線）ためホモグラフィが解けない。"""


class ProjectiveSingularity(WallSpaceError):
    """射影変換の同次座標 w がほぼ 0 となり、点を写像できない。"""


class InvalidReferenceLength(WallSpaceError):
    """キャリブレーション基準線の長さが不正（0 以下）。"""


class UncalibratedScale(WallSpaceError):
    """ppi が未設定（0 以下）のため実寸換算できない。"""


class EmptyPieceSet(WallSpaceError):
    """少なくとも1つのアート作品を必要とする操作に空集合が渡された。"""


class UnknownTemplate(WallSpaceError):
    """未知のテンプレート名。"""

    def __init__(self, name: str, available: tuple[str, ...] = ()):
        self.name = name
        self.available = available
        message = f"未知のテンプレートです: {name!r}"
        if available:
            message += f"（利用可能: {', '.join(available)}）"
        super().__init__(message)


# アンカー配置で使われる呼称
NoArtPlaced = EmptyPieceSet

__all__ = [
    "DegenerateQuadrilateral",
    "EmptyPieceSet",
    "InvalidReferenceLength",
    "NoArtPlaced",
    "ProjectiveSingularity",
    "UncalibratedScale",
    "UnknownTemplate",
    "WallSpaceError",
]
