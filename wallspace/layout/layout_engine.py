"""アート作品の配置計算モジュール。

作品（矩形）の集合と配置戦略から新しい位置を計算します。すべての関数は純粋で、
入力を変更せず、入力と同じ順序・同じ id の新しいリストを返します。
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import IntEnum
import logging

from wallspace.calibration.calibration_engine import inches_to_pixels
from wallspace.exceptions import UnknownTemplate
from wallspace.models.data_models import ArtPiece

logger = logging.getLogger(__name__)

# 斜め配置で次の作品へ進む割合（幅方向は意図的に重ねる）
STAIRS_STEP_X = 0.8
STAIRS_STEP_Y = 0.5
# モザイク斜め配置の開始位置オフセット（作品1点あたり）[pixel]
STAIRS_ORIGIN_OFFSET_X = 100.0
STAIRS_ORIGIN_OFFSET_Y = 50.0


class GridVariant(IntEnum):
    BALANCED = 0
    ROW = 1
    COLUMN = 2

    @classmethod
    def from_index(cls, index: int) -> GridVariant:
        return cls(index % 3)


class MosaicVariant(IntEnum):
    QUADRANT = 0
    PYRAMID = 1
    STAIRS = 2

    @classmethod
    def from_index(cls, index: int) -> MosaicVariant:
        return cls(index % 3)


@dataclass(frozen=True, slots=True)
class TemplateConfig:
    """テンプレート配置の設定。

    Attributes:
        start_x: 配置の基準 X（row / big-center では中心 X）
        start_y: 配置の基準 Y（上端）
        gap_inches: 作品間の間隔 [inch]
        ppi: 実効 ppi（rendered 空間）
        wall_width: 壁（表示領域）の幅。row テンプレートの中心に使う
    """

    start_x: float
    start_y: float
    gap_inches: float
    ppi: float
    wall_width: float | None = None


class VariantCycler:
    """戦略ごとのバリエーション番号をラウンドロビンで払い出す。

    呼び出し側（UI）が保持する状態で、エンジン自体は状態を持たない。
    """

    def __init__(self, size: int = 3):
        self.size = size
        self._counts: dict[str, int] = defaultdict(int)

    def next(self, strategy: str) -> int:
        variant = self._counts[strategy] % self.size
        self._counts[strategy] += 1
        return variant

    def reset(self, strategy: str | None = None) -> None:
        if strategy is None:
            self._counts.clear()
        else:
            self._counts.pop(strategy, None)


def _gap_pixels(gap_inches: float, ppi: float) -> float:
    if ppi <= 0:
        raise ValueError(f"ppi は正の数値である必要があります: {ppi}")
    if gap_inches < 0:
        raise ValueError(f"gap_inches は非負の数値である必要があります: {gap_inches}")
    return inches_to_pixels(gap_inches, ppi)


def _by_area_desc(items: Sequence[ArtPiece]) -> list[int]:
    """面積の降順に並べたインデックス（同面積は入力順）。"""
    return sorted(range(len(items)), key=lambda i: -items[i].area)


def _in_input_order(items: Sequence[ArtPiece], placed: dict[int, ArtPiece]) -> list[ArtPiece]:
    return [placed[i] for i in range(len(items))]


def _line(items: Sequence[ArtPiece], order: Sequence[int], x: float, y: float, gap: float) -> dict[int, ArtPiece]:
    placed = {}
    for i in order:
        placed[i] = items[i].moved_to(x, y)
        x += items[i].width + gap
    return placed


def _stack(items: Sequence[ArtPiece], order: Sequence[int], x: float, y: float, gap: float) -> dict[int, ArtPiece]:
    placed = {}
    for i in order:
        placed[i] = items[i].moved_to(x, y)
        y += items[i].height + gap
    return placed


def _stairs(items: Sequence[ArtPiece], x: float, y: float) -> list[ArtPiece]:
    placed = []
    for item in items:
        placed.append(item.moved_to(x, y))
        x += item.width * STAIRS_STEP_X
        y += item.height * STAIRS_STEP_Y
    return placed


def arrange_uniform(
    items: Sequence[ArtPiece],
    start_x: float,
    gap_inches: float,
    ppi: float,
    y: float | None = None,
) -> list[ArtPiece]:
    """左から右へ一定間隔で並べる。

    y を省略すると各作品の Y は変更しない（後段で目線ラインに揃える想定）。
    """
    if not items:
        return []
    gap = _gap_pixels(gap_inches, ppi)

    placed = []
    x = start_x
    for item in items:
        placed.append(item.moved_to(x, y))
        x += item.width + gap
    return placed


def arrange_grid(
    items: Sequence[ArtPiece],
    start_x: float,
    start_y: float,
    gap_inches: float,
    ppi: float,
    variant: int = 0,
) -> list[ArtPiece]:
    """グリッド配置。

    Args:
        items: 作品リスト
        start_x: 左端 X
        start_y: 上端 Y
        gap_inches: 間隔 [inch]
        ppi: 実効 ppi
        variant: 0: 2段バランス, 1: 1行, 2: 1列（3 で剰余を取る）

    Returns:
        配置後の作品リスト（入力順）
    """
    if not items:
        return []
    gap = _gap_pixels(gap_inches, ppi)
    mode = GridVariant.from_index(variant)
    order = range(len(items))

    if mode is GridVariant.BALANCED:
        first_row_count = (len(items) + 1) // 2
        row1 = order[:first_row_count]
        row2 = order[first_row_count:]
        row2_y = start_y + max(items[i].height for i in row1) + gap
        placed = _line(items, row1, start_x, start_y, gap)
        placed.update(_line(items, row2, start_x, row2_y, gap))
    elif mode is GridVariant.ROW:
        placed = _line(items, order, start_x, start_y, gap)
    else:
        placed = _stack(items, order, start_x, start_y, gap)

    logger.debug(f"arrange_grid: {len(items)}点, variant={mode.name}")
    return _in_input_order(items, placed)


def _mosaic_quadrant(items: Sequence[ArtPiece], center_x: float, center_y: float, gap: float) -> list[ArtPiece]:
    main_idx, *others = _by_area_desc(items)
    main = items[main_idx]
    placed = {main_idx: main.moved_to(center_x - main.width / 2, center_y - main.height / 2)}

    main_right = center_x + main.width / 2 + gap
    main_left = center_x - main.width / 2 - gap
    main_top = center_y - main.height / 2 - gap
    main_bottom = center_y + main.height / 2 + gap

    for n, i in enumerate(others):
        item = items[i]
        side = n % 4
        if side == 0:
            x, y = main_right, center_y - item.height / 2
        elif side == 1:
            x, y = main_left - item.width, center_y - item.height / 2
        elif side == 2:
            x, y = center_x - item.width / 2, main_top - item.height
        else:
            x, y = center_x - item.width / 2, main_bottom
        placed[i] = item.moved_to(x, y)

    return _in_input_order(items, placed)


def _mosaic_pyramid(items: Sequence[ArtPiece], center_x: float, center_y: float, gap: float) -> list[ArtPiece]:
    main_idx, *others = _by_area_desc(items)
    main = items[main_idx]
    placed = {main_idx: main.moved_to(center_x - main.width / 2, center_y)}

    # 左右1組で1段。各段は直前の段の上端から gap だけ上に積む
    row_bottom = center_y - gap
    for start in range(0, len(others), 2):
        row_top = row_bottom
        for n, i in enumerate(others[start : start + 2]):
            item = items[i]
            x = center_x - item.width - gap if n == 0 else center_x + gap
            y = row_bottom - item.height
            placed[i] = item.moved_to(x, y)
            row_top = min(row_top, y)
        row_bottom = row_top - gap

    return _in_input_order(items, placed)


def arrange_mosaic(
    items: Sequence[ArtPiece],
    center_x: float,
    center_y: float,
    gap_inches: float,
    ppi: float,
    variant: int = 0,
) -> list[ArtPiece]:
    """モザイク配置。最大面積の作品をアンカーにして周囲に並べる。

    variant: 0: 上下左右, 1: ピラミッド, 2: 階段（3 で剰余を取る）
    """
    if not items:
        return []
    gap = _gap_pixels(gap_inches, ppi)
    mode = MosaicVariant.from_index(variant)

    if mode is MosaicVariant.QUADRANT:
        placed = _mosaic_quadrant(items, center_x, center_y, gap)
    elif mode is MosaicVariant.PYRAMID:
        placed = _mosaic_pyramid(items, center_x, center_y, gap)
    else:
        n = len(items)
        placed = _stairs(
            items,
            center_x - n * STAIRS_ORIGIN_OFFSET_X,
            center_y - n * STAIRS_ORIGIN_OFFSET_Y,
        )

    logger.debug(f"arrange_mosaic: {len(items)}点, variant={mode.name}")
    return placed


def _template_row(items: Sequence[ArtPiece], config: TemplateConfig, gap: float) -> list[ArtPiece]:
    total_width = sum(item.width for item in items) + (len(items) - 1) * gap
    center_x = config.wall_width / 2 if config.wall_width else config.start_x
    return list(_line(items, range(len(items)), center_x - total_width / 2, config.start_y, gap).values())


def _template_grid(items: Sequence[ArtPiece], config: TemplateConfig, gap: float) -> list[ArtPiece]:
    return arrange_grid(items, config.start_x, config.start_y, config.gap_inches, config.ppi, GridVariant.BALANCED)


def _template_big_left(items: Sequence[ArtPiece], config: TemplateConfig, gap: float) -> list[ArtPiece]:
    main_idx, *others = _by_area_desc(items)
    main = items[main_idx]
    placed = {main_idx: main.moved_to(config.start_x, config.start_y)}
    placed.update(_stack(items, others, config.start_x + main.width + gap, config.start_y, gap))
    return _in_input_order(items, placed)


def _template_big_right(items: Sequence[ArtPiece], config: TemplateConfig, gap: float) -> list[ArtPiece]:
    main_idx, *others = _by_area_desc(items)
    main = items[main_idx]
    placed = _stack(items, others, config.start_x, config.start_y, gap)

    main_x = config.start_x
    if others:
        main_x += max(items[i].width for i in others) + gap
    placed[main_idx] = main.moved_to(main_x, config.start_y)
    return _in_input_order(items, placed)


def _template_big_center(items: Sequence[ArtPiece], config: TemplateConfig, gap: float) -> list[ArtPiece]:
    main_idx, *others = _by_area_desc(items)
    main = items[main_idx]
    center_x = config.start_x
    placed = {main_idx: main.moved_to(center_x - main.width / 2, config.start_y)}

    left_x = center_x - main.width / 2 - gap
    right_x = center_x + main.width / 2 + gap
    placed.update(_stack(items, others[0::2], left_x, config.start_y, gap))
    placed.update(_stack(items, others[1::2], right_x, config.start_y, gap))

    # 左列は右端を left_x に揃える
    for i in others[0::2]:
        placed[i] = placed[i].moved_to(x=left_x - items[i].width)
    return _in_input_order(items, placed)


def _template_stairs(items: Sequence[ArtPiece], config: TemplateConfig, gap: float) -> list[ArtPiece]:
    return _stairs(items, config.start_x, config.start_y)


TEMPLATES: dict[str, Callable[[Sequence[ArtPiece], TemplateConfig, float], list[ArtPiece]]] = {
    "row": _template_row,
    "grid": _template_grid,
    "big-left": _template_big_left,
    "big-right": _template_big_right,
    "big-center": _template_big_center,
    "stairs": _template_stairs,
}
TEMPLATE_NAMES = tuple(TEMPLATES)


def apply_template(items: Sequence[ArtPiece], template_name: str, config: TemplateConfig) -> list[ArtPiece]:
    """名前付きテンプレートを適用する。

    Raises:
        UnknownTemplate: テンプレート名が未知の場合
    """
    template = TEMPLATES.get(template_name)
    if template is None:
        raise UnknownTemplate(template_name, TEMPLATE_NAMES)
    if not items:
        return []

    gap = _gap_pixels(config.gap_inches, config.ppi)
    placed = template(items, config, gap)
    logger.debug(f"apply_template: {template_name}, {len(items)}点")
    return placed


def align_to_centerline(items: Sequence[ArtPiece], centerline_y: float) -> list[ArtPiece]:
    """各作品の縦中心を目線ライン上に揃える（X は変更しない）。"""
    return [item.moved_to(y=centerline_y - item.height / 2) for item in items]


class LayoutEngine:
    """配置計算をまとめたファサード。"""

    arrange_uniform = staticmethod(arrange_uniform)
    arrange_grid = staticmethod(arrange_grid)
    arrange_mosaic = staticmethod(arrange_mosaic)
    apply_template = staticmethod(apply_template)
    align_to_centerline = staticmethod(align_to_centerline)
