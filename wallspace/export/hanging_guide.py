"""Hanging guide measurements and export."""

from __future__ import annotations

import csv
from dataclasses import asdict, dataclass
import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from wallspace.calibration.calibration_engine import pixels_to_inches
from wallspace.exceptions import UncalibratedScale

if TYPE_CHECKING:
    from collections.abc import Sequence

    from wallspace.models.data_models import ArtPiece

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class HangingInstruction:
    """1作品分の掛け位置。

    Attributes:
        piece_id: 作品ID
        inches_from_left: 壁左端から作品中心まで [inch]
        inches_from_floor: 床から作品中心まで [inch]
        width_inches: 作品幅 [inch]
        height_inches: 作品高さ [inch]
    """

    piece_id: str | int | None
    inches_from_left: float
    inches_from_floor: float
    width_inches: float
    height_inches: float


def build_hanging_guide(items: Sequence[ArtPiece], ppi: float, floor_y: float) -> list[HangingInstruction]:
    """作品ごとの掛け位置を実寸で求める。

    Args:
        items: 作品リスト
        ppi: items と同じピクセル空間での ppi
        floor_y: 床ラインの Y 座標（items と同じピクセル空間）

    Raises:
        UncalibratedScale: ppi が 0 以下の場合
    """
    if ppi <= 0:
        raise UncalibratedScale("掛け位置ガイドの作成にはキャリブレーションが必要です")

    guide = []
    for item in items:
        guide.append(
            HangingInstruction(
                piece_id=item.id,
                inches_from_left=pixels_to_inches(item.center_x, ppi),
                inches_from_floor=pixels_to_inches(floor_y - item.center_y, ppi),
                width_inches=item.real_width_inches or pixels_to_inches(item.width, ppi),
                height_inches=item.real_height_inches or pixels_to_inches(item.height, ppi),
            )
        )
    return guide


class HangingGuideExporter:
    """掛け位置ガイドのエクスポートクラス"""

    FIELDS = ("piece_id", "inches_from_left", "inches_from_floor", "width_inches", "height_inches")

    def __init__(self, output_dir: str | Path):
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def export_csv(self, guide: Sequence[HangingInstruction], filename: str = "hanging_guide.csv") -> Path:
        """CSV形式でエクスポート（数値は小数第1位まで）"""
        output_path = self.output_dir / filename

        with open(output_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(self.FIELDS)
            for row in guide:
                writer.writerow(
                    [
                        "" if row.piece_id is None else row.piece_id,
                        f"{row.inches_from_left:.1f}",
                        f"{row.inches_from_floor:.1f}",
                        f"{row.width_inches:.1f}",
                        f"{row.height_inches:.1f}",
                    ]
                )

        logger.info(f"CSV exported: {output_path}")
        return output_path

    def export_json(
        self,
        guide: Sequence[HangingInstruction],
        filename: str = "hanging_guide.json",
        room_name: str | None = None,
    ) -> Path:
        output_path = self.output_dir / filename

        data: dict[str, Any] = {
            "room_name": room_name,
            "pieces": [asdict(row) for row in guide],
            "metadata": {"num_pieces": len(guide), "unit": "inch"},
        }

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

        logger.info(f"JSON exported: {output_path}")
        return output_path
