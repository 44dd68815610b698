"""壁面プランナー。

キャリブレーション・配置・アンカー配置の各モジュールを値の受け渡しだけで
組み合わせる、アプリケーション側の窓口です。作品の座標は画面上の rendered
ピクセル空間、キャリブレーションは intrinsic ピクセル空間で保持します。
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
import logging
from typing import Any, Self

from wallspace.calibration.calibration_engine import (
    EffectivePpi,
    centerline_y,
    effective_floor_y,
    effective_ppi,
    inches_to_pixels,
    render_scale_factor,
)
from wallspace.calibration.pixel_space import ScaleFactor
from wallspace.config.config_manager import ConfigManager
from wallspace.exceptions import UncalibratedScale
from wallspace.export.hanging_guide import HangingInstruction, build_hanging_guide
from wallspace.layout.anchor_placement import find_primary_anchor, place_above_anchor
from wallspace.layout.layout_engine import (
    TemplateConfig,
    align_to_centerline,
    apply_template,
    arrange_grid,
    arrange_mosaic,
)
from wallspace.models.data_models import AnchorBox, ArtPiece, Calibration, Size

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Room:
    """1枚の壁写真とその上の作品群。

    Attributes:
        name: 部屋名
        container: 表示領域のサイズ [rendered pixel]
        intrinsic: 元画像のサイズ [intrinsic pixel]
        calibration: キャリブレーション（未実施なら None）
        pieces: 作品（rendered ピクセル空間）
        detections: 外部検出器の結果
    """

    name: str
    container: Size
    intrinsic: Size
    calibration: Calibration | None = None
    pieces: tuple[ArtPiece, ...] = ()
    detections: tuple[AnchorBox, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Self:
        """ルームファイルの辞書から生成する。

        Raises:
            ValueError: 必須項目の欠落や型の不一致がある場合
        """
        try:
            container = data["container"]
            intrinsic = data["intrinsic"]
            calibration = data.get("calibration")
            return cls(
                name=str(data.get("name", "Untitled")),
                container=Size(float(container["width"]), float(container["height"])),
                intrinsic=Size(float(intrinsic["width"]), float(intrinsic["height"])),
                calibration=Calibration.from_dict(calibration) if calibration else None,
                pieces=tuple(ArtPiece.from_dict(p) for p in data.get("art_pieces", [])),
                detections=tuple(AnchorBox.from_detection(d) for d in data.get("detections", [])),
            )
        except KeyError as e:
            raise ValueError(f"ルームデータに必須項目がありません: {e}") from e
        except (TypeError, AttributeError) as e:
            raise ValueError(f"ルームデータの形式が不正です: {e}") from e

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "container": {"width": self.container.width, "height": self.container.height},
            "intrinsic": {"width": self.intrinsic.width, "height": self.intrinsic.height},
            "calibration": self.calibration.to_dict() if self.calibration else None,
            "art_pieces": [p.to_dict() for p in self.pieces],
            "detections": [
                {
                    "class": d.label,
                    "score": d.score,
                    "bbox": {"x": d.bbox.x, "y": d.bbox.y, "width": d.bbox.width, "height": d.bbox.height},
                }
                for d in self.detections
            ],
        }

    def with_pieces(self, pieces: Sequence[ArtPiece]) -> Room:
        return replace(self, pieces=tuple(pieces))


class WallPlanner:
    """設定値を使って Room に配置操作を適用する。

    スケール係数は呼び出しのたびに Room の現在サイズから計算し直す。
    """

    def __init__(self, config: ConfigManager):
        self.config = config
        self.eye_level_inches = float(config.get("calibration.eye_level_inches", 57.0))
        self.assumed_wall_height_inches = float(config.get("calibration.assumed_wall_height_inches", 96.0))
        self.gap_inches = float(config.get("layout.gap_inches", 3.0))
        self.top_offset_inches = float(config.get("layout.template_top_offset_inches", 15.0))
        self.side_offset_inches = float(config.get("layout.template_side_offset_inches", 20.0))
        self.min_top_px = float(config.get("layout.min_top_px", 20.0))
        self.anchor_classes = tuple(config.get("anchor.classes", ["bed", "couch"]))
        self.anchor_min_score = float(config.get("anchor.min_score", 0.5))
        self.clearance_inches = float(config.get("anchor.clearance_inches", 10.0))

    def scale(self, room: Room) -> ScaleFactor:
        return render_scale_factor(room.container, room.intrinsic)

    def ppi(self, room: Room) -> EffectivePpi:
        return effective_ppi(
            room.calibration,
            self.scale(room),
            room.container.height,
            self.assumed_wall_height_inches,
        )

    def centerline(self, room: Room, distance_from_floor_inches: float | None = None) -> float:
        distance = self.eye_level_inches if distance_from_floor_inches is None else distance_from_floor_inches
        return centerline_y(
            room.calibration,
            self.scale(room),
            room.container.height,
            distance,
            assumed_wall_height_inches=self.assumed_wall_height_inches,
        )

    def apply_template(self, room: Room, template_name: str) -> Room:
        """テンプレートを適用する。上端は目線ラインから top_offset_inches 上。"""
        ppi = self.ppi(room).value
        width = room.container.width
        center_x = width / 2

        estimated_top = self.centerline(room) - inches_to_pixels(self.top_offset_inches, ppi)
        if template_name in ("row", "big-center"):
            start_x = center_x
        else:
            start_x = center_x - inches_to_pixels(self.side_offset_inches, ppi)

        config = TemplateConfig(
            start_x=start_x,
            start_y=max(self.min_top_px, estimated_top),
            gap_inches=self.gap_inches,
            ppi=ppi,
            wall_width=width,
        )
        logger.info(f"テンプレート '{template_name}' を適用します（{len(room.pieces)}点）")
        return room.with_pieces(apply_template(room.pieces, template_name, config))

    def arrange_grid(self, room: Room, variant: int) -> Room:
        ppi = self.ppi(room).value
        start_x = room.container.width / 2 - inches_to_pixels(self.side_offset_inches, ppi)
        start_y = max(self.min_top_px, self.centerline(room) - inches_to_pixels(self.top_offset_inches, ppi))
        return room.with_pieces(arrange_grid(room.pieces, start_x, start_y, self.gap_inches, ppi, variant))

    def arrange_mosaic(self, room: Room, variant: int) -> Room:
        ppi = self.ppi(room).value
        center_x = room.container.width / 2
        return room.with_pieces(
            arrange_mosaic(room.pieces, center_x, self.centerline(room), self.gap_inches, ppi, variant)
        )

    def align_to_eye_level(self, room: Room, distance_from_floor_inches: float | None = None) -> Room:
        return room.with_pieces(align_to_centerline(room.pieces, self.centerline(room, distance_from_floor_inches)))

    def suggest_spot(self, room: Room) -> tuple[Room, AnchorBox | None]:
        """検出済み家具の上へ作品グループを移動する。

        Returns:
            (更新後の Room, 使用したアンカー)。アンカーが無ければ Room は変更しない。

        Raises:
            EmptyPieceSet: 作品が無い場合
        """
        anchor = find_primary_anchor(room.detections, self.anchor_classes, self.anchor_min_score)
        if anchor is None:
            return room, None

        pieces = place_above_anchor(room.pieces, anchor, self.ppi(room).value, self.clearance_inches)
        return room.with_pieces(pieces), anchor

    def hanging_guide(self, room: Room) -> list[HangingInstruction]:
        """現在の配置から掛け位置ガイドを作成する。

        Raises:
            UncalibratedScale: キャリブレーション未実施の場合
        """
        ppi = self.ppi(room)
        if ppi.is_estimate:
            raise UncalibratedScale("推定スケールでは掛け位置ガイドを作成できません。キャリブレーションしてください")
        floor = effective_floor_y(room.calibration, self.scale(room), room.container.height)
        return build_hanging_guide(room.pieces, ppi.value, floor.value)
