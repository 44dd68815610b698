#!/usr/bin/env python
"""
壁面プランナー - メインエントリーポイント

ルームファイル（表示サイズ・元画像サイズ・キャリブレーション・作品一覧・
家具検出結果）を読み込み、指定された配置を計算して書き出します。
"""

import json
import logging
from pathlib import Path
import sys

from wallspace.cli import parse_arguments
from wallspace.config import ConfigManager, load_config_file
from wallspace.export import HangingGuideExporter
from wallspace.planner import Room, WallPlanner
from wallspace.utils import setup_logging


def main(argv=None):
    """メイン処理"""
    args = parse_arguments(argv)

    setup_logging(args.debug)
    logger = logging.getLogger(__name__)

    try:
        config = ConfigManager(args.config)
        config.validate()

        if args.debug:
            config.set("output.debug_mode", True)

        output_dir = Path(config.get("output.directory", "output"))
        setup_logging(args.debug, str(output_dir))
        logger = logging.getLogger(__name__)

        room = Room.from_dict(load_config_file(args.room))
        planner = WallPlanner(config)
        logger.info(f"ルーム '{room.name}' を読み込みました（作品 {len(room.pieces)}点）")

        ppi = planner.ppi(room)
        if ppi.is_estimate:
            logger.warning("推定スケールを使用しています（8ft の壁を仮定）。精度が必要な場合はキャリブレーションしてください")

        if args.template:
            room = planner.apply_template(room, args.template)
        elif args.grid is not None:
            room = planner.arrange_grid(room, args.grid)
        elif args.mosaic is not None:
            room = planner.arrange_mosaic(room, args.mosaic)
        elif args.suggest_spot:
            room, anchor = planner.suggest_spot(room)
            if anchor is None:
                logger.warning("基準にできるベッドやソファが見つかりませんでした")
            else:
                logger.info(f"{anchor.label} の上に作品グループを配置しました")
        else:
            room = planner.apply_template(room, config.get("layout.default_template"))

        if args.centerline:
            room = planner.align_to_eye_level(room, args.eye_level)

        output_path = Path(args.output) if args.output else output_dir / "room_layout.json"
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(room.to_dict(), f, indent=2, ensure_ascii=False)
        logger.info(f"配置結果を保存しました: {output_path}")

        if args.guide or config.get("output.export_hanging_guide", False):
            if ppi.is_estimate:
                logger.warning("キャリブレーション未実施のため掛け位置ガイドは出力しません")
            else:
                exporter = HangingGuideExporter(output_dir)
                guide = planner.hanging_guide(room)
                exporter.export_csv(guide)
                exporter.export_json(guide, room_name=room.name)

        return 0

    except FileNotFoundError as e:
        logger.error(f"ファイルが見つかりません: {e}")
        return 1
    except ValueError as e:
        logger.error(f"入力エラー: {e}")
        return 1
    except KeyboardInterrupt:
        logger.warning("処理が中断されました")
        return 130


if __name__ == "__main__":
    sys.exit(main())
