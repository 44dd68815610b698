"""Command-line argument parsing."""

import argparse

from wallspace.layout.layout_engine import TEMPLATE_NAMES


def parse_arguments(argv=None) -> argparse.Namespace:
    """コマンドライン引数をパースする

    Args:
        argv: 引数リスト（省略時は sys.argv）

    Returns:
        パース済み引数
    """
    parser = argparse.ArgumentParser(description="壁面プランナー - 壁写真上のアート作品の配置計算")

    parser.add_argument(
        "--config",
        type=str,
        default="config.yaml",
        help="設定ファイルのパス（デフォルト: config.yaml）",
    )

    parser.add_argument("--room", type=str, required=True, help="ルームファイル（JSON/YAML）のパス")

    parser.add_argument("--output", type=str, help="更新後のルームファイルの出力先（デフォルト: 出力ディレクトリ/room_layout.json）")

    parser.add_argument("--debug", action="store_true", help="デバッグモードで実行（詳細ログ）")

    layout_group = parser.add_mutually_exclusive_group()
    layout_group.add_argument("--template", type=str, choices=TEMPLATE_NAMES, help="適用するテンプレート名（配置オプション省略時は layout.default_template）")
    layout_group.add_argument("--grid", type=int, metavar="VARIANT", help="グリッド配置（0: 2段, 1: 1行, 2: 1列）")
    layout_group.add_argument("--mosaic", type=int, metavar="VARIANT", help="モザイク配置（0: 上下左右, 1: ピラミッド, 2: 階段）")
    layout_group.add_argument("--suggest-spot", action="store_true", help="検出済みの家具の上に作品グループを配置")

    parser.add_argument("--centerline", action="store_true", help="配置後に各作品の中心を目線の高さに揃える")

    parser.add_argument("--eye-level", type=float, help="目線の高さ [inch]（デフォルト: 設定値、通常57）")

    parser.add_argument("--guide", action="store_true", help="掛け位置ガイド（CSV/JSON）を出力")

    return parser.parse_args(argv)
