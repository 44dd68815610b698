"""Configuration management module for the wall-space geometry engine."""

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from wallspace.layout.layout_engine import TEMPLATE_NAMES

logger = logging.getLogger(__name__)


class ConfigManager:
    """設定ファイル管理クラス

    YAML/JSON形式の設定ファイルを読み込み、検証し、設定値を提供する。

    Attributes:
        config_path: 設定ファイルのパス
        config: 読み込まれた設定データ
    """

    # 必須項目の定義
    REQUIRED_KEYS = {
        "calibration": ["assumed_wall_height_inches", "eye_level_inches"],
        "layout": ["gap_inches", "default_template"],
        "anchor": ["classes", "min_score", "clearance_inches"],
        "output": ["directory"],
    }

    # デフォルト設定値
    DEFAULT_CONFIG = {
        "calibration": {
            "assumed_wall_height_inches": 96.0,
            "eye_level_inches": 57.0,
        },
        "layout": {
            "gap_inches": 3.0,
            "default_template": "grid",
            "template_top_offset_inches": 15.0,
            "template_side_offset_inches": 20.0,
            "min_top_px": 20.0,
        },
        "anchor": {
            "classes": ["bed", "couch"],
            "min_score": 0.5,
            "clearance_inches": 10.0,
        },
        "output": {
            "directory": "output",
            "export_hanging_guide": False,
            "debug_mode": False,
        },
    }

    def __init__(self, config_path: str = "config.yaml"):
        """ConfigManagerを初期化する

        Args:
            config_path: 設定ファイルのパス（デフォルト: config.yaml）
        """
        self.config_path = config_path
        self.config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """設定ファイルを読み込む

        ファイルに無いセクション・項目はデフォルト値で補完する。

        Raises:
            ValueError: 設定ファイルの形式が不正な場合
        """
        if not os.path.exists(self.config_path):
            logger.warning(f"設定ファイル '{self.config_path}' が見つかりません。デフォルト設定を使用します。")
            return copy.deepcopy(self.DEFAULT_CONFIG)

        file_ext = Path(self.config_path).suffix.lower()
        if file_ext not in [".yaml", ".yml", ".json"]:
            raise ValueError(f"サポートされていないファイル形式: {file_ext}")

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                if file_ext == ".json":
                    config = json.load(f)
                else:
                    config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"YAML解析エラー: {e}") from e
        except json.JSONDecodeError as e:
            raise ValueError(f"JSON解析エラー: {e}") from e

        if config is None:
            logger.warning("設定ファイルが空です。デフォルト設定を使用します。")
            return copy.deepcopy(self.DEFAULT_CONFIG)
        if not isinstance(config, dict):
            raise ValueError("設定ファイルは辞書形式である必要があります。")

        logger.info(f"設定ファイル '{self.config_path}' を読み込みました。")
        return _merge_defaults(copy.deepcopy(self.DEFAULT_CONFIG), config)

    def validate(self) -> bool:
        """設定値の妥当性を検証する

        Returns:
            検証が成功した場合True

        Raises:
            ValueError: 設定値が不正な場合
        """
        for section, required_keys in self.REQUIRED_KEYS.items():
            section_config = self.config.get(section)
            if not isinstance(section_config, dict):
                raise ValueError(f"セクション '{section}' は辞書型である必要があります。")
            for key in required_keys:
                if key not in section_config:
                    raise ValueError(f"必須項目 '{section}.{key}' が設定ファイルに存在しません。")

        self._validate_calibration_config()
        self._validate_layout_config()
        self._validate_anchor_config()
        self._validate_output_config()

        logger.info("設定ファイルの検証が完了しました。")
        return True

    def _validate_calibration_config(self):
        """calibration セクションの検証"""
        calibration_config = self.config["calibration"]

        for key in ("assumed_wall_height_inches", "eye_level_inches"):
            value = calibration_config.get(key)
            if not _is_number(value) or value <= 0:
                raise ValueError(f"calibration.{key} は正の数値である必要があります。")

    def _validate_layout_config(self):
        """layout セクションの検証"""
        layout_config = self.config["layout"]

        gap = layout_config.get("gap_inches")
        if not _is_number(gap) or gap < 0:
            raise ValueError("layout.gap_inches は非負の数値である必要があります。")

        template = layout_config.get("default_template")
        if template not in TEMPLATE_NAMES:
            raise ValueError(f"layout.default_template は {', '.join(TEMPLATE_NAMES)} のいずれかである必要があります。")

        for key in ("template_top_offset_inches", "template_side_offset_inches", "min_top_px"):
            if key in layout_config:
                value = layout_config[key]
                if not _is_number(value) or value < 0:
                    raise ValueError(f"layout.{key} は非負の数値である必要があります。")

    def _validate_anchor_config(self):
        """anchor セクションの検証"""
        anchor_config = self.config["anchor"]

        classes = anchor_config.get("classes")
        if not isinstance(classes, list) or not classes:
            raise ValueError("anchor.classes は空でないリストである必要があります。")
        for i, name in enumerate(classes):
            if not isinstance(name, str):
                raise ValueError(f"anchor.classes[{i}] は文字列である必要があります。")

        min_score = anchor_config.get("min_score")
        if not _is_number(min_score) or not (0.0 <= min_score <= 1.0):
            raise ValueError("anchor.min_score は 0.0 から 1.0 の範囲である必要があります。")

        clearance = anchor_config.get("clearance_inches")
        if not _is_number(clearance) or clearance < 0:
            raise ValueError("anchor.clearance_inches は非負の数値である必要があります。")

    def _validate_output_config(self):
        """output セクションの検証"""
        output_config = self.config["output"]

        if not isinstance(output_config.get("directory"), str):
            raise ValueError("output.directory は文字列である必要があります。")

        for field in ("export_hanging_guide", "debug_mode"):
            if field in output_config and not isinstance(output_config[field], bool):
                raise ValueError(f"output.{field} はブール値である必要があります。")

    def get(self, key: str, default: Any = None) -> Any:
        """設定値を取得する

        ドット記法（例: 'layout.gap_inches'）で階層的な設定値にアクセスできる。

        Args:
            key: 設定キー（ドット記法をサポート）
            default: キーが存在しない場合のデフォルト値

        Returns:
            設定値、またはデフォルト値
        """
        keys = key.split(".")
        value = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """設定セクション全体を取得する"""
        return self.config.get(section, {})

    def set(self, key: str, value: Any):
        """設定値を動的に変更する

        Args:
            key: 設定キー（ドット記法をサポート）
            value: 設定する値
        """
        keys = key.split(".")
        config = self.config

        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value
        logger.debug(f"設定値を変更しました: {key} = {value}")

    def save(self, output_path: Optional[str] = None):
        """設定をファイルに保存する

        Args:
            output_path: 保存先パス（指定しない場合は元のパスに上書き）
        """
        save_path = output_path or self.config_path
        file_ext = Path(save_path).suffix.lower()
        if file_ext not in [".yaml", ".yml", ".json"]:
            raise ValueError(f"サポートされていないファイル形式: {file_ext}")

        with open(save_path, "w", encoding="utf-8") as f:
            if file_ext == ".json":
                json.dump(self.config, f, indent=2, ensure_ascii=False)
            else:
                yaml.dump(self.config, f, default_flow_style=False, allow_unicode=True)

        logger.info(f"設定ファイルを保存しました: {save_path}")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _merge_defaults(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge_defaults(base[key], value)
        else:
            base[key] = value
    return base
