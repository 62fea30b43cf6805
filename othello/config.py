"""
対局設定。

コンソール版・GUI版で共通の設定値をまとめる。
コマンドライン引数や TOML ファイル（`[game]` テーブル）から上書きできる。

例 (othello.toml)::

    [game]
    size = 10
    vs_cpu = true
    human_color = "white"
    cpu_delay = [0.0, 0.0]
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional, Tuple

from .logic import BLACK, WHITE


COLOR_NAMES = {"black": BLACK, "white": WHITE}
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_color(value: Any) -> int:
    """色名（black/white）または BLACK/WHITE の整数を手番の値にする。"""
    if isinstance(value, str):
        try:
            return COLOR_NAMES[value.strip().lower()]
        except KeyError:
            raise ValueError(f"Unknown color: {value!r}") from None
    if _is_int(value) and value in (BLACK, WHITE):
        return value
    raise ValueError(f"Unknown color: {value!r}")


@dataclass
class GameConfig:
    size: int = 8
    vs_cpu: bool = False
    human_color: int = BLACK
    starting_side: int = BLACK
    # CPU手番の「CPU操作中...」表示前後の待ち時間（秒）
    cpu_delay: Tuple[float, float] = (0.25, 0.75)
    seed: Optional[int] = None
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        # TOML からは任意の型が来るので、値を使う前に型を確かめる
        if not _is_int(self.size) or self.size % 2 != 0 or self.size < 4:
            raise ValueError("Board size must be an even number >= 4")
        if not isinstance(self.vs_cpu, bool):
            raise ValueError(f"vs_cpu must be true or false, got {self.vs_cpu!r}")
        self.human_color = parse_color(self.human_color)
        self.starting_side = parse_color(self.starting_side)
        if not isinstance(self.cpu_delay, (list, tuple)) or not all(_is_number(d) for d in self.cpu_delay):
            raise ValueError("cpu_delay must be two non-negative numbers")
        self.cpu_delay = tuple(float(d) for d in self.cpu_delay)
        if len(self.cpu_delay) != 2 or any(d < 0 for d in self.cpu_delay):
            raise ValueError("cpu_delay must be two non-negative numbers")
        if self.seed is not None and not _is_int(self.seed):
            raise ValueError(f"seed must be an integer, got {self.seed!r}")
        if not isinstance(self.log_level, str):
            raise ValueError(f"Unknown log level: {self.log_level!r}")
        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {self.log_level!r}")

    @property
    def half(self) -> int:
        """`BoardState` に渡す半径（一辺の半分）。"""
        return self.size // 2

    @staticmethod
    def load_from_toml(path: str = "othello.toml") -> "GameConfig":
        """TOML ファイルの `[game]` テーブルを読み込む。ファイルが無ければ既定値。"""
        if not os.path.exists(path):
            return GameConfig()
        with open(path, "rb") as f:
            data = tomllib.load(f)
        section: Dict[str, Any] = data.get("game", {})
        if not isinstance(section, dict):
            raise ValueError("[game] must be a table")
        known = {f.name for f in fields(GameConfig)}
        unknown = set(section) - known
        if unknown:
            raise ValueError(f"Unknown keys in [game]: {', '.join(sorted(unknown))}")
        return GameConfig(**section)
