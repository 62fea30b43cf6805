"""
CPU の指し手選択。

方針
- 先読みも静的評価もしない
- 合法手の中から、裏返せる枚数に比例した確率でランダムに1手を選ぶ
  （4枚返せるマスは1枚返せるマスの4倍選ばれやすい）
"""

from __future__ import annotations

import logging
import random
from typing import List, Optional, Sequence

from .logic import BoardState, Coord


LOGGER = logging.getLogger("othello.ai")


def legal_cells(counts: Sequence[Sequence[int]]) -> List[Coord]:
    """枚数表から置けるマス（値 > 0）を行優先順で返す。"""
    return [(r, c) for r, row in enumerate(counts) for c, v in enumerate(row) if v > 0]


def weighted_random_move(counts: Sequence[Sequence[int]], rng: Optional[random.Random] = None) -> Optional[Coord]:
    """裏返せる枚数を重みにしてマスを1つ選ぶ。置けるマスが無ければ None。"""
    cells = legal_cells(counts)
    if not cells:
        return None
    weights = [counts[r][c] for r, c in cells]
    move = (rng or random).choices(cells, weights=weights, k=1)[0]
    LOGGER.debug("picked %s out of %d candidates", move, len(cells))
    return move


def choose_move(board: BoardState, rng: Optional[random.Random] = None) -> Optional[Coord]:
    """盤面の手番側として CPU の手を選ぶ。"""
    return weighted_random_move(board.capture_counts(), rng)
