"""
オセロ盤面エンジン。

役割
- 盤面と手番の保持（`BoardState`）
- 各空きマスについて「そこに置いたら何枚裏返せるか」の算出
- 着手の適用（石の反転）と手番交代・自動パス
- 石数の集計と描画用スナップショットの提供

設計のポイント
- 盤面は `List[List[int]]`（0=空, 1=黒, -1=白）で表現
- プレイヤーは `BLACK=1`, `WHITE=-1` の整数で持つ（反転に便利）
- 8方向レイを伸ばして「相手石の連続の先に自分石がある」長さを数える
- `capture_counts` と `place` は同じレイ判定 `_ray_length` を共有する
"""

from __future__ import annotations

import logging
from typing import List, Sequence, Tuple


LOGGER = logging.getLogger("othello.logic")

# セル状態の定数
EMPTY = 0   # 空きマス
BLACK = 1   # 黒石（先手）
WHITE = -1  # 白石（反転は掛け算で扱いやすいように -1）

Player = int  # BLACK or WHITE
Coord = Tuple[int, int]
Grid = List[List[int]]


DIRECTIONS: Tuple[Coord, ...] = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),          (0, 1),
    (1, -1),  (1, 0), (1, 1),
)


class BoardError(ValueError):
    """盤面操作の事前条件違反（呼び出し側の誤用）。"""


class InvalidDimension(BoardError):
    """盤面サイズ（半径・一辺・グリッド形状）が不正。"""


class OutOfRange(BoardError):
    """行・列が盤面の外。"""


class IllegalPlacement(BoardError):
    """1枚も裏返せないマスへの着手。"""


def opponent(player: Player) -> Player:
    """与えられたプレイヤーの相手側を返す。"""
    return BLACK if player == WHITE else WHITE


def _check_side(player: int) -> None:
    if player not in (BLACK, WHITE):
        raise ValueError(f"Unknown side: {player!r}")


def in_bounds(size: int, r: int, c: int) -> bool:
    """(r, c) が一辺 `size` の盤面内かどうか。"""
    return 0 <= r < size and 0 <= c < size


def _ray_length(grid: Sequence[Sequence[int]], player: Player, r: int, c: int, dr: int, dc: int) -> int:
    """方向 (dr, dc) に裏返せる相手石の枚数を返す。

    (r, c) の隣から相手石が1つ以上連続し、その直後に自分石がある場合だけ
    その連続の長さを返す。空マスか盤外で途切れたら 0。
    """
    n = len(grid)
    other = opponent(player)
    length = 0
    rr, cc = r + dr, c + dc
    while in_bounds(n, rr, cc) and grid[rr][cc] == other:
        length += 1
        rr += dr
        cc += dc
    if length and in_bounds(n, rr, cc) and grid[rr][cc] == player:
        return length
    return 0


def count_captures(grid: Sequence[Sequence[int]], player: Player) -> Grid:
    """盤面 `grid` で `player` が各マスに置いたときに裏返せる枚数の表を返す。

    石のあるマスは 0。盤面と手番以外の情報は使わないので、
    `BoardState.render()` の出力からでも同じ表を再計算できる。
    """
    n = len(grid)
    counts = [[0] * n for _ in range(n)]
    for r in range(n):
        for c in range(n):
            if grid[r][c] != EMPTY:
                continue
            counts[r][c] = sum(_ray_length(grid, player, r, c, dr, dc) for dr, dc in DIRECTIONS)
    return counts


class BoardState:
    """盤面と手番を持つ可変オブジェクト。

    `BoardState(n)` は一辺 `2n` の盤を作り、中央4マスに初期配置を置く。
    状態を変えるのは `place` だけで、その他はすべて問い合わせ。
    """

    def __init__(self, n: int, starting_side: Player = BLACK):
        if n < 1:
            raise InvalidDimension(f"Half-dimension must be >= 1, got {n}")
        _check_side(starting_side)
        size = 2 * n
        grid = [[EMPTY for _ in range(size)] for _ in range(size)]
        grid[n - 1][n - 1] = WHITE
        grid[n][n] = WHITE
        grid[n - 1][n] = BLACK
        grid[n][n - 1] = BLACK
        self._size = size
        self._grid = grid
        self.side_to_move = starting_side

    @classmethod
    def from_size(cls, size: int, starting_side: Player = BLACK) -> "BoardState":
        """一辺 `size`（4 以上の偶数）の盤を作る。"""
        if size % 2 != 0 or size < 4:
            raise InvalidDimension("Board size must be an even number >= 4")
        return cls(size // 2, starting_side)

    @classmethod
    def from_grid(cls, grid: Sequence[Sequence[int]], side_to_move: Player = BLACK) -> "BoardState":
        """任意の局面から盤を作る（`grid` はコピーされる）。"""
        size = len(grid)
        if size == 0 or size % 2 != 0 or any(len(row) != size for row in grid):
            raise InvalidDimension("Grid must be square with an even, non-zero side")
        _check_side(side_to_move)
        for row in grid:
            for cell in row:
                if cell not in (EMPTY, BLACK, WHITE):
                    raise ValueError(f"Unknown cell value: {cell!r}")
        board = cls.__new__(cls)
        board._size = size
        board._grid = [list(row) for row in grid]
        board.side_to_move = side_to_move
        return board

    @property
    def size(self) -> int:
        return self._size

    def is_white_turn(self) -> bool:
        return self.side_to_move == WHITE

    # ----- Queries -----
    def capture_counts(self) -> Grid:
        """手番側が各マスに置いたときに裏返せる枚数の表。0 のマスには置けない。"""
        return count_captures(self._grid, self.side_to_move)

    def legal_moves(self) -> List[Coord]:
        """手番側の合法手（行優先順）。"""
        counts = self.capture_counts()
        return [(r, c) for r in range(self._size) for c in range(self._size) if counts[r][c] > 0]

    def has_legal_move(self) -> bool:
        return any(v > 0 for row in self.capture_counts() for v in row)

    def is_terminal(self) -> bool:
        """どちらの側にも合法手が無ければ終局。"""
        return not any(
            v > 0
            for player in (BLACK, WHITE)
            for row in count_captures(self._grid, player)
            for v in row
        )

    def count_pieces(self) -> Tuple[int, int]:
        """(黒数, 白数) を返す。"""
        black = sum(cell == BLACK for row in self._grid for cell in row)
        white = sum(cell == WHITE for row in self._grid for cell in row)
        return black, white

    def render(self) -> Grid:
        """描画用の盤面コピー。返り値を書き換えても盤面には影響しない。"""
        return [row[:] for row in self._grid]

    # ----- Mutation -----
    def place(self, row: int, col: int) -> bool:
        """手番側の石を (row, col) に置き、挟んだ石を裏返して手番を進める。

        返り値はゲームを続けられるなら True、両者とも置けるマスが無ければ False。
        相手に合法手が無い場合は相手の手番を飛ばし、同じ側がもう一度指す。

        例外
        - `OutOfRange`: 行・列が盤外
        - `IllegalPlacement`: 1枚も裏返せないマス
        """
        n = self._size
        if not in_bounds(n, row, col):
            raise OutOfRange(f"({row}, {col}) is outside a {n}x{n} board")
        if self.capture_counts()[row][col] == 0:
            raise IllegalPlacement(f"No discs to flip at ({row}, {col})")

        player = self.side_to_move
        grid = self._grid
        grid[row][col] = player
        for dr, dc in DIRECTIONS:
            # 8方向のレイは互いに重ならないので、順に裏返しても判定は変わらない
            length = _ray_length(grid, player, row, col, dr, dc)
            for m in range(1, length + 1):
                grid[row + m * dr][col + m * dc] = player

        # 手番交代
        self.side_to_move = opponent(player)
        if self.has_legal_move():
            return True

        # 相手が置けないのでパスして手番を戻す
        LOGGER.debug("side %d has no legal move, passing", self.side_to_move)
        self.side_to_move = player
        if self.has_legal_move():
            return True

        LOGGER.debug("no legal move for either side, game over")
        return False
