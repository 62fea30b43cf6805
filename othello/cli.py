"""
テキストベースのCLI UI。

役割
- 設定の決定（コマンドライン引数 / 設定ファイル / 対話入力）
- 盤面の描画（ヒント表示の「+」付き）
- 入力受付（行番号・列番号）とCPU手番
- 勝敗表示

設計のポイント
- ルール判定は `logic.BoardState`、CPU手は `ai` に委譲してUIに専念
- 盤面エンジンには範囲内かつ合法と確認済みの手だけを渡す
- Ctrl+C / 入力終了(EOF) で中断
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import os
import random
import time
from typing import List, Optional, Tuple

from . import logic
from .ai import choose_move
from .config import COLOR_NAMES, LOG_LEVELS, GameConfig


SYMBOLS = {logic.BLACK: "●", logic.WHITE: "○", logic.EMPTY: "."}
HINT = "+"


def side_symbol(v: int) -> str:
    """セルの内部値（または手番）を表示用文字に変換。"""
    return SYMBOLS[v]


def format_board(board: logic.BoardState, with_help: bool = False) -> str:
    """盤面を行・列番号（1始まり）付きの文字列にする。

    `with_help` が True なら置けるマスを「+」で示す。
    """
    cells = board.render()
    counts = board.capture_counts() if with_help else None
    n = board.size
    lines: List[str] = ["  " + "".join(f"{i:2}" for i in range(1, n + 1))]
    for r in range(n):
        row = []
        for c in range(n):
            if counts is not None and counts[r][c] > 0:
                row.append(HINT)
            else:
                row.append(side_symbol(cells[r][c]))
        lines.append(f"{r + 1:2} " + " ".join(row))
    return "\n".join(lines)


def print_board(board: logic.BoardState, with_help: bool = False) -> None:
    print(format_board(board, with_help))


def format_result(board: logic.BoardState) -> str:
    """終局時の結果文を返す。石の多い方が勝ち、同数なら引き分け。"""
    b, w = board.count_pieces()
    black, white = side_symbol(logic.BLACK), side_symbol(logic.WHITE)
    head = f"{black}が{b}個，{white}が{w}個で"
    if b > w:
        return head + f"{black}の勝ち！"
    if w > b:
        return head + f"{white}の勝ち！"
    return head + "引き分け！"


# ----- 入力 -----
def read_int() -> int:
    """整数が入力されるまで読み直す。"""
    while True:
        s = input("> ").strip()
        try:
            return int(s)
        except ValueError:
            print("半角数字で整数を入力して下さい．")


def choose_size() -> int:
    """盤面サイズ（4以上の偶数）を選ぶ。"""
    while True:
        print("盤面のサイズを4以上の偶数で入力してください．Returnキーで確定します．")
        n = read_int()
        if n >= 4 and n % 2 == 0:
            return n
        print("入力が不適切です．")


def choose_cpu() -> bool:
    print("CPUとやりますか？CPUとやる場合はy，そうではない場合はそれ以外を入力してください．")
    return input("> ").strip() == "y"


def choose_color() -> int:
    """人間の手番色を選ぶ（1=黒=先攻, 2=白）。"""
    black, white = side_symbol(logic.BLACK), side_symbol(logic.WHITE)
    while True:
        print(f"{black}として始める場合は1を，{white}として始める場合は2を入力してください．{black}が先攻です．")
        n = read_int()
        if n == 1:
            return logic.BLACK
        if n == 2:
            return logic.WHITE
        print("入力が範囲外です．")


def confirm_quit() -> bool:
    print("本当に終了しますか？はいならy，いいえならそれ以外を入力してください．")
    return input("> ").strip() == "y"


def read_row(size: int, with_help: bool) -> int:
    """行番号を読む。0 は終了、size+1 はヒント表示（ヒント非表示中のみ）。"""
    while True:
        n = read_int()
        if 0 <= n <= size or (n == size + 1 and not with_help):
            return n
        print("入力が範囲外です．")


def read_col(size: int) -> int:
    while True:
        n = read_int()
        if 1 <= n <= size:
            return n
        print("入力が範囲外です．")


# ----- 対局 -----
def cpu_turn(board: logic.BoardState, rng: random.Random, delay: Tuple[float, float] = (0.0, 0.0)) -> bool:
    """CPUの手を1つ指す。返り値は `BoardState.place` と同じ（続行できるか）。"""
    time.sleep(delay[0])
    print("\nCPU操作中...\n")
    time.sleep(delay[1])
    move = choose_move(board, rng)
    if move is None:
        # 手番側は常に合法手を持つので、ここに来るのは終局後だけ
        return False
    r, c = move
    print(f"CPU の手: {r + 1}行 {c + 1}列")
    return board.place(r, c)


def is_cpu_turn(board: logic.BoardState, config: GameConfig) -> bool:
    return config.vs_cpu and board.side_to_move != config.human_color


def game_loop(config: GameConfig, rng: Optional[random.Random] = None) -> logic.BoardState:
    """ゲームのメインループ。終局（または途中終了）時の盤面を返す。"""
    if rng is None:
        rng = random.Random(config.seed)
    board = logic.BoardState(config.half, config.starting_side)
    size = board.size
    with_help = False

    while True:
        print_board(board, with_help)
        print(f"{side_symbol(board.side_to_move)}のターン．")

        if is_cpu_turn(board, config):
            if not cpu_turn(board, rng, config.cpu_delay):
                break
            continue

        print("駒を置く場所を行番号，列番号の順で指定して下さい．Return区切りで入力してください．")
        print("もうゲームを終わって結果を見たい場合は1つ目の数字として0を入力してください．")
        if not with_help:
            print(f"駒が置ける場所のヒントを見たい場合は1つ目の数字として{size + 1}を入力してください．")
        else:
            print()

        row = read_row(size, with_help)
        if row == 0:
            if confirm_quit():
                break
            continue
        if row == size + 1:
            with_help = True
            continue
        with_help = False

        col = read_col(size)
        if board.capture_counts()[row - 1][col - 1] == 0:
            print("そこには置けません．")
            continue
        if not board.place(row - 1, col - 1):
            break

    print_board(board)
    print(format_result(board))
    return board


# ----- エントリーポイント -----
def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="othello", description="コンソールでオセロを遊ぶ")
    ap.add_argument("--size", type=int, help="盤面サイズ（4以上の偶数）")
    ap.add_argument("--cpu", action=argparse.BooleanOptionalAction, default=None, help="CPUと対戦する")
    ap.add_argument("--color", choices=sorted(COLOR_NAMES), help="CPU対戦時の自分の色（黒が先攻）")
    ap.add_argument("--seed", type=int, help="CPUの乱数シード")
    ap.add_argument("--no-delay", action="store_true", help="CPU手番の待ち時間を無くす")
    ap.add_argument("--config", help="設定ファイル（TOML, [game] テーブル）")
    ap.add_argument("--log-level", choices=LOG_LEVELS, help="ログレベル")
    return ap


def build_config(args: argparse.Namespace) -> GameConfig:
    """引数と設定ファイルから設定を作る。

    指定された設定ファイルが存在しなければ ValueError。
    設定ファイルを使わない場合、引数で指定されなかったサイズ・対戦形式・色は対話で尋ねる。
    """
    interactive = args.config is None
    if args.config is not None and not os.path.exists(args.config):
        raise ValueError(f"Config file not found: {args.config}")
    base = GameConfig.load_from_toml(args.config) if args.config else GameConfig()
    changes = {}
    if args.size is not None:
        changes["size"] = args.size
    elif interactive:
        changes["size"] = choose_size()
    if args.cpu is not None:
        changes["vs_cpu"] = args.cpu
    elif interactive:
        changes["vs_cpu"] = choose_cpu()
    if args.color is not None:
        changes["human_color"] = args.color
    elif interactive and changes.get("vs_cpu", base.vs_cpu):
        changes["human_color"] = choose_color()
    if args.seed is not None:
        changes["seed"] = args.seed
    if args.no_delay:
        changes["cpu_delay"] = (0.0, 0.0)
    if args.log_level is not None:
        changes["log_level"] = args.log_level
    return dataclasses.replace(base, **changes)


def main(argv: Optional[List[str]] = None) -> int:
    """エントリーポイント：設定の決定→ゲーム開始。"""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level or "WARNING", format="%(levelname)s %(name)s: %(message)s")
    print("オセロをします．")
    try:
        try:
            config = build_config(args)
        except ValueError as e:
            parser.error(str(e))
        logging.getLogger().setLevel(config.log_level)
        game_loop(config)
    except (KeyboardInterrupt, EOFError):
        print("\n中断しました。")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
