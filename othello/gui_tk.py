"""
Tkinter を使ったオセロのGUI実装。

目的と方針
- 盤面エンジン `logic.BoardState` と CPU（`ai.choose_move`）をUIから呼び出す薄い層に徹する
- 盤描画・入力（クリック）・結果表示を担当し、反転・手番交代・パスはエンジンに任せる
- CPU手はUIスレッド内で処理し、`after` で間を空けて固まりを防ぐ

主なUI要素
- 上部バー: New Game / Hints / Quit ボタン と ステータス表示
- キャンバス: 盤面（背景・マス目・石・置けるマスと裏返せる枚数のヒント）
"""

from __future__ import annotations

import random
import tkinter as tk
from typing import Optional

from . import logic
from .ai import choose_move
from .config import GameConfig


SIZES = (8, 12, 16)


class OthelloApp:
    """アプリケーションクラス（盤面エンジンとUIの橋渡し）。"""

    def __init__(self, root: tk.Tk, config: Optional[GameConfig] = None, ask_setup: bool = True):
        """ウィンドウや盤状態、イベントの初期化を行う。

        引数
        - root: Tk のルートウィンドウ
        - config: 初期設定（省略時は既定値）
        - ask_setup: 起動直後に設定ダイアログを出すか
        """
        self.root = root
        self.root.title("Othello (Tkinter)")

        self.config = config or GameConfig()
        self.rng = random.Random(self.config.seed)
        self.board = logic.BoardState(self.config.half, self.config.starting_side)
        self.finished = False
        self.show_hints = True

        self.status = tk.StringVar(value="Ready")
        self.top = tk.Frame(root)
        self.top.pack(side=tk.TOP, fill=tk.X)
        tk.Button(self.top, text="New Game", command=self.new_game).pack(side=tk.LEFT)
        tk.Button(self.top, text="Hints", command=self.toggle_hints).pack(side=tk.LEFT)
        tk.Button(self.top, text="Quit", command=root.destroy).pack(side=tk.LEFT)
        tk.Label(self.top, textvariable=self.status, anchor="w").pack(side=tk.LEFT, padx=10)

        self.canvas_size = 560
        self.canvas = tk.Canvas(root, width=self.canvas_size, height=self.canvas_size, bg="#1a7f2e")
        self.canvas.pack(fill=tk.BOTH, expand=True)
        self.canvas.bind("<Button-1>", self.on_click)

        if ask_setup:
            self.open_setup_dialog()
        self.reset_board()

    # ----- Game control -----
    def reset_board(self) -> None:
        self.board = logic.BoardState(self.config.half, self.config.starting_side)
        self.finished = False
        self.redraw()

    def new_game(self) -> None:
        """設定ダイアログ→盤を初期化して開始する。"""
        self.open_setup_dialog()
        self.reset_board()

    def toggle_hints(self) -> None:
        self.show_hints = not self.show_hints
        self.redraw()

    def is_cpu_turn(self) -> bool:
        return not self.finished and self.config.vs_cpu and self.board.side_to_move != self.config.human_color

    def apply(self, r: int, c: int) -> None:
        """着手を盤面エンジンに渡し、終局なら記録して再描画する。"""
        if not self.board.place(r, c):
            self.finished = True
        self.redraw()

    # ----- Rendering -----
    def redraw(self) -> None:
        """画面全体を描き直し、必要ならCPU手番処理もスケジュールする。"""
        self.canvas.delete("all")
        self.draw_grid()
        self.draw_discs()
        if self.show_hints and not self.is_cpu_turn() and not self.finished:
            self.draw_hints()
        self.update_status()
        if self.is_cpu_turn():
            self.root.after(400, self.maybe_cpu_turn)

    def cell_size(self) -> int:
        n = self.board.size
        return min(int(self.canvas.winfo_width() / n), int(self.canvas.winfo_height() / n)) or int(self.canvas_size / n)

    def draw_grid(self) -> None:
        n = self.board.size
        cs = self.cell_size()
        for r in range(n):
            for c in range(n):
                x0, y0 = c * cs, r * cs
                self.canvas.create_rectangle(x0, y0, x0 + cs, y0 + cs, outline="#0f4f20", fill="#1a7f2e")
        for i in range(n):
            self.canvas.create_text((i + 0.5) * cs, 8, text=str(i + 1), fill="white")
            self.canvas.create_text(8, (i + 0.5) * cs, text=str(i + 1), fill="white")

    def draw_discs(self) -> None:
        cs = self.cell_size()
        pad = max(4, cs // 12)
        for r, row in enumerate(self.board.render()):
            for c, v in enumerate(row):
                if v == logic.EMPTY:
                    continue
                x0, y0 = c * cs + pad, r * cs + pad
                x1, y1 = (c + 1) * cs - pad, (r + 1) * cs - pad
                color = "black" if v == logic.BLACK else "white"
                outline = "#000000" if v == logic.BLACK else "#f0f0f0"
                self.canvas.create_oval(x0, y0, x1, y1, fill=color, outline=outline, width=2)

    def draw_hints(self) -> None:
        """置けるマスに、裏返せる枚数を小さく表示する。"""
        cs = self.cell_size()
        for r, row in enumerate(self.board.capture_counts()):
            for c, count in enumerate(row):
                if count == 0:
                    continue
                x, y = c * cs + cs // 2, r * cs + cs // 2
                self.canvas.create_oval(x - 9, y - 9, x + 9, y + 9, outline="#ffe08a", width=2)
                self.canvas.create_text(x, y, text=str(count), fill="#ffe08a")

    def update_status(self) -> None:
        b, w = self.board.count_pieces()
        if self.finished:
            result = "Draw"
            if b > w:
                result = "Black wins"
            elif w > b:
                result = "White wins"
            self.status.set(f"Game Over | Black={b} White={w} | {result}")
        else:
            turn = "White" if self.board.is_white_turn() else "Black"
            self.status.set(f"Turn: {turn} | Black={b} White={w}")

    # ----- Interaction -----
    def open_setup_dialog(self) -> None:
        """盤面サイズ・対戦形式・手番色をまとめて選ぶモーダルダイアログ。"""
        dlg = tk.Toplevel(self.root)
        dlg.title("新規対局の設定")
        dlg.transient(self.root)
        dlg.grab_set()

        cfg = self.config
        size_var = tk.IntVar(value=cfg.size if cfg.size in SIZES else 8)
        mode_var = tk.StringVar(value="cpu" if cfg.vs_cpu else "hvh")
        color_var = tk.IntVar(value=cfg.human_color)

        frm = tk.Frame(dlg, padx=14, pady=12)
        frm.pack(fill=tk.BOTH, expand=True)

        tk.Label(frm, text="盤面サイズ").grid(row=0, column=0, sticky="w")
        size_frame = tk.Frame(frm)
        size_frame.grid(row=1, column=0, sticky="w")
        for col, val in enumerate(SIZES):
            tk.Radiobutton(size_frame, text=f"{val} x {val}", value=val, variable=size_var).grid(row=0, column=col, padx=6)

        tk.Label(frm, text="対戦形式").grid(row=2, column=0, sticky="w", pady=(10, 0))
        mode_frame = tk.Frame(frm)
        mode_frame.grid(row=3, column=0, sticky="w")
        tk.Radiobutton(mode_frame, text="人間 vs 人間", value="hvh", variable=mode_var).grid(row=0, column=0, padx=6)
        tk.Radiobutton(mode_frame, text="人間 vs CPU", value="cpu", variable=mode_var).grid(row=0, column=1, padx=6)

        tk.Label(frm, text="手番色（対CPU時）").grid(row=4, column=0, sticky="w", pady=(10, 0))
        color_frame = tk.Frame(frm)
        color_frame.grid(row=5, column=0, sticky="w")
        rb_black = tk.Radiobutton(color_frame, text="黒（先手）", value=logic.BLACK, variable=color_var)
        rb_white = tk.Radiobutton(color_frame, text="白（後手）", value=logic.WHITE, variable=color_var)
        rb_black.grid(row=0, column=0, padx=6)
        rb_white.grid(row=0, column=1, padx=6)

        def _toggle_color_state(*_args):
            state = tk.NORMAL if mode_var.get() == "cpu" else tk.DISABLED
            rb_black.configure(state=state)
            rb_white.configure(state=state)

        mode_var.trace_add("write", _toggle_color_state)
        _toggle_color_state()

        btns = tk.Frame(frm)
        btns.grid(row=6, column=0, sticky="e", pady=(14, 0))

        def on_ok():
            self.config = GameConfig(
                size=size_var.get(),
                vs_cpu=(mode_var.get() == "cpu"),
                human_color=color_var.get(),
                starting_side=cfg.starting_side,
                cpu_delay=cfg.cpu_delay,
                seed=cfg.seed,
                log_level=cfg.log_level,
            )
            dlg.destroy()

        tk.Button(btns, text="キャンセル", command=dlg.destroy).pack(side=tk.RIGHT, padx=6)
        tk.Button(btns, text="はい", command=on_ok).pack(side=tk.RIGHT)

        dlg.wait_window()

    def canvas_to_cell(self, x: int, y: int) -> Optional[logic.Coord]:
        """キャンバス座標から盤座標 (row, col) を求める。範囲外は None。"""
        cs = self.cell_size()
        c, r = x // cs, y // cs
        if logic.in_bounds(self.board.size, r, c):
            return (r, c)
        return None

    def on_click(self, event) -> None:
        """クリック処理。人間の手番のみ受け付け、合法手であれば着手する。"""
        if self.finished or self.is_cpu_turn():
            return
        cell = self.canvas_to_cell(event.x, event.y)
        if cell is None:
            return
        r, c = cell
        if self.board.capture_counts()[r][c] == 0:
            self.flash_cell(r, c)
            return
        self.apply(r, c)

    def maybe_cpu_turn(self) -> None:
        """CPU手番なら重み付きランダムで1手指す。"""
        if not self.is_cpu_turn():
            return
        move = choose_move(self.board, self.rng)
        if move is None:
            self.finished = True
            self.redraw()
            return
        self.apply(*move)

    def flash_cell(self, r: int, c: int) -> None:
        """不正なクリック時に該当マスを一瞬赤枠でハイライト。"""
        cs = self.cell_size()
        x0, y0 = c * cs, r * cs
        rect = self.canvas.create_rectangle(x0, y0, x0 + cs, y0 + cs, outline="#ff6666", width=3)
        self.root.after(150, lambda: self.canvas.delete(rect))


def main() -> None:
    """GUIエントリーポイント。ウィンドウ生成とリサイズ対応を設定。"""
    root = tk.Tk()
    app = OthelloApp(root)
    app.canvas.bind("<Configure>", lambda _evt: app.redraw())
    root.mainloop()


if __name__ == "__main__":
    main()
