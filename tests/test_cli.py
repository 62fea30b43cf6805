"""Console front end: rendering, prompts and the game loop driven by scripted input."""

import random

import pytest

from othello import cli
from othello.config import GameConfig
from othello.logic import BLACK, EMPTY, WHITE, BoardState


@pytest.fixture
def feed(monkeypatch):
    """Replace `input()` with a scripted sequence; running out behaves like Ctrl+D."""
    def _feed(*lines):
        it = iter(lines)

        def fake_input(prompt=""):
            try:
                return next(it)
            except StopIteration:
                raise EOFError from None

        monkeypatch.setattr("builtins.input", fake_input)
    return _feed


def no_delay(**kw):
    return GameConfig(cpu_delay=(0, 0), **kw)


class TestRendering:
    def test_format_board(self):
        text = cli.format_board(BoardState(2))
        assert text.splitlines() == [
            "   1 2 3 4",
            " 1 . . . .",
            " 2 . ○ ● .",
            " 3 . ● ○ .",
            " 4 . . . .",
        ]

    def test_format_board_with_hints(self):
        text = cli.format_board(BoardState(2), with_help=True)
        assert text.splitlines()[1:] == [
            " 1 . + . .",
            " 2 + ○ ● .",
            " 3 . ● ○ +",
            " 4 . . + .",
        ]

    def test_hints_follow_side_to_move(self):
        text = cli.format_board(BoardState(2, WHITE), with_help=True)
        assert text.splitlines()[1] == " 1 . . + ."

    def test_wide_board_rows(self):
        lines = cli.format_board(BoardState(5)).splitlines()
        assert len(lines) == 11
        assert lines[-1] == "10 " + " ".join(["."] * 10)

    def test_result_draw(self):
        assert cli.format_result(BoardState(2)) == "●が2個，○が2個で引き分け！"

    def test_result_black_wins(self):
        b = BoardState(4)
        b.place(2, 3)
        assert cli.format_result(b) == "●が4個，○が1個で●の勝ち！"

    def test_result_white_wins(self):
        b = BoardState(4, WHITE)
        b.place(2, 4)
        assert cli.format_result(b) == "●が1個，○が4個で○の勝ち！"


class TestPrompts:
    def test_read_int_retries(self, feed, capsys):
        feed("abc", "", "7")
        assert cli.read_int() == 7
        assert capsys.readouterr().out.count("半角数字") == 2

    def test_choose_size(self, feed, capsys):
        feed("3", "2", "10")
        assert cli.choose_size() == 10
        assert capsys.readouterr().out.count("入力が不適切です") == 2

    def test_choose_cpu(self, feed):
        feed("y")
        assert cli.choose_cpu() is True
        feed("yes")
        assert cli.choose_cpu() is False

    def test_choose_color(self, feed, capsys):
        feed("0", "2")
        assert cli.choose_color() == WHITE
        assert "入力が範囲外です" in capsys.readouterr().out
        feed("1")
        assert cli.choose_color() == BLACK

    def test_read_row_hint_only_once(self, feed, capsys):
        feed("5", "4")
        assert cli.read_row(4, with_help=True) == 4
        assert "入力が範囲外です" in capsys.readouterr().out
        feed("5")
        assert cli.read_row(4, with_help=False) == 5

    def test_read_col(self, feed):
        feed("0", "5", "3")
        assert cli.read_col(4) == 3


class TestGameLoop:
    def test_quit_immediately(self, feed, capsys):
        feed("0", "y")
        board = cli.game_loop(no_delay(size=4))
        assert board.count_pieces() == (2, 2)
        out = capsys.readouterr().out
        assert "●のターン" in out
        assert out.rstrip().endswith("●が2個，○が2個で引き分け！")

    def test_quit_cancelled(self, feed, capsys):
        feed("0", "n", "0", "y")
        cli.game_loop(no_delay(size=4))
        assert capsys.readouterr().out.count("本当に終了しますか") == 2

    def test_human_move(self, feed):
        feed("1", "2", "0", "y")
        board = cli.game_loop(no_delay(size=4))
        assert board.count_pieces() == (4, 1)
        assert board.side_to_move == WHITE

    def test_illegal_cell(self, feed, capsys):
        feed("1", "1", "0", "y")
        board = cli.game_loop(no_delay(size=4))
        assert "そこには置けません" in capsys.readouterr().out
        assert board.count_pieces() == (2, 2)

    def test_hint_request(self, feed, capsys):
        feed("5", "0", "y")
        cli.game_loop(no_delay(size=4))
        out = capsys.readouterr().out
        assert " 1 . + . ." in out
        assert "ヒントを見たい場合は1つ目の数字として5" in out

    def test_cpu_moves_first(self, feed, capsys):
        feed("0", "y")
        board = cli.game_loop(no_delay(size=4, vs_cpu=True, human_color=WHITE), random.Random(0))
        out = capsys.readouterr().out
        assert "CPU操作中..." in out
        assert "CPU の手:" in out
        assert board.count_pieces() == (4, 1)
        assert board.side_to_move == WHITE

    def test_eof_propagates(self, feed):
        feed()
        with pytest.raises(EOFError):
            cli.game_loop(no_delay(size=4))

    def test_cpu_turn_reports_end(self, capsys):
        grid = [[EMPTY, WHITE, BLACK, EMPTY]] + [[EMPTY] * 4 for _ in range(3)]
        board = BoardState.from_grid(grid, BLACK)
        assert cli.cpu_turn(board, random.Random(0)) is False
        assert board.count_pieces() == (3, 0)
        assert "CPU の手: 1行 1列" in capsys.readouterr().out

    def test_is_cpu_turn(self):
        board = BoardState(4)
        assert not cli.is_cpu_turn(board, GameConfig())
        assert cli.is_cpu_turn(board, GameConfig(vs_cpu=True, human_color=WHITE))
        assert not cli.is_cpu_turn(board, GameConfig(vs_cpu=True, human_color=BLACK))


class TestConfigFromArgs:
    def parse(self, *argv):
        return cli.build_parser().parse_args(list(argv))

    def test_all_flags_no_prompt(self, feed):
        feed()
        cfg = cli.build_config(self.parse("--size", "6", "--cpu", "--color", "white", "--seed", "4", "--no-delay"))
        assert cfg.size == 6
        assert cfg.vs_cpu is True
        assert cfg.human_color == WHITE
        assert cfg.seed == 4
        assert cfg.cpu_delay == (0.0, 0.0)

    def test_no_cpu_skips_color_prompt(self, feed):
        feed()
        cfg = cli.build_config(self.parse("--size", "4", "--no-cpu"))
        assert cfg.vs_cpu is False

    def test_interactive(self, feed):
        feed("5", "6", "y", "2")
        cfg = cli.build_config(self.parse())
        assert cfg.size == 6
        assert cfg.vs_cpu is True
        assert cfg.human_color == WHITE

    def test_config_file_disables_prompts(self, feed, tmp_path):
        feed()
        path = tmp_path / "othello.toml"
        path.write_text("[game]\nsize = 12\nvs_cpu = true\n", encoding="utf-8")
        cfg = cli.build_config(self.parse("--config", str(path), "--log-level", "DEBUG"))
        assert cfg.size == 12
        assert cfg.vs_cpu is True
        assert cfg.human_color == BLACK
        assert cfg.log_level == "DEBUG"

    def test_missing_config_file(self, feed, tmp_path):
        feed()
        with pytest.raises(ValueError, match="not found"):
            cli.build_config(self.parse("--config", str(tmp_path / "typo.toml")))

    def test_bad_size_raises(self, feed):
        feed()
        with pytest.raises(ValueError):
            cli.build_config(self.parse("--size", "5", "--no-cpu"))


class TestMain:
    def test_plays_and_exits(self, feed, capsys):
        feed("0", "y")
        assert cli.main(["--size", "4", "--no-cpu"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("オセロをします．")
        assert "引き分け" in out

    def test_invalid_size_is_usage_error(self, feed):
        feed()
        with pytest.raises(SystemExit) as exc:
            cli.main(["--size", "5", "--no-cpu"])
        assert exc.value.code == 2

    def test_interrupted(self, feed, capsys):
        feed()
        assert cli.main(["--size", "4", "--no-cpu"]) == 1
        assert "中断しました" in capsys.readouterr().out

    @pytest.mark.parametrize("line", ['size = "8"', "cpu_delay = 0.5", "log_level = 10", "human_color = true"])
    def test_wrongly_typed_config_is_usage_error(self, feed, tmp_path, capsys, line):
        feed()
        path = tmp_path / "othello.toml"
        path.write_text(f"[game]\n{line}\n", encoding="utf-8")
        with pytest.raises(SystemExit) as exc:
            cli.main(["--config", str(path)])
        assert exc.value.code == 2
        assert "error:" in capsys.readouterr().err

    def test_missing_config_is_usage_error(self, feed, tmp_path, capsys):
        feed()
        with pytest.raises(SystemExit) as exc:
            cli.main(["--config", str(tmp_path / "typo.toml")])
        assert exc.value.code == 2
        assert "typo.toml" in capsys.readouterr().err
