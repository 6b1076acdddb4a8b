"""
Unit tests for the command-line entry point.

Most tests stub out play(); the session tests run the real curses
wiring against a fake window so no terminal is needed.
"""
import curses

import pytest
from conftest import FakeWindow
from sweeper import Board, BoardConfig, GameState, TerminalError
from sweeper import cli


@pytest.fixture
def played(monkeypatch: pytest.MonkeyPatch):
    """Replace play() and record the board it was given."""
    boards = []

    def install(result):
        def fake_play(board: Board) -> GameState:
            boards.append(board)
            if isinstance(result, Exception):
                raise result
            return result

        monkeypatch.setattr(cli, "play", fake_play)
        return boards

    return install


class TestParser:
    """Test argument defaults."""

    def test_defaults_are_classic(self) -> None:
        """No flags means a 16x16 board with 32 mines."""
        args = cli.build_parser().parse_args([])
        assert (args.width, args.height, args.mines) == (16, 16, 32)
        assert args.seed is None
        assert args.log_file is None


class TestMain:
    """Test end-of-game output and exit codes."""

    def test_loss_message(self, played, capsys) -> None:
        """A loss prints GAME OVER!."""
        played(GameState.LOSE)
        assert cli.main([]) == 0
        out = capsys.readouterr().out
        assert out.endswith("Remaining: 32\nGAME OVER!\n")

    def test_win_message(self, played, capsys) -> None:
        """A win prints YOU WIN!."""
        played(GameState.WIN)
        assert cli.main([]) == 0
        assert capsys.readouterr().out.endswith("YOU WIN!\n")

    def test_quit_is_silent(self, played, capsys) -> None:
        """Quitting prints nothing."""
        played(GameState.QUIT)
        assert cli.main([]) == 0
        assert capsys.readouterr().out == ""

    def test_board_from_flags(self, played) -> None:
        """Dimension flags shape the board; too many mines is clamped."""
        boards = played(GameState.QUIT)
        cli.main(["--width", "4", "--height", "3", "--mines", "50"])
        board = boards[0]
        assert (board.width, board.height, board.mine_count) == (4, 3, 12)

    def test_seed_is_reproducible(self, played) -> None:
        """The same seed lays out the same mines."""
        boards = played(GameState.QUIT)
        cli.main(["--seed", "5"])
        cli.main(["--seed", "5"])
        layouts = [[t.is_mine for _, _, t in b.tiles()] for b in boards]
        assert layouts[0] == layouts[1]

    def test_invalid_dimensions_exit(self, played, capsys) -> None:
        """Bad dimensions are reported as a usage error."""
        played(GameState.QUIT)
        with pytest.raises(SystemExit) as excinfo:
            cli.main(["--width", "0"])
        assert excinfo.value.code == 2
        assert "dimensions must be positive" in capsys.readouterr().err

    def test_terminal_failure_exits_nonzero(self, played, capsys) -> None:
        """Terminal errors are fatal with a diagnostic."""
        played(TerminalError("failed to read key: no input"))
        assert cli.main([]) == 1
        assert "error: failed to read key" in capsys.readouterr().err

    def test_log_file(self, played, tmp_path) -> None:
        """--log-file is accepted and the game still runs."""
        boards = played(GameState.QUIT)
        assert cli.main(["--log-file", str(tmp_path / "game.log")]) == 0
        assert len(boards) == 1


@pytest.fixture
def session(monkeypatch: pytest.MonkeyPatch, no_cursor):
    """Run curses.wrapper sessions on a fake window fed with key codes."""
    def install(keys):
        window = FakeWindow(keys=keys)
        monkeypatch.setattr(curses, "wrapper", lambda func: func(window))
        return window

    return install


class TestCursesSession:
    """Test play() and main() through the curses wiring."""

    def test_play_returns_terminal_state(self, session) -> None:
        """The session reads keys from the window until the game ends."""
        window = session([ord("f"), ord("q")])
        board = Board.from_mines(BoardConfig(2, 1), [(1, 0)])
        assert cli.play(board) == GameState.QUIT
        assert window.reads == 2
        assert board.flag_count == 1
        assert window.lines[0] == "(F)# "

    def test_loss_leaves_minefield_on_screen(self, session, capsys) -> None:
        """After a loss the opened mines are printed above GAME OVER!."""
        session([ord(" "), curses.KEY_RIGHT, ord(" ")])
        assert cli.main(["--width", "2", "--height", "1", "--mines", "1"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert "*" in lines[0]
        assert lines[-2] == "Mines: 1, Flags: 0, Remaining: 1"
        assert lines[-1] == "GAME OVER!"

    def test_win_prints_final_board(self, session, capsys) -> None:
        """A cleared board is printed before YOU WIN!."""
        session([ord(" ")])
        assert cli.main(["--width", "2", "--height", "1", "--mines", "0"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "( )  "
        assert lines[-1] == "YOU WIN!"

    def test_quit_session_prints_nothing(self, session, capsys) -> None:
        """Quitting from the keyboard leaves no output."""
        session([ord("q")])
        assert cli.main(["--seed", "3"]) == 0
        assert capsys.readouterr().out == ""
