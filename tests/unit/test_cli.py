"""
Unit tests for the text-mode driver.
"""
import io

import numpy as np
from conftest import CORNER_LAYOUT, ROW_LAYOUT, start_session
from sweeper import GameStatus
from sweeper.cli import main, render_board, render_status, run


# ============================================================================
# Rendering Tests
# ============================================================================

class TestRender:
    """Test ASCII rendering of snapshots."""

    def test_render_symbols(self) -> None:
        """Each display code maps to its ASCII symbol."""
        codes = np.array([[-1, -2, 0], [3, 9, 10], [-3, 8, 1]], dtype=np.int8)
        assert render_board(codes) == ". F  \n3 * #\nX 8 1"

    def test_render_started_board(self, row_session) -> None:
        """Started board renders hidden row and counts."""
        lines = render_board(row_session.snapshot()).splitlines()
        assert lines[0] == ". . . . ."
        assert lines[1] == "1 1 2 1 1"

    def test_status_line_pads_counters(self, row_session) -> None:
        """Counters are zero-padded to three digits."""
        row_session.toggle_flag(0, 0)
        row_session.tick()
        assert render_status(row_session) == "[001] [001] IN_PROGRESS"


# ============================================================================
# Command Loop Tests
# ============================================================================

class TestRun:
    """Test the command loop."""

    def test_commands_drive_session(self) -> None:
        """Flag and chord commands win the game."""
        session = start_session(CORNER_LAYOUT)
        out = io.StringIO()
        run(session, ["f 0 0", "f 0 2", "f 1 0", "c 1 1", "q"], out)
        assert session.status == GameStatus.WON
        assert "You win!" in out.getvalue()

    def test_loss_message(self) -> None:
        """Revealing a mine prints the loss message."""
        session = start_session(ROW_LAYOUT)
        out = io.StringIO()
        run(session, ["r 0 1"], out)
        assert session.status == GameStatus.LOST
        assert "Boom" in out.getvalue()

    def test_outcome_printed_once(self) -> None:
        """Commands after the game ends do not repeat the outcome."""
        session = start_session(ROW_LAYOUT)
        out = io.StringIO()
        run(session, ["r 0 1", "r 0 0", "f 0 4"], out)
        assert out.getvalue().count("Boom") == 1

    def test_bad_commands_print_hint(self, row_session) -> None:
        """Malformed commands print a hint and change nothing."""
        out = io.StringIO()
        run(row_session, ["x", "r 1", "r a b", ""], out)
        text = out.getvalue()
        assert "Commands:" in text
        assert "must be integers" in text
        assert row_session.status == GameStatus.IN_PROGRESS

    def test_new_game_resets(self, row_session) -> None:
        """The n command resets the session."""
        run(row_session, ["n"], io.StringIO())
        assert row_session.status == GameStatus.NOT_STARTED

    def test_quit_stops_processing(self, row_session) -> None:
        """Commands after q are ignored."""
        run(row_session, ["q", "r 0 1"], io.StringIO())
        assert row_session.status == GameStatus.IN_PROGRESS


class TestMain:
    """Test argument handling."""

    def test_invalid_board_exits_with_error(self) -> None:
        """Invalid board parameters exit with status 2."""
        assert main(["--rows", "3", "--cols", "3", "--mines", "1"]) == 2
