"""
Game session for the sweeper engine.

Owns one board plus the game status and counters, and turns user
gestures (reveal, flag, chord) into state changes. Invalid gestures are
silent no-ops; only construction can fail.
"""
import logging
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterable, List, Optional

import numpy as np

from .board import Board, BoardConfig, ConfigError, DEFAULT_CONFIG, Position
from .clock import Timer

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

MAX_ELAPSED_SECONDS = 999


class GameStatus(Enum):
    """Possible states of a session."""

    NOT_STARTED = auto()
    IN_PROGRESS = auto()
    WON = auto()
    LOST = auto()

    @property
    def is_over(self) -> bool:
        """Check if the game has been won or lost."""
        return self in (GameStatus.WON, GameStatus.LOST)


@dataclass
class RevealResult:
    """
    Outcome of a single gesture.

    Attributes:
        status: Session status after the gesture.
        changed: Positions whose display changed, in the order they
            changed.
        detonated: Mine that ended the game, if this gesture lost it.
    """

    status: GameStatus
    changed: List[Position] = field(default_factory=list)
    detonated: Optional[Position] = None

    def __bool__(self) -> bool:
        return bool(self.changed)


@dataclass
class LossReport:
    """What the presentation layer needs to draw a lost board."""

    detonated: Position
    mines: List[Position]
    wrong_flags: List[Position]


# ============================================================================
# Session Class
# ============================================================================

class GameSession:
    """
    A single game from first click to win or loss.

    Mines are placed lazily on the first reveal so that the clicked cell
    and its neighbors are always safe.
    """

    def __init__(
        self,
        config: BoardConfig = DEFAULT_CONFIG,
        rng: Optional[random.Random] = None,
        timer: Optional[Timer] = None,
    ) -> None:
        """
        Initialize the session.

        Args:
            config: Board dimensions and mine count.
            rng: Random source for mine placement.
            timer: Receives start/stop notifications.
        """
        self.config = config
        self.rng = rng if rng is not None else random.Random()
        self.timer = timer if timer is not None else Timer()
        self.board = Board(config)
        self._clear_state()

    def _clear_state(self) -> None:
        self.status = GameStatus.NOT_STARTED
        self.flags_placed = 0
        self.revealed_count = 0
        self.elapsed_seconds = 0
        self.detonated_cell: Optional[Position] = None
        self.loss_report: Optional[LossReport] = None

    # ========================================================================
    # Counters
    # ========================================================================

    @property
    def flags_remaining(self) -> int:
        """Flags the player may still place."""
        return self.config.num_mines - self.flags_placed

    @property
    def score(self) -> Optional[int]:
        """Elapsed seconds of a won game, None otherwise."""
        if self.status != GameStatus.WON:
            return None
        return self.elapsed_seconds

    def _noop(self) -> RevealResult:
        return RevealResult(self.status)

    # ========================================================================
    # Game Start
    # ========================================================================

    def _begin(self, row: int, col: int) -> RevealResult:
        """Enter play and perform the first reveal."""
        self.status = GameStatus.IN_PROGRESS
        self.timer.start()
        changed = self._flood(row, col)
        return self._finish_move(changed)

    def start_with_layout(
        self, mines: Iterable[Position], row: int, col: int
    ) -> RevealResult:
        """
        Start the game with fixed mine positions instead of random ones.

        Args:
            mines: Mine positions, exactly config.num_mines of them.
            row: Row of the first reveal.
            col: Column of the first reveal.

        Raises:
            ConfigError: The layout is invalid or puts a mine in the
                safe zone around (row, col).
        """
        if self.status != GameStatus.NOT_STARTED:
            return self._noop()
        if not self.board.in_bounds(row, col):
            raise ConfigError(f"First reveal ({row}, {col}) is off the board")
        mines = list(mines)
        if self.board.safe_zone(row, col).intersection(mines):
            raise ConfigError(f"Mines must not touch the first reveal ({row}, {col})")
        cell = self.board.cell(row, col)
        if cell.is_flagged:
            return self._noop()
        self.board.lay_mines(mines)
        logger.debug("Laid %d fixed mines, first reveal at (%d, %d)",
                     len(mines), row, col)
        return self._begin(row, col)

    # ========================================================================
    # Gestures
    # ========================================================================

    def reveal(self, row: int, col: int) -> RevealResult:
        """
        Primary click on a cell.

        The first reveal places mines around a safe zone. Revealing a
        mine loses the game; revealing a zero cell cascades.
        """
        if self.status.is_over or not self.board.in_bounds(row, col):
            return self._noop()
        cell = self.board.cell(row, col)
        if not cell.is_hidden:
            return self._noop()

        if self.status == GameStatus.NOT_STARTED:
            mines = self.board.place_mines(row, col, self.rng)
            logger.debug("Placed %d mines, first reveal at (%d, %d)",
                         len(mines), row, col)
            return self._begin(row, col)

        if cell.is_mine:
            return self.trigger_loss(row, col)

        return self._finish_move(self._flood(row, col))

    def toggle_flag(self, row: int, col: int) -> RevealResult:
        """
        Secondary click: place or remove a flag.

        Placing is refused once every mine has a flag; removing is
        always allowed.
        """
        if self.status.is_over or not self.board.in_bounds(row, col):
            return self._noop()
        cell = self.board.cell(row, col)
        if cell.is_revealed:
            return self._noop()
        if cell.is_hidden and self.flags_placed >= self.config.num_mines:
            logger.debug("Flag refused at (%d, %d): no flags left", row, col)
            return self._noop()

        cell.toggle_flag()
        self.flags_placed += 1 if cell.is_flagged else -1
        return self._finish_move([(row, col)])

    def chord_open(self, row: int, col: int) -> RevealResult:
        """
        Tertiary click: open every unflagged neighbor of a numbered cell.

        Only acts when the number of flagged neighbors equals the cell's
        count. The sweep stops at the first unflagged mine, which loses
        the game; neighbors opened before it stay revealed.
        """
        if self.status != GameStatus.IN_PROGRESS:
            return self._noop()
        cell = self.board.cell(row, col)
        if cell is None or not cell.is_revealed or cell.is_mine:
            return self._noop()
        if cell.adjacent_mines == 0:
            return self._noop()
        flagged = self.board.count_neighbors(row, col, lambda c: c.is_flagged)
        if flagged != cell.adjacent_mines:
            return self._noop()

        changed: List[Position] = []
        for neighbor_row, neighbor_col in self.board.neighbors(row, col):
            neighbor = self.board.cell(neighbor_row, neighbor_col)
            if not neighbor.is_hidden:
                continue
            if neighbor.is_mine:
                logger.debug("Chord at (%d, %d) hit a misflagged mine", row, col)
                result = self.trigger_loss(neighbor_row, neighbor_col)
                result.changed = changed + result.changed
                return result
            changed.extend(self._flood(neighbor_row, neighbor_col))
        return self._finish_move(changed)

    def tick(self) -> None:
        """Advance the elapsed-time counter by one second."""
        if self.status != GameStatus.IN_PROGRESS:
            return
        if self.elapsed_seconds >= MAX_ELAPSED_SECONDS:
            return
        self.elapsed_seconds += 1
        if self.elapsed_seconds >= MAX_ELAPSED_SECONDS:
            self.timer.stop()

    def reset(self) -> None:
        """Discard the current game and start a fresh, unmined board."""
        self.timer.stop()
        self.board.reset()
        self._clear_state()

    # ========================================================================
    # Reveal & End-of-game (Low-level)
    # ========================================================================

    def _flood(self, row: int, col: int) -> List[Position]:
        revealed = self.board.flood_reveal(row, col)
        self.revealed_count += len(revealed)
        return revealed

    def _finish_move(self, changed: List[Position]) -> RevealResult:
        """Check the win condition after a non-losing gesture."""
        if (self.status == GameStatus.IN_PROGRESS
                and self.revealed_count == self.config.safe_cells):
            changed = changed + self._win()
        return RevealResult(self.status, changed)

    def _win(self) -> List[Position]:
        """Mark the game won and flag every remaining mine."""
        self.status = GameStatus.WON
        self.timer.stop()
        flagged = self.board.hidden_mines()
        for row, col in flagged:
            self.board.cell(row, col).toggle_flag()
        self.flags_placed += len(flagged)
        logger.info("Game won in %d seconds", self.elapsed_seconds)
        return flagged

    def trigger_loss(self, row: int, col: int) -> RevealResult:
        """
        End the game on a detonated mine.

        Records the detonated cell and a report of every mine and every
        misplaced flag for display. Only an in-progress game can be lost,
        and only on a mine.
        """
        if self.status != GameStatus.IN_PROGRESS:
            return self._noop()
        cell = self.board.cell(row, col)
        if cell is None or not cell.is_mine:
            return self._noop()
        self.status = GameStatus.LOST
        self.timer.stop()
        self.detonated_cell = (row, col)
        self.loss_report = LossReport(
            detonated=(row, col),
            mines=self.board.mine_positions(),
            wrong_flags=self.board.wrong_flags(),
        )
        logger.info("Game lost at (%d, %d) after %d seconds",
                    row, col, self.elapsed_seconds)
        changed = self.loss_report.mines + self.loss_report.wrong_flags
        return RevealResult(self.status, changed, detonated=(row, col))

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    def snapshot(self) -> np.ndarray:
        """Display codes for every cell; mines are exposed after a loss."""
        lost = self.status == GameStatus.LOST
        return self.board.snapshot(show_mines=lost, detonated=self.detonated_cell)


def new_session(
    rows: int = 16,
    cols: int = 16,
    num_mines: int = 40,
    rng: Optional[random.Random] = None,
    timer: Optional[Timer] = None,
) -> GameSession:
    """
    Create a session, validating the parameters.

    Raises:
        ConfigError: A dimension is not positive, or the mines leave no
            room for the first-click safe zone.
    """
    return GameSession(BoardConfig(rows, cols, num_mines), rng=rng, timer=timer)
