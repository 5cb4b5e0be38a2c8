"""
Board module for the sweeper engine.

Implements the grid with safe-zone mine placement, neighbor counting
and the work-list flood-fill reveal. Session status (started, won, lost)
lives in the session module; the board only knows cells.
"""
import random
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Set, Tuple

import numpy as np

from .cell import Cell, CellState, DETONATED_CODE

Position = Tuple[int, int]


# ============================================================================
# Configuration
# ============================================================================

# The first click and its eight neighbors.
SAFE_ZONE_SIZE = 9


class ConfigError(ValueError):
    """Invalid board parameters."""


@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a board.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        num_mines: Total mines to place.
    """

    rows: int = 16
    cols: int = 16
    num_mines: int = 40

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.rows < 1 or self.cols < 1:
            raise ConfigError("Board dimensions must be positive")
        if self.num_mines < 1:
            raise ConfigError("Mine count must be positive")
        limit = self.rows * self.cols - SAFE_ZONE_SIZE
        if self.num_mines >= limit:
            raise ConfigError(
                f"Too many mines for a {self.rows}x{self.cols} board "
                f"(must be below {max(limit, 0)})"
            )

    @property
    def total_cells(self) -> int:
        """Number of cells on the board."""
        return self.rows * self.cols

    @property
    def safe_cells(self) -> int:
        """Number of cells that must be revealed to win."""
        return self.total_cells - self.num_mines


DEFAULT_CONFIG = BoardConfig(16, 16, 40)


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Grid of cells with mine placement and reveal logic.
    """

    config: BoardConfig = DEFAULT_CONFIG
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)
    _mines_placed: bool = False

    def __post_init__(self) -> None:
        """Initialize the grid after dataclass creation."""
        self._init_grid()

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create empty grid of cells."""
        self._grid = [
            [Cell() for _ in range(self.config.cols)]
            for _ in range(self.config.rows)
        ]
        self._mines_placed = False

    def place_mines(
        self, safe_row: int, safe_col: int, rng: Optional[random.Random] = None
    ) -> List[Position]:
        """
        Place mines uniformly at random outside the safe zone.

        Args:
            safe_row: Row of the first click.
            safe_col: Column of the first click.
            rng: Random source (module-level random if omitted).

        Returns:
            Positions of the placed mines.
        """
        if self._mines_placed:
            raise RuntimeError("Mines have already been placed on this board")
        excluded = self.safe_zone(safe_row, safe_col)
        candidates = [
            position for position, _ in self.cells()
            if position not in excluded
        ]
        sampler = rng if rng is not None else random
        positions = sampler.sample(candidates, self.config.num_mines)
        self.lay_mines(positions)
        return positions

    def lay_mines(self, positions: Iterable[Position]) -> None:
        """
        Put mines at exact positions and compute neighbor counts.

        Raises:
            ConfigError: Positions are out of bounds, repeated, or do not
                match the configured mine count.
        """
        if self._mines_placed:
            raise RuntimeError("Mines have already been placed on this board")
        positions = list(positions)
        if len(set(positions)) != len(positions):
            raise ConfigError("Mine positions must be distinct")
        if len(positions) != self.config.num_mines:
            raise ConfigError(
                f"Expected {self.config.num_mines} mines, got {len(positions)}"
            )
        for row, col in positions:
            if not self.in_bounds(row, col):
                raise ConfigError(f"Mine position ({row}, {col}) is off the board")

        for row, col in positions:
            self._grid[row][col].is_mine = True
        # Counts depend on the full mine set.
        for row, col in positions:
            for neighbor_row, neighbor_col in self.neighbors(row, col):
                neighbor = self._grid[neighbor_row][neighbor_col]
                if not neighbor.is_mine:
                    neighbor.adjacent_mines += 1
        self._mines_placed = True

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def neighbors(self, row: int, col: int) -> List[Position]:
        """
        Get valid neighboring cell positions in row-major order.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for in-bounds neighbors.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self.in_bounds(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def safe_zone(self, row: int, col: int) -> Set[Position]:
        """The cell and its in-bounds neighbors."""
        zone = set(self.neighbors(row, col))
        zone.add((row, col))
        return zone

    def in_bounds(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.config.rows and 0 <= col < self.config.cols

    def count_neighbors(self, row: int, col: int, predicate) -> int:
        """Count neighbors whose cell satisfies predicate."""
        return sum(
            1 for neighbor_row, neighbor_col in self.neighbors(row, col)
            if predicate(self._grid[neighbor_row][neighbor_col])
        )

    # ========================================================================
    # Reveal (Mid-level)
    # ========================================================================

    def flood_reveal(self, row: int, col: int) -> List[Position]:
        """
        Reveal a safe cell, cascading through connected zero cells.

        Uses an explicit stack so large empty regions cannot exhaust the
        call stack. Out-of-bounds, revealed and flagged cells are skipped.

        Returns:
            Newly revealed positions, each listed once.
        """
        revealed: List[Position] = []
        pending = [(row, col)]
        while pending:
            current_row, current_col = pending.pop()
            if not self.in_bounds(current_row, current_col):
                continue
            cell = self._grid[current_row][current_col]
            if not cell.reveal():
                continue
            assert not cell.is_mine, (
                f"cascade reached mine at ({current_row}, {current_col})"
            )
            revealed.append((current_row, current_col))
            if cell.adjacent_mines == 0:
                for neighbor in self.neighbors(current_row, current_col):
                    if self._grid[neighbor[0]][neighbor[1]].is_hidden:
                        pending.append(neighbor)
        return revealed

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def mines_placed(self) -> bool:
        """Check if mines have been laid."""
        return self._mines_placed

    def cell(self, row: int, col: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self.in_bounds(row, col):
            return None
        return self._grid[row][col]

    def cells(self) -> Iterator[Tuple[Position, Cell]]:
        """Iterate over ((row, col), cell) in row-major order."""
        for row in range(self.config.rows):
            for col in range(self.config.cols):
                yield (row, col), self._grid[row][col]

    def mine_positions(self) -> List[Position]:
        """Positions of every mine, row-major."""
        return [position for position, cell in self.cells() if cell.is_mine]

    def hidden_mines(self) -> List[Position]:
        """Mines that are not flagged."""
        return [
            position for position, cell in self.cells()
            if cell.is_mine and cell.state != CellState.FLAGGED
        ]

    def wrong_flags(self) -> List[Position]:
        """Flagged cells that do not hold a mine."""
        return [
            position for position, cell in self.cells()
            if cell.is_flagged and not cell.is_mine
        ]

    def snapshot(
        self, show_mines: bool = False, detonated: Optional[Position] = None
    ) -> np.ndarray:
        """
        Get board state as a numpy array of display codes.

        Args:
            show_mines: Expose every mine and misplaced flag.
            detonated: Position of the mine that ended the game.

        Returns:
            2D int8 array, see Cell.to_code for the values.
        """
        codes = np.zeros((self.config.rows, self.config.cols), dtype=np.int8)
        for (row, col), cell in self.cells():
            codes[row, col] = cell.to_code(show_mines)
        if detonated is not None:
            codes[detonated] = DETONATED_CODE
        return codes

    def reset(self) -> None:
        """Clear all mines and cell states."""
        self._init_grid()
