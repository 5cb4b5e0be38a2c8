"""
Pytest configuration and shared fixtures.
"""
import random
import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sweeper import BoardConfig, Cell, GameSession, Timer, new_session


# ============================================================================
# Layouts
# ============================================================================
#
# All layouts are 5x5 with the first reveal at (4, 4).
#
# ROW_LAYOUT, mines at (0,1) and (0,3). After the first reveal row 0 is
# still hidden and row 1 reads "1 1 2 1 1":
#
#     ? M ? M ?
#     1 1 2 1 1
#     0 0 0 0 0
#
# CORNER_LAYOUT, mines at (0,0), (0,2), (1,0). Only (0,1), a "3", is a
# hidden safe cell; (1,1) is a revealed "3" touching all three mines:
#
#     M ? M 1 0
#     M 3 1 1 0
#     1 1 0 0 0

FIRST_CLICK = (4, 4)
ROW_LAYOUT = [(0, 1), (0, 3)]
CORNER_LAYOUT = [(0, 0), (0, 2), (1, 0)]


def start_session(mines, rows=5, cols=5, first=FIRST_CLICK) -> GameSession:
    """Session started with fixed mines and a plain Timer."""
    session = new_session(rows, cols, len(mines), timer=Timer())
    session.start_with_layout(mines, *first)
    return session


# ============================================================================
# Session Fixtures
# ============================================================================

@pytest.fixture
def default_session() -> GameSession:
    """Default 16x16 session with 40 mines and a seeded random source."""
    return GameSession(rng=random.Random(1234), timer=Timer())


@pytest.fixture
def small_session() -> GameSession:
    """4x4 session with 2 mines."""
    return new_session(4, 4, 2, rng=random.Random(7), timer=Timer())


@pytest.fixture
def row_session() -> GameSession:
    """Started session using ROW_LAYOUT."""
    return start_session(ROW_LAYOUT)


@pytest.fixture
def corner_session() -> GameSession:
    """Started session using CORNER_LAYOUT."""
    return start_session(CORNER_LAYOUT)


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


@pytest.fixture
def numbered_cell() -> Cell:
    """Create a revealed cell with adjacent mines."""
    cell = Cell(adjacent_mines=3)
    cell.reveal()
    return cell


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(9, 9, 10)
